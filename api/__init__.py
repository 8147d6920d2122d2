"""
HTTP layer for the Theme Market API.
"""
