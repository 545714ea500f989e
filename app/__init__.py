"""
HTTP API for chemical lookups.
"""
