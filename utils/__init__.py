"""
Utilities - constants and small helpers
"""
