"""
Session and in-memory state for the admin panel
"""
