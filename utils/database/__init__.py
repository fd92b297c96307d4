"""
Supabase access layer: client, record schemas, table models
"""
