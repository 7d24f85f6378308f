# inventory_admin/__init__.py
"""
Master-data administration for a hardware shop: validation schemas,
soft-delete aware persistence and the HTTP API on top of them.

    uvicorn inventory_admin.main:app --reload
"""
