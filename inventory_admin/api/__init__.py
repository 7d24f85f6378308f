# inventory_admin/api/__init__.py
"""HTTP routers."""
