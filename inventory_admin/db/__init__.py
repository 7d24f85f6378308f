# inventory_admin/db/__init__.py
"""Relational store access: schema, store contract and entity repository."""
