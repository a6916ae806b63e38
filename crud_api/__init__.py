"""
Top-level package for the CRUD API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``crud_api.app.main:app``.
"""

__all__ = []
