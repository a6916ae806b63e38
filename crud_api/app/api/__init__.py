"""
HTTP routes.  ``router`` aggregates the endpoint modules in ``endpoints``.
"""
