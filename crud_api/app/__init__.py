"""
Application package.

The API is split into ``core`` (configuration, logging, errors, the SQLite
store), ``schemas`` (pydantic request and response bodies), ``services``
(the resource repository, the swap calculator and the sum-to-n helpers)
and ``api`` (routers).
"""

from .main import app  # noqa: F401
