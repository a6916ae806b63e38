"""
Top-level API router.

Aggregates the domain routers.  The resource router is included twice:
once at the root (``/resources``) and once under ``/api`` because the
original clients called ``/api/resources``.  Both prefixes expose
identical endpoints.
"""

from fastapi import APIRouter

from .endpoints import resources, swap

router = APIRouter()

router.include_router(resources.router, tags=["resources"])
router.include_router(resources.router, prefix="/api", tags=["resources"])
router.include_router(swap.router, prefix="/swap", tags=["swap"])
