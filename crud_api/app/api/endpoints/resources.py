"""
Resource endpoints.

These routes expose the CRUD API for resources.  Handlers only translate
HTTP into repository calls; the repository raises ``ValidationError`` /
``NotFoundError`` / ``StorageError`` and the exception handlers registered
in ``core.errors`` turn those into ``{"error": ...}`` bodies with the
matching status code.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, Request, status

from crud_api.app.schemas.resource import (
    MessageResponse,
    ResourceCreate,
    ResourceCreated,
    ResourceFilter,
    ResourceList,
    ResourceRead,
    ResourceUpdate,
    ResourceUpdated,
)
from crud_api.app.services.resource_repository import (
    SQLITE_MAX_INTEGER,
    SQLITE_MIN_INTEGER,
    ResourceRepository,
)

router = APIRouter()

# Ids outside the SQLite INTEGER range cannot name a row; they fail path
# validation and are reported as not found.
ResourceId = Annotated[int, Path(ge=SQLITE_MIN_INTEGER, le=SQLITE_MAX_INTEGER)]


def get_repository(request: Request) -> ResourceRepository:
    """Build a repository around the store attached to the running app."""
    return ResourceRepository(request.app.state.store)


@router.post("/resources", response_model=ResourceCreated, status_code=status.HTTP_201_CREATED)
async def create_resource(
    resource_in: Optional[ResourceCreate] = None,
    repo: ResourceRepository = Depends(get_repository),
) -> ResourceCreated:
    """Create a new resource.  ``name`` is required; ``status`` defaults to ``active``."""
    resource = await repo.create(resource_in or ResourceCreate())
    return ResourceCreated(**resource.model_dump())


@router.get("/resources", response_model=ResourceList)
async def list_resources(
    name: Optional[str] = Query(None, description="Case-sensitive substring of the name"),
    category: Optional[str] = Query(None, description="Exact category"),
    status: Optional[str] = Query(None, description="Exact status"),
    repo: ResourceRepository = Depends(get_repository),
) -> ResourceList:
    """List resources, newest first.  Filters combine with AND."""
    resources, count = await repo.list(ResourceFilter(name=name, category=category, status=status))
    return ResourceList(data=resources, count=count)


@router.get("/resources/{resource_id}", response_model=ResourceRead)
async def get_resource(
    resource_id: ResourceId,
    repo: ResourceRepository = Depends(get_repository),
) -> ResourceRead:
    return await repo.get(resource_id)


@router.put("/resources/{resource_id}", response_model=ResourceUpdated)
async def update_resource(
    resource_id: ResourceId,
    resource_in: Optional[ResourceUpdate] = None,
    repo: ResourceRepository = Depends(get_repository),
) -> ResourceUpdated:
    """Update the fields present in the body.  An empty body is rejected."""
    changes = await repo.update(resource_id, resource_in or ResourceUpdate())
    return ResourceUpdated(changes=changes)


@router.delete("/resources/{resource_id}", response_model=MessageResponse)
async def delete_resource(
    resource_id: ResourceId,
    repo: ResourceRepository = Depends(get_repository),
) -> MessageResponse:
    await repo.delete(resource_id)
    return MessageResponse(message="Resource deleted successfully")
