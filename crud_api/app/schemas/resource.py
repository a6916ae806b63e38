"""
Pydantic schemas for resources.

A resource is the single entity managed by the CRUD API: a named item
with an optional description and category and a free-form status string.
The create schema leaves ``name`` optional on purpose so that a missing
name is reported by the repository as ``Name is required`` (HTTP 400)
rather than as a generic schema error.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResourceCreate(BaseModel):
    """Schema for creating a new resource."""

    name: Optional[str] = Field(None, description="Resource name; required and non-empty")
    description: Optional[str] = Field(None, description="Free text description")
    category: Optional[str] = Field(None, description="Category used for exact-match filtering")
    status: Optional[str] = Field(None, description="Status string; defaults to 'active'")


class ResourceUpdate(BaseModel):
    """Schema for updating an existing resource.

    All fields are optional; only fields present in the request body are
    written, including empty strings.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None


class ResourceFilter(BaseModel):
    """Optional list predicates, combined with AND.  Empty strings are ignored."""

    name: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None


class ResourceRead(BaseModel):
    """Schema for reading a resource."""

    id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    status: str
    created_at: str
    updated_at: str

    model_config = ConfigDict(from_attributes=True)


class ResourceCreated(ResourceRead):
    message: str = "Resource created successfully"


class ResourceList(BaseModel):
    data: List[ResourceRead]
    count: int


class ResourceUpdated(BaseModel):
    message: str = "Resource updated successfully"
    changes: int


class MessageResponse(BaseModel):
    message: str
