"""
Repository for resources.

This module is the only place that issues SQL against the ``resources``
table.  It encapsulates filtering, partial updates and the not-found rules
of the CRUD API:

* ``create`` rejects a missing or empty ``name`` before touching the store.
* ``list`` combines the optional ``name`` (case-sensitive substring),
  ``category`` and ``status`` predicates with AND and returns the newest
  records first.
* ``update`` and ``delete`` are single conditional statements keyed on
  ``id``; zero affected rows means the resource does not exist.

All queries use parameterized statements.  The repository receives its
:class:`~crud_api.app.core.db.ResourceStore` through the constructor.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from crud_api.app.core.db import ResourceStore
from crud_api.app.core.errors import NotFoundError, ValidationError
from crud_api.app.schemas.resource import (
    ResourceCreate,
    ResourceFilter,
    ResourceRead,
    ResourceUpdate,
)

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "active"
UPDATABLE_FIELDS = ("name", "description", "category", "status")
# Columns that are NOT NULL in the table; an explicit null cannot be stored.
REQUIRED_FIELDS = ("name", "status")
# SQLite INTEGER is a signed 64-bit value.
SQLITE_MIN_INTEGER = -(2**63)
SQLITE_MAX_INTEGER = 2**63 - 1


def utcnow() -> str:
    """Current UTC time as sortable text with microsecond resolution."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S.%f")


def _storable_id(resource_id: int) -> bool:
    return SQLITE_MIN_INTEGER <= resource_id <= SQLITE_MAX_INTEGER


class ResourceRepository:
    """Translates resource operations into queries against a store."""

    def __init__(self, store: ResourceStore) -> None:
        self.store = store

    async def create(self, data: ResourceCreate) -> ResourceRead:
        """Insert a new resource and return the effective record.

        Empty ``description``/``category`` values are stored as NULL and an
        empty ``status`` falls back to ``"active"``.
        """
        if not data.name:
            raise ValidationError("Name is required")
        now = utcnow()
        _, resource_id = self.store.execute(
            """
            INSERT INTO resources (name, description, category, status, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                data.name,
                data.description or None,
                data.category or None,
                data.status or DEFAULT_STATUS,
                now,
                now,
            ),
        )
        logger.info("Created resource %s", resource_id)
        return await self.get(resource_id)

    async def list(self, filters: Optional[ResourceFilter] = None) -> Tuple[List[ResourceRead], int]:
        """Return matching resources, newest first, and their count."""
        filters = filters or ResourceFilter()
        where_clauses: List[str] = []
        params: List[Any] = []
        if filters.name:
            # instr() is case-sensitive, unlike LIKE for ASCII text
            where_clauses.append("instr(name, ?) > 0")
            params.append(filters.name)
        if filters.category:
            where_clauses.append("category = ?")
            params.append(filters.category)
        if filters.status:
            where_clauses.append("status = ?")
            params.append(filters.status)
        query = "SELECT * FROM resources"
        if where_clauses:
            query += " WHERE " + " AND ".join(where_clauses)
        # id breaks ties between rows created within the same timestamp
        query += " ORDER BY created_at DESC, id DESC"
        rows = self.store.fetch_all(query, params)
        resources = [self._row_to_resource(row) for row in rows]
        return resources, len(resources)

    async def get(self, resource_id: int) -> ResourceRead:
        if not _storable_id(resource_id):
            raise NotFoundError("Resource not found")
        row = self.store.fetch_one("SELECT * FROM resources WHERE id = ?", (resource_id,))
        if row is None:
            raise NotFoundError("Resource not found")
        return self._row_to_resource(row)

    async def exists(self, resource_id: int) -> bool:
        if not _storable_id(resource_id):
            return False
        row = self.store.fetch_one("SELECT 1 AS ok FROM resources WHERE id = ?", (resource_id,))
        return row is not None

    async def update(self, resource_id: int, data: ResourceUpdate) -> int:
        """Apply the explicitly supplied fields and bump ``updated_at``.

        Returns the number of rows changed, which is 1 on success.
        """
        fields: Dict[str, Any] = {
            key: value for key, value in data.model_dump(exclude_unset=True).items() if key in UPDATABLE_FIELDS
        }
        if not fields:
            if not await self.exists(resource_id):
                raise NotFoundError("Resource not found")
            raise ValidationError("No fields to update")
        for key in REQUIRED_FIELDS:
            if key in fields and fields[key] is None:
                if not await self.exists(resource_id):
                    raise NotFoundError("Resource not found")
                raise ValidationError(f"{key.capitalize()} cannot be null")
        if not _storable_id(resource_id):
            raise NotFoundError("Resource not found")

        assignments = [f"{key} = ?" for key in fields]
        assignments.append("updated_at = ?")
        params: List[Any] = list(fields.values())
        params.extend([utcnow(), resource_id])
        changes, _ = self.store.execute(
            f"UPDATE resources SET {', '.join(assignments)} WHERE id = ?",
            params,
        )
        if changes == 0:
            raise NotFoundError("Resource not found")
        logger.info("Updated resource %s (%s)", resource_id, ", ".join(fields))
        return changes

    async def delete(self, resource_id: int) -> None:
        if not _storable_id(resource_id):
            raise NotFoundError("Resource not found")
        changes, _ = self.store.execute("DELETE FROM resources WHERE id = ?", (resource_id,))
        if changes == 0:
            raise NotFoundError("Resource not found")
        logger.info("Deleted resource %s", resource_id)

    @staticmethod
    def _row_to_resource(row: Dict[str, Any]) -> ResourceRead:
        return ResourceRead(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            category=row["category"],
            status=row["status"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
