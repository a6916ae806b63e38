import asyncio
import time

import pytest

from crud_api.app.core.errors import NotFoundError, ValidationError
from crud_api.app.schemas.resource import ResourceCreate, ResourceFilter, ResourceUpdate


def _create(repo, **fields):
    return asyncio.run(repo.create(ResourceCreate(**fields)))


def test_create_with_only_name(repo):
    resource = _create(repo, name="Widget")
    assert resource.id > 0
    assert resource.status == "active"
    assert resource.updated_at >= resource.created_at


def test_create_empty_optional_fields_are_stored_as_null(repo):
    resource = _create(repo, name="Widget", description="", category="", status="")
    assert resource.description is None
    assert resource.category is None
    assert resource.status == "active"


@pytest.mark.parametrize(
    "fields",
    [
        {"description": "d", "category": "c", "status": "inactive"},
        {"name": "", "description": "d"},
        {"name": None},
    ],
)
def test_create_without_name_fails_before_store(repo, store, fields):
    with pytest.raises(ValidationError, match="Name is required"):
        _create(repo, **fields)
    assert store.fetch_one("SELECT COUNT(*) AS n FROM resources")["n"] == 0


def test_list_returns_every_created_record_newest_first(repo):
    names = [f"item-{i}" for i in range(5)]
    for name in names:
        _create(repo, name=name)
    resources, count = asyncio.run(repo.list())
    assert count == 5
    assert [r.name for r in resources] == list(reversed(names))


def test_list_filters(repo):
    _create(repo, name="Laptop", category="electronics", status="active")
    _create(repo, name="Phone", category="electronics", status="inactive")
    _create(repo, name="Book", category="books", status="active")

    resources, count = asyncio.run(repo.list(ResourceFilter(name="o")))
    assert count == 3

    resources, count = asyncio.run(repo.list(ResourceFilter(category="electronics", status="active")))
    assert count == 1
    assert resources[0].name == "Laptop"

    resources, count = asyncio.run(repo.list(ResourceFilter(category="toys")))
    assert (resources, count) == ([], 0)


def test_get_missing(repo):
    with pytest.raises(NotFoundError):
        asyncio.run(repo.get(12345))


def test_update_changes_only_supplied_fields(repo):
    created = _create(repo, name="Old", description="keep me", category="c")
    time.sleep(0.01)
    changes = asyncio.run(repo.update(created.id, ResourceUpdate(name="X")))
    assert changes == 1

    updated = asyncio.run(repo.get(created.id))
    assert updated.name == "X"
    assert updated.description == "keep me"
    assert updated.category == "c"
    assert updated.status == "active"
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at


def test_update_with_no_fields(repo):
    created = _create(repo, name="Old")
    with pytest.raises(ValidationError, match="No fields to update"):
        asyncio.run(repo.update(created.id, ResourceUpdate()))


def test_update_missing(repo):
    with pytest.raises(NotFoundError):
        asyncio.run(repo.update(999, ResourceUpdate(name="X")))
    with pytest.raises(NotFoundError):
        asyncio.run(repo.update(999, ResourceUpdate()))


def test_update_null_status_is_rejected(repo):
    created = _create(repo, name="Old")
    with pytest.raises(ValidationError):
        asyncio.run(repo.update(created.id, ResourceUpdate(status=None)))


def test_id_outside_integer_range_is_not_found(repo):
    huge = 2**64
    with pytest.raises(NotFoundError):
        asyncio.run(repo.get(huge))
    with pytest.raises(NotFoundError):
        asyncio.run(repo.update(huge, ResourceUpdate(name="X")))
    with pytest.raises(NotFoundError):
        asyncio.run(repo.delete(-huge))


def test_delete_then_get_is_not_found(repo):
    created = _create(repo, name="Gone")
    asyncio.run(repo.delete(created.id))
    with pytest.raises(NotFoundError):
        asyncio.run(repo.get(created.id))
    with pytest.raises(NotFoundError):
        asyncio.run(repo.delete(created.id))
