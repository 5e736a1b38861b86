"""Integration tests for the collections API."""

import pytest

PREFIX = "/api/v1/collections"


async def _create(client, schema, title="Products"):
    response = await client.post(
        PREFIX, json={"title": title, "description": "Things for sale", "schema": schema}
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_collection(client, product_schema):
    data = await _create(client, product_schema)

    assert data["title"] == "Products"
    assert data["schema"] == product_schema
    assert "created_at" in data
    assert "updated_at" in data


@pytest.mark.asyncio
async def test_create_with_invalid_schema(client):
    response = await client.post(
        PREFIX, json={"title": "Bad", "description": "", "schema": {"type": "nope"}}
    )

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid JSON Schema: ")


@pytest.mark.asyncio
async def test_create_with_missing_fields(client):
    response = await client.post(PREFIX, json={"description": "no title"})

    assert response.status_code == 400
    assert response.json()["error"] == "Request validation failed"


@pytest.mark.asyncio
async def test_list_and_search(client, product_schema):
    await _create(client, product_schema, title="Products")
    await _create(client, product_schema, title="Recipes")

    listed = await client.get(PREFIX)
    searched = await client.get(PREFIX, params={"search": "recip"})

    assert [c["title"] for c in listed.json()] == ["Products", "Recipes"]
    assert [c["title"] for c in searched.json()] == ["Recipes"]


@pytest.mark.asyncio
async def test_get_collection(client, product_schema):
    created = await _create(client, product_schema)

    response = await client.get(f"{PREFIX}/{created['id']}")

    assert response.status_code == 200
    assert response.json()["id"] == created["id"]


@pytest.mark.asyncio
async def test_get_missing_collection(client):
    response = await client.get(f"{PREFIX}/missing")

    assert response.status_code == 404
    assert response.json() == {"error": "Collection with id missing not found"}


@pytest.mark.asyncio
async def test_update_collection(client, product_schema):
    created = await _create(client, product_schema)

    response = await client.put(f"{PREFIX}/{created['id']}", json={"title": "Inventory"})

    assert response.status_code == 200
    assert response.json()["title"] == "Inventory"
    assert response.json()["description"] == "Things for sale"


@pytest.mark.asyncio
async def test_delete_collection_removes_items(client, product_schema, item_store, object_store):
    created = await _create(client, product_schema)
    await client.post(f"{PREFIX}/{created['id']}/items", json={"name": "a", "value": 1})

    response = await client.delete(f"{PREFIX}/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Collection deleted successfully"}
    assert (await client.get(f"{PREFIX}/{created['id']}")).status_code == 404
    assert await object_store.get_object(item_store.key_for(created["id"])) is None


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client):
    response = await client.get(PREFIX, headers={"X-Correlation-ID": "cid_test"})

    assert response.headers["X-Correlation-ID"] == "cid_test"
