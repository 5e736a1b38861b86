"""Integration tests for the items API."""

import pytest


async def _collection(client, schema) -> str:
    response = await client.post(
        "/api/v1/collections",
        json={"title": "Products", "description": "", "schema": schema},
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


@pytest.fixture
def items_url():
    def build(collection_id: str, suffix: str = "") -> str:
        return f"/api/v1/collections/{collection_id}/items{suffix}"

    return build


@pytest.mark.asyncio
async def test_add_and_get_item(client, product_schema, items_url):
    cid = await _collection(client, product_schema)

    created = await client.post(items_url(cid), json={"name": "Apple", "value": 1})
    item = created.json()
    fetched = await client.get(items_url(cid, f"/{item['id']}"))

    assert created.status_code == 201
    assert len(item["id"]) == 26
    assert fetched.status_code == 200
    assert fetched.json() == item


@pytest.mark.asyncio
async def test_add_invalid_item(client, product_schema, items_url):
    cid = await _collection(client, product_schema)

    response = await client.post(items_url(cid), json={"name": "Apple"})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Item validation failed: ")
    assert "value" in response.json()["error"]


@pytest.mark.asyncio
async def test_add_reports_every_violation(client, product_schema, items_url):
    cid = await _collection(client, product_schema)

    response = await client.post(items_url(cid), json={"name": 1, "value": "x"})

    assert response.status_code == 400
    assert len(response.json()["errors"]) == 2


@pytest.mark.asyncio
async def test_add_non_object_body(client, product_schema, items_url):
    cid = await _collection(client, product_schema)

    response = await client.post(items_url(cid), json=["not", "an", "object"])

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_items_of_missing_collection(client, items_url):
    response = await client.get(items_url("missing"))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_items_in_order(client, product_schema, items_url):
    cid = await _collection(client, product_schema)
    for name in ("a", "b", "c"):
        await client.post(items_url(cid), json={"name": name, "value": 1})

    response = await client.get(items_url(cid))

    assert [item["name"] for item in response.json()] == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_update_item(client, product_schema, items_url):
    cid = await _collection(client, product_schema)
    item = (await client.post(items_url(cid), json={"name": "a", "value": 1})).json()

    response = await client.put(
        items_url(cid, f"/{item['id']}"), json={"name": "b", "value": 2}
    )

    assert response.status_code == 200
    assert response.json() == {"id": item["id"], "name": "b", "value": 2}


@pytest.mark.asyncio
async def test_update_missing_item(client, product_schema, items_url):
    cid = await _collection(client, product_schema)

    response = await client.put(items_url(cid, "/missing"), json={"name": "b", "value": 2})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_item(client, product_schema, items_url):
    cid = await _collection(client, product_schema)
    item = (await client.post(items_url(cid), json={"name": "a", "value": 1})).json()

    response = await client.delete(items_url(cid, f"/{item['id']}"))

    assert response.status_code == 200
    assert response.json() == {"message": "Item deleted successfully"}
    assert (await client.get(items_url(cid, f"/{item['id']}"))).status_code == 404


@pytest.mark.asyncio
async def test_search_items(client, product_schema, items_url):
    cid = await _collection(client, product_schema)
    for name, value in (("Apple Product", 100), ("Banana", 200), ("Apple Juice", 150)):
        await client.post(items_url(cid), json={"name": name, "value": value})

    response = await client.get(items_url(cid, "/search"), params={"q": "Aple"})
    body = response.json()

    assert response.status_code == 200
    assert body["query"] == "Aple"
    assert body["count"] == len(body["results"])
    names = [item["name"] for item in body["results"]]
    assert "Apple Product" in names
    assert "Apple Juice" in names


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{}, {"q": ""}, {"q": "  "}])
async def test_search_requires_query(client, product_schema, items_url, params):
    cid = await _collection(client, product_schema)

    response = await client.get(items_url(cid, "/search"), params=params)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing query parameter: q"}
