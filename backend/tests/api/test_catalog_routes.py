"""Catalog Routes — categories, sub-categories, brands, variant types, variants.

Tests:
    - envelope shape on success and failure
    - delete with live dependents answers 400 and keeps the record
    - partial update leaves unspecified fields untouched
    - sub-category under an unknown category id is accepted
    - validation failures answer 400 and publish nothing
"""

from uuid import uuid4


async def create(client, path: str, body: dict) -> dict:
    res = await client.post(f"/api/v1/{path}", json=body)
    assert res.status_code == 200, res.text
    return res.json()["data"]


async def test_create_category_envelope_and_event(client, recorder):
    res = await client.post("/api/v1/categories", json={"name": "Vegetables"})
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Category created successfully."
    assert body["data"]["name"] == "Vegetables"
    assert body["data"]["image"] == "no_url"
    assert recorder.actions() == [("category", "created")]
    assert recorder.events[0].payload == body["data"]


async def test_list_and_get_categories(client, recorder):
    first = await create(client, "categories", {"name": "A"})
    await create(client, "categories", {"name": "B"})

    listed = (await client.get("/api/v1/categories")).json()["data"]
    assert [c["name"] for c in listed] == ["A", "B"]

    res = await client.get(f"/api/v1/categories/{first['id']}")
    assert res.json()["data"] == first
    assert len(recorder.events) == 2


async def test_get_unknown_category_is_404(client):
    res = await client.get(f"/api/v1/categories/{uuid4()}")
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Category not found.", "data": None}


async def test_missing_name_is_400_and_nothing_published(client, recorder):
    res = await client.post("/api/v1/categories", json={})
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert "name" in body["message"]
    assert recorder.events == []


async def test_malformed_id_is_400(client):
    res = await client.get("/api/v1/brands/not-a-uuid")
    assert res.status_code == 400


async def test_partial_update_preserves_other_fields(client, recorder):
    category = await create(client, "categories", {"name": "Dairy", "image": "http://img/d.png"})

    res = await client.put(f"/api/v1/categories/{category['id']}", json={"name": "Milk"})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["name"] == "Milk"
    assert data["image"] == "http://img/d.png"
    assert recorder.actions()[-1] == ("category", "updated")


async def test_update_unknown_is_404(client, recorder):
    res = await client.put(f"/api/v1/brands/{uuid4()}", json={"name": "X"})
    assert res.status_code == 404
    assert recorder.events == []


async def test_sub_category_with_unknown_category_is_created(client):
    data = await create(client, "sub-categories", {"name": "Leafy", "category_id": str(uuid4())})
    assert data["name"] == "Leafy"


async def test_sub_categories_filter_by_category(client):
    category_id = str(uuid4())
    await create(client, "sub-categories", {"name": "In", "category_id": category_id})
    await create(client, "sub-categories", {"name": "Out", "category_id": str(uuid4())})

    res = await client.get("/api/v1/sub-categories", params={"category_id": category_id})
    assert [s["name"] for s in res.json()["data"]] == ["In"]


async def test_category_delete_refused_while_sub_categories_exist(client, recorder):
    category = await create(client, "categories", {"name": "Fruits"})
    await create(client, "sub-categories", {"name": "Citrus", "category_id": category["id"]})
    recorder.events.clear()

    res = await client.delete(f"/api/v1/categories/{category['id']}")
    assert res.status_code == 400
    assert res.json()["success"] is False
    assert recorder.events == []
    assert (await client.get(f"/api/v1/categories/{category['id']}")).status_code == 200


async def test_sub_category_delete_refused_while_brands_exist(client):
    sub = await create(client, "sub-categories", {"name": "Phones", "category_id": str(uuid4())})
    await create(client, "brands", {"name": "Acme", "sub_category_id": sub["id"]})

    res = await client.delete(f"/api/v1/sub-categories/{sub['id']}")
    assert res.status_code == 400
    assert res.json()["message"] == (
        "Cannot delete sub-category. It is associated with one or more brands."
    )


async def test_brand_delete_refused_while_products_reference_it(client):
    brand = await create(client, "brands", {"name": "Acme", "sub_category_id": str(uuid4())})
    await create(client, "products", {
        "name": "Widget", "quantity": 1, "price": 3.5,
        "category_id": str(uuid4()), "sub_category_id": str(uuid4()),
        "brand_id": brand["id"],
    })

    res = await client.delete(f"/api/v1/brands/{brand['id']}")
    assert res.status_code == 400
    assert res.json()["message"] == "Cannot delete brand. Products are referencing it."
    assert (await client.get(f"/api/v1/brands/{brand['id']}")).status_code == 200


async def test_brand_delete_publishes_id(client, recorder):
    brand = await create(client, "brands", {"name": "Solo", "sub_category_id": str(uuid4())})

    res = await client.delete(f"/api/v1/brands/{brand['id']}")
    assert res.status_code == 200
    assert res.json()["data"] == {"id": brand["id"]}
    assert recorder.events[-1].to_wire()["data"] == {"id": brand["id"]}
    assert (await client.get(f"/api/v1/brands/{brand['id']}")).status_code == 404


async def test_variant_type_name_must_be_unique(client):
    await create(client, "variant-types", {"name": "Size"})
    res = await client.post("/api/v1/variant-types", json={"name": "Size"})
    assert res.status_code == 400


async def test_variant_type_delete_refused_while_variants_exist(client):
    vt = await create(client, "variant-types", {"name": "Color", "type": "visual"})
    await create(client, "variants", {"name": "Red", "variant_type_id": vt["id"]})

    res = await client.delete(f"/api/v1/variant-types/{vt['id']}")
    assert res.status_code == 400


async def test_variant_type_clear_type_with_null(client):
    vt = await create(client, "variant-types", {"name": "Weight", "type": "kg"})
    res = await client.put(f"/api/v1/variant-types/{vt['id']}", json={"type": None})
    assert res.json()["data"]["type"] is None
    assert res.json()["data"]["name"] == "Weight"


async def test_variant_duplicate_within_type_is_400(client):
    vt = await create(client, "variant-types", {"name": "Size"})
    await create(client, "variants", {"name": "XL", "variant_type_id": vt["id"]})
    res = await client.post("/api/v1/variants", json={"name": "XL", "variant_type_id": vt["id"]})
    assert res.status_code == 400


async def test_variant_delete_refused_while_product_offers_it(client, recorder):
    vt = await create(client, "variant-types", {"name": "Size"})
    variant = await create(client, "variants", {"name": "L", "variant_type_id": vt["id"]})
    await create(client, "products", {
        "name": "Jacket", "quantity": 2, "price": 80,
        "category_id": str(uuid4()), "sub_category_id": str(uuid4()),
        "variant_type_id": vt["id"], "variant_ids": [variant["id"]],
    })

    res = await client.delete(f"/api/v1/variants/{variant['id']}")
    assert res.status_code == 400
    assert recorder.actions()[-1] == ("product", "created")


async def test_sub_category_delete_refused_while_products_reference_it(client, recorder):
    sub = await create(client, "sub-categories", {"name": "Laptops", "category_id": str(uuid4())})
    await create(client, "products", {
        "name": "Notebook", "quantity": 3, "price": 900,
        "category_id": str(uuid4()), "sub_category_id": sub["id"],
    })
    recorder.events.clear()

    res = await client.delete(f"/api/v1/sub-categories/{sub['id']}")
    assert res.status_code == 400
    assert res.json()["message"] == "Cannot delete sub-category. Products are referencing it."
    assert recorder.events == []
    assert (await client.get(f"/api/v1/sub-categories/{sub['id']}")).status_code == 200


async def test_variant_type_delete_refused_while_products_reference_it(client, recorder):
    vt = await create(client, "variant-types", {"name": "Material"})
    await create(client, "products", {
        "name": "Scarf", "quantity": 5, "price": 12,
        "category_id": str(uuid4()), "sub_category_id": str(uuid4()),
        "variant_type_id": vt["id"],
    })
    recorder.events.clear()

    res = await client.delete(f"/api/v1/variant-types/{vt['id']}")
    assert res.status_code == 400
    assert res.json()["message"] == "Cannot delete variant type. Products are referencing it."
    assert recorder.events == []
    assert (await client.get(f"/api/v1/variant-types/{vt['id']}")).status_code == 200
