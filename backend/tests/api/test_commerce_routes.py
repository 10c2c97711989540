"""Commerce Routes — products, coupons, posters and orders.

Tests:
    - product detail carries the shareable link
    - product image slots: validation and slot-wise merge on update
    - coupon CRUD uniqueness and the check-coupon outcomes
    - orders: newest first, per-user listing, status/tracking update
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4


async def create(client, path: str, body: dict) -> dict:
    res = await client.post(f"/api/v1/{path}", json=body)
    assert res.status_code == 200, res.text
    return res.json()["data"]


def product_body(**overrides) -> dict:
    body = {
        "name": "Organic Apples",
        "quantity": 10,
        "price": 4.5,
        "category_id": str(uuid4()),
        "sub_category_id": str(uuid4()),
    }
    body.update(overrides)
    return body


def coupon_body(**overrides) -> dict:
    body = {
        "coupon_code": "SAVE10",
        "discount_type": "percentage",
        "discount_amount": 10,
        "end_date": (datetime.now(timezone.utc) + timedelta(days=7)).isoformat(),
        "status": "active",
    }
    body.update(overrides)
    return body


def order_body(user_id: str = "user-1", **overrides) -> dict:
    body = {
        "user_id": user_id,
        "items": [{"product_id": str(uuid4()), "product_name": "Apples", "quantity": 2, "price": 4.5}],
        "total_price": 9.0,
        "shipping_address": {
            "phone": "555-0100", "street": "1 Main St", "city": "Pune", "country": "IN",
        },
        "payment_method": "cod",
        "order_total": {"subtotal": 9.0, "discount": 0, "total": 9.0},
    }
    body.update(overrides)
    return body


# --- products ----------------------------------------------------------------

async def test_product_detail_has_shareable_link(client):
    product = await create(client, "products", product_body())
    res = await client.get(f"/api/v1/products/{product['id']}")
    data = res.json()["data"]
    assert data["shareable_link"] == f"http://localhost:8000/product/{product['id']}"
    assert data["images"] == []
    assert data["variant_ids"] == []


async def test_product_missing_required_fields_is_400(client, recorder):
    res = await client.post("/api/v1/products", json={"name": "No price"})
    assert res.status_code == 400
    assert recorder.events == []


async def test_product_duplicate_image_slot_is_400(client):
    res = await client.post("/api/v1/products", json=product_body(images=[
        {"image": 1, "url": "a"}, {"image": 1, "url": "b"},
    ]))
    assert res.status_code == 400


async def test_product_update_merges_images(client, recorder):
    product = await create(client, "products", product_body(images=[
        {"image": 1, "url": "one"}, {"image": 2, "url": "two"},
    ]))

    res = await client.put(f"/api/v1/products/{product['id']}", json={
        "price": 5.0, "images": [{"image": 2, "url": "two-v2"}],
    })
    data = res.json()["data"]
    assert data["price"] == 5.0
    assert data["name"] == "Organic Apples"
    assert data["images"] == [{"image": 1, "url": "one"}, {"image": 2, "url": "two-v2"}]
    assert recorder.actions() == [("product", "created"), ("product", "updated")]


async def test_product_delete(client, recorder):
    product = await create(client, "products", product_body(variant_ids=[str(uuid4())]))
    res = await client.delete(f"/api/v1/products/{product['id']}")
    assert res.status_code == 200
    assert recorder.actions()[-1] == ("product", "deleted")
    assert (await client.get(f"/api/v1/products/{product['id']}")).status_code == 404


async def test_category_delete_refused_while_products_reference_it(client):
    category = await create(client, "categories", {"name": "Produce"})
    await create(client, "products", product_body(category_id=category["id"]))

    res = await client.delete(f"/api/v1/categories/{category['id']}")
    assert res.status_code == 400
    assert res.json()["message"] == "Cannot delete category. Products are referencing it."


# --- coupons -----------------------------------------------------------------

async def test_coupon_code_must_be_unique(client):
    await create(client, "coupon-codes", coupon_body())
    res = await client.post("/api/v1/coupon-codes", json=coupon_body())
    assert res.status_code == 400
    assert res.json()["message"] == "Coupon code already exists."


async def test_percentage_over_100_is_rejected(client):
    res = await client.post("/api/v1/coupon-codes", json=coupon_body(discount_amount=120))
    assert res.status_code == 400


async def test_check_coupon_applicable_to_all(client, recorder):
    await create(client, "coupon-codes", coupon_body())
    recorder.events.clear()

    res = await client.post("/api/v1/coupon-codes/check-coupon", json={
        "coupon_code": "SAVE10", "product_ids": [], "purchase_amount": 250,
    })
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Coupon is applicable for all orders."
    assert body["data"]["discount"] == 25.0
    assert body["data"]["coupon"]["coupon_code"] == "SAVE10"
    assert recorder.events == []


async def test_check_unknown_coupon_is_negative_result(client):
    res = await client.post("/api/v1/coupon-codes/check-coupon", json={
        "coupon_code": "NOPE", "purchase_amount": 10,
    })
    assert res.status_code == 200
    assert res.json() == {"success": False, "message": "Coupon not found.", "data": None}


async def test_check_coupon_minimum_purchase(client):
    await create(client, "coupon-codes", coupon_body(minimum_purchase_amount=100))
    res = await client.post("/api/v1/coupon-codes/check-coupon", json={
        "coupon_code": "SAVE10", "purchase_amount": 99,
    })
    assert res.json()["message"] == "Minimum purchase amount not met."


async def test_check_coupon_expired(client):
    past = (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()
    await create(client, "coupon-codes", coupon_body(end_date=past))
    res = await client.post("/api/v1/coupon-codes/check-coupon", json={
        "coupon_code": "SAVE10", "purchase_amount": 50,
    })
    assert res.json()["message"] == "Coupon is expired."


async def test_check_coupon_restricted_to_category(client):
    category_id = str(uuid4())
    await create(client, "coupon-codes", coupon_body(
        coupon_code="FRUIT", discount_type="fixed", discount_amount=5,
        applicable_category_id=category_id,
    ))
    inside = await create(client, "products", product_body(category_id=category_id))
    outside = await create(client, "products", product_body())

    ok = await client.post("/api/v1/coupon-codes/check-coupon", json={
        "coupon_code": "FRUIT", "product_ids": [inside["id"]], "purchase_amount": 20,
    })
    assert ok.json()["success"] is True
    assert ok.json()["data"]["discount"] == 5.0

    mixed = await client.post("/api/v1/coupon-codes/check-coupon", json={
        "coupon_code": "FRUIT", "product_ids": [inside["id"], outside["id"]], "purchase_amount": 20,
    })
    assert mixed.json()["success"] is False


async def test_coupon_scope_cleared_with_null(client):
    coupon = await create(client, "coupon-codes", coupon_body(applicable_product_id=str(uuid4())))
    res = await client.put(f"/api/v1/coupon-codes/{coupon['id']}", json={
        "applicable_product_id": None, "status": "inactive",
    })
    data = res.json()["data"]
    assert data["applicable_product_id"] is None
    assert data["status"] == "inactive"
    assert data["coupon_code"] == "SAVE10"


# --- posters -----------------------------------------------------------------

async def test_poster_crud(client, recorder):
    poster = await create(client, "posters", {"poster_name": "Summer Sale"})
    assert poster["image_url"] == "no_url"

    res = await client.put(f"/api/v1/posters/{poster['id']}", json={"image_url": "http://img/p.png"})
    assert res.json()["data"]["poster_name"] == "Summer Sale"

    res = await client.delete(f"/api/v1/posters/{poster['id']}")
    assert res.status_code == 200
    assert recorder.actions() == [
        ("poster", "created"), ("poster", "updated"), ("poster", "deleted"),
    ]


# --- orders ------------------------------------------------------------------

async def test_orders_listed_newest_first(client):
    first = await create(client, "orders", order_body())
    second = await create(client, "orders", order_body())
    listed = (await client.get("/api/v1/orders")).json()["data"]
    assert [o["id"] for o in listed] == [second["id"], first["id"]]


async def test_orders_by_user(client):
    mine = await create(client, "orders", order_body("alice"))
    await create(client, "orders", order_body("bob"))
    res = await client.get("/api/v1/orders/by-user/alice")
    assert [o["id"] for o in res.json()["data"]] == [mine["id"]]


async def test_order_defaults_and_snapshot(client, recorder):
    order = await create(client, "orders", order_body())
    assert order["order_status"] == "pending"
    assert order["shipping_address"]["city"] == "Pune"
    assert order["items"][0]["quantity"] == 2
    assert recorder.actions() == [("order", "created")]


async def test_order_update_status_and_tracking(client, recorder):
    order = await create(client, "orders", order_body())
    res = await client.put(f"/api/v1/orders/{order['id']}", json={
        "order_status": "shipped", "tracking_url": "http://track/1",
    })
    data = res.json()["data"]
    assert data["order_status"] == "shipped"
    assert data["tracking_url"] == "http://track/1"
    assert data["total_price"] == 9.0
    assert recorder.actions()[-1] == ("order", "updated")


async def test_order_with_no_items_is_400(client):
    res = await client.post("/api/v1/orders", json=order_body(items=[]))
    assert res.status_code == 400


async def test_order_invalid_status_is_400(client):
    order = await create(client, "orders", order_body())
    res = await client.put(f"/api/v1/orders/{order['id']}", json={"order_status": "lost"})
    assert res.status_code == 400
