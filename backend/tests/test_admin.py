from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from serviceshop.db import init_db
from serviceshop.main import app
from serviceshop.repositories.setting_repo import SettingRepository

client = TestClient(app)

ADMIN = {"x-admin-key": "test-admin-key"}


def setup_module(module):
    init_db(reset=True)


def _book(phone="9999999999"):
    res = client.post(
        "/api/book",
        json={
            "device_type": "Laptop",
            "date_slot": "2024-05-01",
            "description": "Screen crack",
            "contact_phone": phone,
        },
    )
    return res.json()["bookingId"]


def test_admin_routes_require_key():
    paths = [
        "/api/admin/summary",
        "/api/admin/bookings",
        "/api/admin/c2c",
        "/api/admin/csc",
        "/api/admin/contacts",
        "/api/admin/products",
    ]
    for path in paths:
        for headers in ({}, {"x-admin-key": "wrong"}):
            res = client.get(path, headers=headers)
            assert res.status_code == 401, path
            assert res.json() == {"success": False, "message": "Unauthorized: invalid admin key"}

    res = client.post("/api/admin/products", json={"title": "X", "category": "other", "price": 1})
    assert res.status_code == 401
    res = client.patch("/api/admin/products/1", json={"price": 1}, headers={"x-admin-key": ""})
    assert res.status_code == 401


def test_product_create_then_update_scenario():
    res = client.post(
        "/api/admin/products",
        json={"title": "Laptop X", "category": "computers", "price": 50000, "offerPercentage": 10},
        headers=ADMIN,
    )
    assert res.status_code == 200
    product = res.json()["product"]
    assert product["offerPercentage"] == 10
    assert len(product["priceHistory"]) == 1
    assert product["priceHistory"][0]["price"] == 50000
    assert product["priceHistory"][0]["offerPercentage"] == 10

    r2 = client.patch(f"/api/admin/products/{product['id']}", json={"price": 45000}, headers=ADMIN)
    assert r2.status_code == 200
    item = r2.json()["item"]
    assert item["price"] == 45000
    assert len(item["priceHistory"]) == 2
    assert item["priceHistory"][-1]["price"] == 45000
    assert item["priceHistory"][-1]["offerPercentage"] == 10

    r3 = client.patch(f"/api/admin/products/{product['id']}", json={"price": 45000}, headers=ADMIN)
    assert len(r3.json()["item"]["priceHistory"]) == 2


def test_product_validation_payload():
    res = client.post("/api/admin/products", json={"title": "No price", "category": "computers"}, headers=ADMIN)
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Product title, category and price are required."
    assert body["errors"] == {"price": "required"}

    res = client.post(
        "/api/admin/products",
        json={"title": "Too generous", "category": "computers", "price": 10, "offerPercentage": 95},
        headers=ADMIN,
    )
    assert res.status_code == 400
    assert "offerPercentage" in res.json()["errors"]


def test_product_update_not_found():
    res = client.patch("/api/admin/products/424242", json={"price": 1}, headers=ADMIN)
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Product not found"}


def test_hidden_products_only_in_admin_list():
    client.post(
        "/api/admin/products",
        json={"title": "Hidden Mouse", "category": "accessories", "price": 300, "hideProduct": True},
        headers=ADMIN,
    )
    public = [p["title"] for p in client.get("/api/products").json()["items"]]
    admin = [p["title"] for p in client.get("/api/admin/products", headers=ADMIN).json()["items"]]
    assert "Hidden Mouse" not in public
    assert "Hidden Mouse" in admin
    assert set(public) <= set(admin)


def test_booking_update_and_amount_reset():
    booking_id = _book()
    res = client.patch(
        f"/api/admin/bookings/{booking_id}",
        json={"status": "In Repair", "estimate": "1500", "finalAmount": 1800},
        headers=ADMIN,
    )
    assert res.status_code == 200
    booking = res.json()["booking"]
    assert booking["id"] == booking_id
    assert booking["status"] == "In Repair"
    assert booking["estimate"] == 1500
    assert booking["finalAmount"] == 1800

    # status left alone when empty, omitted amounts reset to null
    r2 = client.patch(f"/api/admin/bookings/{booking_id}", json={"status": ""}, headers=ADMIN)
    booking = r2.json()["booking"]
    assert booking["status"] == "In Repair"
    assert booking["estimate"] is None
    assert booking["finalAmount"] is None

    r3 = client.patch(f"/api/admin/bookings/{booking_id}", json={"estimate": "lots"}, headers=ADMIN)
    assert r3.status_code == 400
    assert r3.json()["success"] is False


def test_booking_update_not_found():
    res = client.patch("/api/admin/bookings/TF2000-NOPE0000", json={"status": "Done"}, headers=ADMIN)
    assert res.status_code == 404
    assert res.json()["message"] == "Booking not found"


def test_bookings_list_newest_first():
    older = _book("1111111111")
    newer = _book("2222222222")
    res = client.get("/api/admin/bookings", headers=ADMIN)
    assert res.status_code == 200
    ids = [b["id"] for b in res.json()["bookings"]]
    assert ids.index(newer) < ids.index(older)


def test_summary_counts():
    res = client.get("/api/admin/summary", headers=ADMIN)
    assert res.status_code == 200
    data = res.json()["data"]
    assert set(data) == {"bookingCount", "c2cCount", "cscCount", "contactCount", "productCount"}
    assert data["bookingCount"] >= 3
    assert data["productCount"] >= 2


def test_site_settings():
    assert client.get("/api/settings/announcement").status_code == 404
    res = client.put("/api/admin/settings/announcement", json={"text": "  Closed on Sunday "}, headers=ADMIN)
    assert res.status_code == 200
    assert res.json()["setting"]["text"] == "Closed on Sunday"
    body = client.get("/api/settings/announcement").json()
    assert body == {"success": True, "key": "announcement", "text": "Closed on Sunday"}

    assert client.put("/api/admin/settings/announcement", json={"text": "x"}).status_code == 401


def test_product_stock_too_large_is_a_validation_error():
    res = client.post(
        "/api/admin/products",
        json={"title": "T", "category": "other", "price": 1, "stock": 10**20},
        headers=ADMIN,
    )
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert "stock" in body["errors"]


def test_booking_update_unknown_id_checked_before_amounts():
    res = client.patch(
        "/api/admin/bookings/TF2000-NOPE0000",
        json={"estimate": "lots"},
        headers=ADMIN,
    )
    assert res.status_code == 404
    assert res.json()["message"] == "Booking not found"


def test_setting_read_store_failure(monkeypatch):
    def broken_get(self, key):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(SettingRepository, "get", broken_get)
    res = client.get("/api/settings/announcement")
    assert res.status_code == 500
    assert res.json() == {"success": False, "message": "Server error"}
