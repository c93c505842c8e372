from fastapi.testclient import TestClient

from serviceshop.db import init_db
from serviceshop.main import app

client = TestClient(app)

ADMIN = {"x-admin-key": "test-admin-key"}


def setup_module(module):
    init_db(reset=True)


def test_c2c_request():
    res = client.post(
        "/api/c2c",
        json={"c2c_brand": "Visa", "c2c_amount": "5000", "c2c_name": "Ravi", "c2c_phone": "9000000000"},
    )
    assert res.status_code == 200
    ref = res.json()["refId"]
    assert ref.startswith("C2C-") and len(ref) == 12

    items = client.get("/api/admin/c2c", headers=ADMIN).json()["items"]
    rec = next(i for i in items if i["id"] == ref)
    assert rec["amount"] == 5000
    assert rec["brand"] == "Visa"


def test_c2c_validation():
    res = client.post("/api/c2c", json={"c2c_brand": "Visa", "c2c_name": "Ravi", "c2c_phone": "9"})
    assert res.status_code == 400
    assert res.json()["message"] == "Missing fields"

    res = client.post(
        "/api/c2c",
        json={"c2c_brand": "Visa", "c2c_amount": "a lot", "c2c_name": "Ravi", "c2c_phone": "9"},
    )
    assert res.status_code == 400
    assert "amount" in res.json()["errors"]


def test_csc_booking():
    res = client.post(
        "/api/csc-booking",
        json={"service": "Aadhaar update", "date": "2024-05-02", "name": "Lakshmi", "phone": "9111111111"},
    )
    assert res.status_code == 200
    token = res.json()["token"]
    assert token.startswith("CSC-")

    items = client.get("/api/admin/csc", headers=ADMIN).json()["items"]
    rec = next(i for i in items if i["id"] == token)
    assert rec["notes"] == ""

    missing = client.post("/api/csc-booking", json={"service": "PAN", "date": "2024-05-02", "name": "L"})
    assert missing.status_code == 400


def test_contact_message():
    res = client.post(
        "/api/contact",
        json={"c_name": "Anil", "c_email": "anil@example.com", "c_subject": "Hours", "c_message": "Open today?"},
    )
    assert res.status_code == 200
    ref = res.json()["refId"]
    assert ref.startswith("CT-")

    second = client.post(
        "/api/contact",
        json={"c_name": "Anil", "c_email": "anil@example.com", "c_subject": "Again", "c_message": "Hello?"},
    ).json()["refId"]

    items = client.get("/api/admin/contacts", headers=ADMIN).json()["items"]
    ids = [i["id"] for i in items]
    assert ids.index(second) < ids.index(ref)
    rec = next(i for i in items if i["id"] == ref)
    assert rec["phone"] == ""
    assert rec["createdAt"]

    missing = client.post("/api/contact", json={"c_name": "Anil", "c_email": "anil@example.com"})
    assert missing.status_code == 400
    assert missing.json()["success"] is False
