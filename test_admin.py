import pytest

from conftest import make_professional
from portal.utils.api_key import hash_api_key

API_KEY = "test-key"


@pytest.fixture
def api_headers(monkeypatch):
    monkeypatch.setenv("API_KEY_HASH", hash_api_key(API_KEY))
    return {"X-API-Key": API_KEY}


def _new_shift(**overrides):
    body = {
        "date": "29-07-2030",
        "from": "19:12",
        "to": "23:12",
        "hours": 4,
        "address": "10903 103 Avenue Northwest",
        "city": "Edmonton",
        "district_id": 4,
        "pharmacy_name": "ABC Pharmacy",
        "hour_rate": 55,
        "languages": ["English"],
    }
    body.update(overrides)
    return body


def test_missing_api_key(client):
    response = client.post("/api/admin/shifts", json=_new_shift())
    assert response.status_code == 401


def test_wrong_api_key(client, api_headers):
    response = client.post("/api/admin/shifts", json=_new_shift(), headers={"X-API-Key": "nope"})
    assert response.status_code == 403


def test_back_office_disabled_without_hash(client):
    response = client.post("/api/admin/shifts", json=_new_shift(), headers={"X-API-Key": API_KEY})
    assert response.status_code == 503


def test_create_shift_is_open_and_in_feed(client, fake_db, api_headers, auth_headers):
    response = client.post("/api/admin/shifts", json=_new_shift(), headers=api_headers)

    assert response.status_code == 201
    shift = response.json()["data"]
    assert shift["status"] == "open"
    assert shift["from"] == "19:12"

    feed = client.get("/api/shifts", headers=auth_headers).json()["data"]
    assert [s["id"] for s in feed["29-07-2030"]] == [shift["id"]]
    assert feed["29-07-2030"][0]["total"] == 286


def test_create_shift_validates_date_format(client, api_headers):
    response = client.post("/api/admin/shifts", json=_new_shift(date="2030-07-29"), headers=api_headers)
    assert response.status_code == 422


def test_assign_shift_closes_it(client, fake_db, api_headers, professional, auth_headers):
    shift_id = client.post("/api/admin/shifts", json=_new_shift(), headers=api_headers).json()["data"]["id"]

    response = client.post(
        f"/api/admin/shifts/{shift_id}/assign",
        json={"professional_id": professional["id"]},
        headers=api_headers,
    )

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "assigned"
    assert fake_db.rows("shifts")[0]["status"] == "closed"

    mine = client.get("/api/shifts/my-shifts?status=assigned", headers=auth_headers).json()["data"]
    assert [s["id"] for s in mine] == [shift_id]
    assert client.get("/api/shifts", headers=auth_headers).json()["data"] == {}


def test_assign_shift_twice_conflicts(client, fake_db, api_headers, professional):
    shift_id = client.post("/api/admin/shifts", json=_new_shift(), headers=api_headers).json()["data"]["id"]
    other = make_professional(fake_db, id="other", email="other@example.com", phone="+19998887777")
    body = {"professional_id": professional["id"]}

    client.post(f"/api/admin/shifts/{shift_id}/assign", json=body, headers=api_headers)
    response = client.post(
        f"/api/admin/shifts/{shift_id}/assign",
        json={"professional_id": other["id"]},
        headers=api_headers,
    )

    assert response.status_code == 409


@pytest.mark.parametrize("shift_id,professional_id", [(999, "pro-1"), (None, "ghost")])
def test_assign_unknown_shift_or_professional(client, api_headers, professional, shift_id, professional_id):
    if shift_id is None:
        shift_id = client.post("/api/admin/shifts", json=_new_shift(), headers=api_headers).json()["data"]["id"]

    response = client.post(
        f"/api/admin/shifts/{shift_id}/assign",
        json={"professional_id": professional_id},
        headers=api_headers,
    )

    assert response.status_code == 404


def test_approve_professional(client, fake_db, api_headers):
    pending = make_professional(fake_db, status="pending", is_verified=False)

    response = client.post(f"/api/admin/professionals/{pending['id']}/approve", headers=api_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "active"
    assert data["is_verified"] is True
    assert "password_hash" not in data
    assert fake_db.rows("professionals")[0]["status"] == "active"


def test_approve_unknown_professional(client, api_headers):
    response = client.post("/api/admin/professionals/ghost/approve", headers=api_headers)
    assert response.status_code == 404
