import pytest


VALID_ACCOUNT = {
    "transit_number": "12345",
    "institution_number": "001",
    "account_number": "123456789",
    "business_name": "Doe Pharmacy Services",
    "business_number": "123456789",
}


def test_no_bank_account_on_file(client, auth_headers):
    response = client.get("/api/user/bank-account", headers=auth_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "No bank account on file"


def test_save_bank_account(client, fake_db, auth_headers):
    response = client.post("/api/user/bank-account", json=VALID_ACCOUNT, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"]["account_number"] == "*****6789"
    assert fake_db.rows("bank_accounts")[0]["account_number"] == "123456789"
    assert fake_db.rows("professionals")[0]["has_bank"] is True

    loaded = client.get("/api/user/bank-account", headers=auth_headers).json()["data"]
    assert loaded["transit_number"] == "12345"
    assert loaded["account_number"] == "*****6789"


def test_save_bank_account_replaces_existing(client, fake_db, auth_headers):
    client.post("/api/user/bank-account", json=VALID_ACCOUNT, headers=auth_headers)
    client.post("/api/user/bank-account", json={**VALID_ACCOUNT, "account_number": "9876543"}, headers=auth_headers)

    rows = fake_db.rows("bank_accounts")
    assert len(rows) == 1
    assert rows[0]["account_number"] == "9876543"


@pytest.mark.parametrize("field,value", [
    ("transit_number", "1234"),
    ("transit_number", "12a45"),
    ("transit_number", "12345\n"),
    ("institution_number", "0001"),
    ("institution_number", "١٢٣"),
    ("account_number", "123456"),
    ("account_number", "1234567\n"),
    ("account_number", "１２３４５６７"),
    ("account_number", "1234567890123"),
    ("business_name", "   "),
    ("business_number", None),
])
def test_save_bank_account_rejects_invalid_field(client, fake_db, auth_headers, field, value):
    response = client.post("/api/user/bank-account", json={**VALID_ACCOUNT, field: value}, headers=auth_headers)

    assert response.status_code == 400
    assert list(response.json()["detail"]["errors"]) == [field]
    assert fake_db.rows("bank_accounts") == []


def test_save_bank_account_reports_every_missing_field(client, auth_headers):
    response = client.post("/api/user/bank-account", json={}, headers=auth_headers)

    assert response.status_code == 400
    assert set(response.json()["detail"]["errors"]) == set(VALID_ACCOUNT)


def test_bank_account_requires_auth(client):
    assert client.get("/api/user/bank-account").status_code == 401
