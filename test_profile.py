import bcrypt
import pytest

from conftest import PASSWORD, make_professional


def test_get_profile(client, fake_db, professional, auth_headers):
    fake_db.table("professional_languages").insert([
        {"professional_id": professional["id"], "name": "English"},
        {"professional_id": professional["id"], "name": "Punjabi"},
    ]).execute()

    response = client.get("/api/user/profile", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "John Doe"
    assert data["languages"] == ["English", "Punjabi"]
    assert data["skills"] == []
    assert "password_hash" not in data


def test_update_profile_ignores_empty_personal_fields(client, fake_db, auth_headers):
    response = client.patch(
        "/api/user/profile",
        json={"first_name": "Jonathan", "last_name": "", "business_name": ""},
        headers=auth_headers,
    )

    assert response.status_code == 200
    stored = fake_db.rows("professionals")[0]
    assert stored["first_name"] == "Jonathan"
    assert stored["last_name"] == "Doe"
    # Business fields are applied even when empty
    assert stored["business_name"] == ""
    assert response.json()["data"]["name"] == "Jonathan Doe"


def test_update_profile_keeps_unsent_fields(client, fake_db, auth_headers):
    client.patch("/api/user/profile", json={"experience": 20}, headers=auth_headers)

    stored = fake_db.rows("professionals")[0]
    assert stored["experience"] == 20
    assert stored["gst"] == "123456789"


@pytest.mark.parametrize("field,value,message", [
    ("email", "taken@example.com", "Email is already taken"),
    ("phone", "+19998887777", "Phone number is already taken"),
])
def test_update_profile_rejects_taken_contact(client, fake_db, auth_headers, field, value, message):
    make_professional(fake_db, id="other", email="taken@example.com", phone="+19998887777")

    response = client.patch("/api/user/profile", json={field: value}, headers=auth_headers)

    assert response.status_code == 409
    assert response.json()["detail"] == message


def test_update_profile_rejects_malformed_email(client, fake_db, auth_headers, professional):
    response = client.patch("/api/user/profile", json={"email": "not-an-email"}, headers=auth_headers)

    assert response.status_code == 422
    assert fake_db.rows("professionals")[0]["email"] == professional["email"]


def test_update_profile_ignores_blank_contact(client, fake_db, auth_headers, professional):
    response = client.patch("/api/user/profile", json={"email": "  ", "phone": ""}, headers=auth_headers)

    assert response.status_code == 200
    stored = fake_db.rows("professionals")[0]
    assert stored["email"] == professional["email"]
    assert stored["phone"] == professional["phone"]


def test_update_profile_allows_own_email(client, auth_headers, professional):
    response = client.patch("/api/user/profile", json={"email": professional["email"]}, headers=auth_headers)
    assert response.status_code == 200


def test_upload_picture(client, fake_db, professional, auth_headers):
    response = client.post(
        "/api/user/profile/picture",
        files={"file": ("me.png", b"\x89PNG fake image", "image/png")},
        headers=auth_headers,
    )

    assert response.status_code == 200
    url = response.json()["url"]
    assert url.startswith(f"https://storage.test/profile-pictures/profile-{professional['id']}-")
    assert url.endswith(".png")
    assert fake_db.rows("professionals")[0]["profile_image"] == url
    assert len(fake_db.files) == 1


def test_upload_picture_rejects_non_image(client, auth_headers):
    response = client.post(
        "/api/user/profile/picture",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_upload_picture_rejects_empty_file(client, auth_headers):
    response = client.post(
        "/api/user/profile/picture",
        files={"file": ("me.png", b"", "image/png")},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Uploaded file is empty"


def test_upload_picture_requires_file(client, auth_headers):
    response = client.post("/api/user/profile/picture", headers=auth_headers)
    assert response.status_code == 400


def test_change_password(client, fake_db, professional, auth_headers):
    response = client.patch(
        "/api/user/password",
        json={"old_password": PASSWORD, "password": "NewPassword456", "password_confirmation": "NewPassword456"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    stored_hash = fake_db.rows("professionals")[0]["password_hash"]
    assert bcrypt.checkpw(b"NewPassword456", stored_hash.encode("utf-8"))

    login = client.post("/api/auth/login", json={"email": professional["email"], "password": "NewPassword456"})
    assert login.status_code == 200


def test_change_password_wrong_current(client, auth_headers):
    response = client.patch(
        "/api/user/password",
        json={"old_password": "Wrong1234", "password": "NewPassword456", "password_confirmation": "NewPassword456"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Current password is incorrect"


@pytest.mark.parametrize("body,field", [
    ({"password": "NewPassword456", "password_confirmation": "NewPassword456"}, "old_password"),
    ({"old_password": PASSWORD, "password": "short", "password_confirmation": "short"}, "password"),
    ({"old_password": PASSWORD, "password": PASSWORD, "password_confirmation": PASSWORD}, "password"),
    ({"old_password": PASSWORD, "password": "NewPassword456", "password_confirmation": "Other4567"}, "password_confirmation"),
])
def test_change_password_field_errors(client, auth_headers, body, field):
    response = client.patch("/api/user/password", json=body, headers=auth_headers)

    assert response.status_code == 400
    assert field in response.json()["detail"]["errors"]


def test_delete_account_removes_owned_rows(client, fake_db, professional, auth_headers):
    fake_db.table("professional_skills").insert({"professional_id": professional["id"], "name": "Blister pack"}).execute()
    fake_db.table("answers").insert({"professional_id": professional["id"], "question_id": 3, "answer": True}).execute()
    make_professional(fake_db, id="other", email="other@example.com", phone="+19998887777")

    response = client.delete("/api/user/account", headers=auth_headers)

    assert response.status_code == 200
    assert [p["id"] for p in fake_db.rows("professionals")] == ["other"]
    assert fake_db.rows("professional_skills") == []
    assert fake_db.rows("answers") == []
    assert client.get("/api/user/profile", headers=auth_headers).status_code == 401


def test_settings_round_trip_allows_custom_names(client, fake_db, auth_headers):
    response = client.post(
        "/api/user/settings/softwares",
        json={"softwares": ["Kroll", "Nexxsys", ""]},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["data"] == ["Kroll", "Nexxsys"]
    assert fake_db.rows("professionals")[0]["has_softwares"] is True

    listed = client.get("/api/user/settings/softwares", headers=auth_headers)
    assert listed.json()["data"] == ["Kroll", "Nexxsys"]


def test_settings_clearing_resets_flag(client, fake_db, auth_headers):
    client.post("/api/user/settings/skills", json={"skills": ["Blister pack"]}, headers=auth_headers)
    client.post("/api/user/settings/skills", json={"skills": []}, headers=auth_headers)

    assert fake_db.rows("professional_skills") == []
    assert fake_db.rows("professionals")[0]["has_skills"] is False


def test_settings_requires_array(client, auth_headers):
    response = client.post("/api/user/settings/languages", json={}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Languages must be an array"


def test_settings_unknown_kind(client, auth_headers):
    assert client.get("/api/user/settings/hobbies", headers=auth_headers).status_code == 404
