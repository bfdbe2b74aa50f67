def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready_when_database_answers(client):
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready"}


def test_ready_fails_when_database_errors(client, monkeypatch, fake_db):
    def broken(name):
        raise ConnectionError("database unavailable")

    monkeypatch.setattr(fake_db, "table", broken)
    assert client.get("/ready").status_code == 503


def test_metrics_exposes_portal_counters(client, professional):
    client.post("/api/auth/send-otp", json={"phone": professional["phone"]})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "portal_otp_sent_total" in response.text
