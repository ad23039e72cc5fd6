def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_intake_routes_are_mounted_under_api_prefix(client, store):
    assert client.post("/api/quote", json={}).status_code == 400
    assert client.post("/api/contact", json={}).status_code == 400
    assert client.post("/api/send-order", data={}).status_code == 400


def test_quote_only_accepts_post(client):
    assert client.get("/api/quote").status_code == 405
