import time
from fastapi.testclient import TestClient
from app.core.config import Settings
from app.main import create_app

def make_client(**overrides) -> TestClient:
    config = Settings(SWEEPER_ENABLED=False, **overrides)
    return TestClient(create_app(config))

def test_generate_returns_address():
    client = make_client()
    response = client.post("/api/generate")

    assert response.status_code == 200
    email = response.json()["email"]
    assert email.endswith("@kasmail.temp")

def test_generate_uses_configured_domain():
    client = make_client(MAIL_DOMAIN="mail.test")
    assert client.post("/api/generate").json()["email"].endswith("@mail.test")

def test_fresh_inbox_is_empty():
    client = make_client()
    email = client.post("/api/generate").json()["email"]

    response = client.get("/api/inbox", params={"email": email})
    assert response.status_code == 200
    assert response.json() == {"messages": []}

def test_receive_then_list_inbox():
    client = make_client()
    email = client.post("/api/generate").json()["email"]

    before_ms = int(time.time() * 1000)
    response = client.post("/api/receive", json={
        "to": email,
        "from": "a@b.com",
        "subject": "Hi",
        "body": "Hello"
    })
    after_ms = int(time.time() * 1000)

    assert response.status_code == 200
    assert response.json()["success"] is True

    messages = client.get("/api/inbox", params={"email": email}).json()["messages"]
    assert len(messages) == 1
    message = messages[0]
    assert set(message.keys()) == {"id", "from", "subject", "body", "timestamp"}
    assert message["from"] == "a@b.com"
    assert message["subject"] == "Hi"
    assert message["body"] == "Hello"
    assert before_ms - 1000 <= message["timestamp"] <= after_ms + 1000

def test_inbox_lists_newest_first():
    client = make_client()
    email = client.post("/api/generate").json()["email"]

    for subject in ["first", "second"]:
        client.post("/api/receive", json={"to": email, "from": "a@b.com", "subject": subject, "body": "x"})

    messages = client.get("/api/inbox", params={"email": email}).json()["messages"]
    assert [m["subject"] for m in messages] == ["second", "first"]
    assert messages[0]["id"] != messages[1]["id"]

def test_receive_unknown_recipient_is_404():
    client = make_client()
    response = client.post("/api/receive", json={
        "to": "nope@kasmail.temp",
        "from": "a@b.com",
        "subject": "Hi",
        "body": "Hello"
    })

    assert response.status_code == 404
    assert response.json() == {"error": "Recipient email not found or expired"}

def test_receive_missing_field_is_400():
    client = make_client()
    email = client.post("/api/generate").json()["email"]

    response = client.post("/api/receive", json={"to": email, "from": "a@b.com", "subject": "Hi"})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields (to, from, subject, body)"}

    # Empty strings count as missing
    response = client.post("/api/receive", json={"to": email, "from": "", "subject": "Hi", "body": "x"})
    assert response.status_code == 400

def test_receive_without_body_is_400():
    client = make_client()
    assert client.post("/api/receive").status_code == 400

def test_receive_malformed_body_is_400():
    client = make_client()
    response = client.post(
        "/api/receive",
        content=b"not json",
        headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert "error" in response.json()

def test_inbox_without_email_is_400():
    client = make_client()
    response = client.get("/api/inbox")

    assert response.status_code == 400
    assert response.json() == {"error": "Email is required"}

def test_inbox_unknown_address_is_404():
    client = make_client()
    response = client.get("/api/inbox", params={"email": "nope@kasmail.temp"})

    assert response.status_code == 404
    assert response.json() == {"error": "Email not found or expired"}

def test_swept_address_is_gone():
    app = create_app(Settings(SWEEPER_ENABLED=False))
    client = TestClient(app)
    email = client.post("/api/generate").json()["email"]

    store = app.state.store
    store.sweep(now=time.time() + store.ttl_seconds + 1)

    assert client.get("/api/inbox", params={"email": email}).status_code == 404
    response = client.post("/api/receive", json={"to": email, "from": "a@b.com", "subject": "Hi", "body": "x"})
    assert response.status_code == 404

def test_apps_do_not_share_state():
    first = make_client()
    second = make_client()
    email = first.post("/api/generate").json()["email"]

    assert second.get("/api/inbox", params={"email": email}).status_code == 404

def test_sweeper_runs_for_app_lifetime():
    app = create_app(Settings(SWEEP_INTERVAL_SECONDS=3600))
    with TestClient(app) as client:
        assert app.state.sweeper.running
        assert client.get("/health").status_code == 200
    assert not app.state.sweeper.running
