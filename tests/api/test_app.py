"""Tests for the FastAPI application."""

import pytest
from fastapi.testclient import TestClient

from conftest import PNG_BYTES, FakeProvider
from trust_lens.api.app import app
from trust_lens.infrastructure.dependencies import ServiceContainer, get_service_container
from trust_lens.infrastructure.settings import Settings

PHISHING_TEXT = "Your account is locked, verify at http://bit.ly/x"


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def container(tmp_path, provider) -> ServiceContainer:
    return ServiceContainer(Settings(data_dir=str(tmp_path)), provider=provider)


@pytest.fixture
def client(container):
    """Test client backed by a fresh container."""
    app.dependency_overrides[get_service_container] = lambda: container
    yield TestClient(app)
    app.dependency_overrides.clear()


def _analyze(client, detector_id: str = "phishing", text: str = PHISHING_TEXT) -> dict:
    client.put("/session/detector", json={"detector_id": detector_id})
    client.put("/session/text", json={"text": text})
    response = client.post("/session/submit")
    assert response.status_code == 200
    return response.json()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["provider"] == "Fake"
    assert set(data["providers"]) == {"gemini", "openai"}


def test_detectors(client):
    detectors = client.get("/detectors").json()

    assert len(detectors) == 10
    assert detectors[0]["id"] == "news"
    assert detectors[0]["allowed_inputs"] == ["image", "text", "url", "video"]
    assert detectors[-1]["tool_only"] is True
    assert "system_instruction" not in detectors[0]


def test_unknown_detector(client):
    assert client.get("/detectors/horoscope").status_code == 404
    assert client.put("/session/detector", json={"detector_id": "horoscope"}).status_code == 404


def test_submit_phishing(client, provider):
    state = _analyze(client)

    assert state["status"] == "succeeded"
    assert state["result"]["label"] == "Phishing"
    assert state["result"]["domain"] == "bit.ly"
    assert state["severity"] == "danger"
    assert state["error"] is None
    assert len(provider.requests[0].binary_parts) == 0


def test_blank_submit_is_noop(client, provider):
    state = client.post("/session/submit").json()

    assert state["status"] == "idle"
    assert provider.requests == []


def test_failed_submit_reports_message(client, provider):
    provider.answer = "not json"

    state = _analyze(client)

    assert state["status"] == "failed"
    assert state["error"].startswith("Failed to analyze content.")
    assert client.get("/history").json() == []


def test_switch_detector_clears_session(client):
    _analyze(client)

    state = client.put("/session/detector", json={"detector_id": "news"}).json()

    assert state["text"] == ""
    assert state["result"] is None
    assert state["status"] == "idle"


def test_reset_is_idempotent(client):
    _analyze(client)

    first = client.post("/session/reset").json()
    second = client.post("/session/reset").json()

    assert first == second
    assert first["detector_id"] == "phishing"
    assert first["result"] is None


def test_append_url(client):
    client.put("/session/text", json={"text": "Is this real?"})

    response = client.post("/session/url", json={"url": "https://news.example.com/story"})
    assert response.json()["text"] == "Is this real?\nhttps://news.example.com/story"

    bad = client.post("/session/url", json={"url": "news dot com"})
    assert bad.status_code == 400
    assert bad.json()["detail"] == "Please enter a valid URL."


def test_upload_mixed_batch(client, provider):
    client.put("/session/detector", json={"detector_id": "ai-media"})

    response = client.post(
        "/session/media",
        files=[
            ("files", ("photo.png", PNG_BYTES, "image/png")),
            ("files", ("notes.pdf", b"%PDF-1.4", "application/pdf")),
        ],
    )

    assert response.status_code == 200
    media = response.json()["media"]
    assert [m["name"] for m in media] == ["photo.png", "notes.pdf"]
    assert [m["status"] for m in media] == ["ready", "failed"]
    assert media[1]["error_message"] == "Invalid file type. Please upload an image or video."
    assert "encoded_payload" not in media[0]

    state = client.post("/session/submit").json()
    assert state["status"] == "succeeded"
    assert len(provider.requests[0].binary_parts) == 1
    assert client.get("/history").json()[0]["content_kind"] == "image"


def test_remove_and_clear_media(client):
    client.put("/session/detector", json={"detector_id": "ai-media"})
    media = client.post("/session/media", files=[("files", ("a.png", PNG_BYTES, "image/png"))]).json()["media"]

    assert client.delete(f"/session/media/{media[0]['id']}").json()["media"] == []
    assert client.delete(f"/session/media/{media[0]['id']}").status_code == 404

    client.post("/session/media", files=[("files", ("b.png", PNG_BYTES, "image/png"))])
    assert client.delete("/session/media").json()["media"] == []


def test_remote_media_url_rejects_malformed(client):
    client.put("/session/detector", json={"detector_id": "ai-media"})

    response = client.post("/session/media/url", json={"url": "not-a-url"})

    assert response.status_code == 400


def test_tool_only_detector_rejects_upload(client):
    client.put("/session/detector", json={"detector_id": "sos-tools"})

    response = client.post("/session/media", files=[("files", ("a.png", PNG_BYTES, "image/png"))])

    assert response.status_code == 400


def test_history_restore_round_trip(client):
    _analyze(client, "finance-scam", "Guaranteed 10x returns in a week")
    client.put("/session/detector", json={"detector_id": "news"})

    (entry,) = client.get("/history").json()
    state = client.post(f"/history/{entry['id']}/restore").json()

    assert state["detector_id"] == "finance-scam"
    assert state["text"] == "Guaranteed 10x returns in a week"
    assert state["result"]["label"] == "Phishing"
    assert state["media"] == []


def test_history_newest_first_and_delete(client):
    _analyze(client, text="first")
    _analyze(client, text="second")

    entries = client.get("/history").json()
    assert [e["preview"] for e in entries] == ["second", "first"]

    assert client.delete(f"/history/{entries[0]['id']}").status_code == 200
    assert client.delete(f"/history/{entries[0]['id']}").status_code == 404
    assert client.post(f"/history/{entries[0]['id']}/restore").status_code == 404
    assert client.delete("/history").json() == {"deleted": 1}
    assert client.get("/history").json() == []


def test_contacts_and_sos_link(client):
    response = client.post("/contacts", json={"name": "Asha", "phone": "+91 98765 43210"})
    assert response.status_code == 201
    contact = response.json()

    assert client.get("/contacts").json() == [contact]

    link = client.post(f"/contacts/{contact['id']}/sos-link", json={"latitude": 12.97, "longitude": 77.59}).json()
    assert link["url"].startswith("https://wa.me/919876543210?text=")
    assert "https://www.google.com/maps?q=12.97,77.59" in link["message"]

    assert client.delete(f"/contacts/{contact['id']}").status_code == 200
    assert client.delete(f"/contacts/{contact['id']}").status_code == 404


def test_contact_validation(client):
    assert client.post("/contacts", json={"name": " ", "phone": "1"}).status_code == 400

    contact = client.post("/contacts", json={"name": "Ravi", "phone": "1"}).json()
    bad_location = client.post(f"/contacts/{contact['id']}/sos-link", json={"latitude": 200, "longitude": 0})
    assert bad_location.status_code == 422
    assert client.post("/contacts/missing/sos-link", json={"latitude": 0, "longitude": 0}).status_code == 404


def test_threats(client):
    data = client.get("/threats", params={"region": "India"}).json()

    assert data["region"] == "India"
    assert {t["region"] for t in data["threats"]} == {"India", "Global"}
    assert data["regions"][0] == "All"
    assert len(client.get("/threats").json()["threats"]) == 4
