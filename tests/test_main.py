import json
from unittest.mock import MagicMock

import pytest
import requests
from fastapi.testclient import TestClient

from linkpreview.main import app, get_link_preview_service
from linkpreview.models.options import LinkPreviewOptions
from linkpreview.services.client import LinkPreviewService

client = TestClient(app)


def make_response(status_code: int, body: dict) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(body).encode()
    return response


@pytest.fixture
def session():
    session = MagicMock()
    service = LinkPreviewService(LinkPreviewOptions(api_key="test-key"), session=session)
    app.dependency_overrides[get_link_preview_service] = lambda: service
    yield session
    app.dependency_overrides.clear()


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready():
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready"}


def test_preview_missing_url(session):
    response = client.get("/preview")
    assert response.status_code == 422  # FastAPI validation error


def test_preview_invalid_url(session):
    response = client.get("/preview?url=not-a-url")
    assert response.status_code == 400
    assert response.json()["detail"] == "The URL is not valid."
    session.get.assert_not_called()


def test_preview_unknown_field(session):
    response = client.get("/preview", params={"url": "https://example.com", "fields": "favicon"})
    assert response.status_code == 400
    assert "favicon" in response.json()["detail"]


def test_preview_success(session):
    session.get.return_value = make_response(
        200, {"title": "Test Page", "description": "Test description", "image": "", "url": "https://example.com",
              "icon": "https://example.com/favicon.ico", "icon_x": 32}
    )

    response = client.get("/preview", params={"url": "https://example.com", "fields": "icon,icon_x"})

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Test Page"
    assert data["icon"] == "https://example.com/favicon.ico"
    assert data["icon_width"] == 32
    assert session.get.call_args.args[0].endswith("fields=icon%2Cicon_x")


def test_preview_remote_error(session):
    session.get.return_value = make_response(401, {"error": 101, "description": "invalid api key"})

    response = client.get("/preview", params={"url": "https://example.com"})

    assert response.status_code == 401
    assert response.json()["status"] == 401
    assert response.json()["error_code"] == 101
    assert "invalid api key" in response.json()["detail"]


def test_preview_timeout(session):
    session.get.side_effect = requests.Timeout("timed out")

    response = client.get("/preview", params={"url": "https://example.com"})

    assert response.status_code == 408
    assert response.json() == {"status": 408, "detail": "The request timed out."}


def test_misconfigured_service_refuses_requests(monkeypatch):
    from linkpreview import config

    monkeypatch.setattr(config, "LINKPREVIEW_API_KEY", "")
    get_link_preview_service.cache_clear()

    response = client.get("/preview", params={"url": "https://example.com"})

    assert response.status_code == 500
    assert response.json()["detail"] == "API Key must not be empty"
    get_link_preview_service.cache_clear()
