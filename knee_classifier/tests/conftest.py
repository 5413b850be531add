"""
Shared pytest fixtures for the knee classifier tests.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from knee_classifier.api.main import knee_classifier_api
from knee_classifier.core.settings import Settings, get_settings
from knee_classifier.services.classification_service import get_scoring_client

SCORING_ENDPOINT = "https://scoring.example.com/ml/v4/deployments/knee/predictions"
API_KEY = "test-api-key"

# Smallest valid PNG header; the server never decodes it
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"


class ScoringStub:
    """Stands in for the external scoring service and records every call."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.handler = lambda request: httpx.Response(200, json={})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self.handler(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def scoring():
    return ScoringStub()


@pytest.fixture
def scoring_settings():
    return Settings(
        _env_file=None,
        ibm_scoring_endpoint=SCORING_ENDPOINT,
        ibm_api_key=API_KEY,
        ibm_api_key_header="x-api-key",
    )


@pytest.fixture
def app(scoring, scoring_settings):
    """App wired to the stubbed scoring service and explicit settings."""
    app = knee_classifier_api()

    async def _scoring_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(scoring)) as client:
            yield client

    app.dependency_overrides[get_scoring_client] = _scoring_client
    app.dependency_overrides[get_settings] = lambda: scoring_settings
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def png_upload():
    return {"file": ("left-knee.png", PNG_BYTES, "image/png")}
