"""Tests for health and info endpoints."""


def test_health_reports_configured_scoring(client, scoring):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    names = {c["name"]: c for c in data["components"]}
    assert names["scoring"]["status"] == "healthy"
    assert scoring.call_count == 0


def test_health_is_degraded_without_api_key(client, scoring_settings):
    scoring_settings.ibm_api_key = ""

    data = client.get("/health").json()

    assert data["status"] == "degraded"
    scoring_check = next(c for c in data["components"] if c["name"] == "scoring")
    assert scoring_check["status"] == "unhealthy"
    assert "IBM_API_KEY" in scoring_check["message"]
    assert "IBM_SCORING_ENDPOINT" not in scoring_check["message"]


def test_liveness(client):
    response = client.get("/health/liveness")

    assert response.status_code == 200
    assert response.json() == {"status": "alive"}


def test_info_reports_version(client):
    data = client.get("/info").json()

    assert "version" in data
    assert data["api_key_header"]


def test_info_reads_current_settings(client, scoring_settings):
    scoring_settings.ibm_api_key_header = "apikey"

    data = client.get("/info").json()

    assert data["api_key_header"] == "apikey"
