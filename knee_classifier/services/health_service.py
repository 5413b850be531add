from __future__ import annotations

import time

from knee_classifier.core.settings import Settings


def _now_ms() -> int:
    return int(time.time() * 1000)


def _check_server() -> dict:
    start = _now_ms()
    # If this code runs, server is up
    return {
        "name": "server",
        "status": "healthy",
        "message": "FastAPI process responding",
        "latency_ms": _now_ms() - start,
    }


def _check_scoring_config(settings: Settings) -> dict:
    """Report whether the scoring service can be called at all.

    Never contacts the scoring service; a paid endpoint should not be hit by
    health probes.
    """
    start = _now_ms()
    missing = [
        name
        for name, value in (
            ("IBM_SCORING_ENDPOINT", settings.ibm_scoring_endpoint),
            ("IBM_API_KEY", settings.ibm_api_key),
        )
        if not value
    ]
    if missing:
        return {
            "name": "scoring",
            "status": "unhealthy",
            "message": f"Missing configuration: {', '.join(missing)}",
            "latency_ms": _now_ms() - start,
        }
    return {
        "name": "scoring",
        "status": "healthy",
        "message": "Scoring endpoint and API key configured",
        "latency_ms": _now_ms() - start,
    }


def _overall_status(checks: list[dict]) -> str:
    statuses = {c["status"] for c in checks}
    if "unhealthy" in statuses:
        # The process still serves the upload page, so it is degraded rather
        # than down
        return "degraded"
    if "degraded" in statuses:
        return "degraded"
    return "healthy"


def health_summary(settings: Settings) -> dict:
    checks = [_check_server(), _check_scoring_config(settings)]
    return {
        "status": _overall_status(checks),
        "timestamp": int(time.time()),
        "components": checks,
    }
