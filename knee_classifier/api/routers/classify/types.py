"""
Pydantic models for the classification endpoint.

These document the wire format only; relayed results are never validated
against them.
"""

from pydantic import BaseModel, ConfigDict


class ClassificationResult(BaseModel):
    """Result returned by the scoring service, passed through unchanged."""

    model_config = ConfigDict(extra="allow")

    prediction: str | None = None  # Severity label (e.g. "Normal", "Severe")
    confidence: float | None = None  # Score in [0, 1]


class ErrorResponse(BaseModel):
    """Error envelope for every failed classification request."""

    error: str
