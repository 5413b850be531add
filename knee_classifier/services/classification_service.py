"""
ClassificationService - HTTP client for relaying X-ray uploads to the external
scoring service.

The inbound multipart body is forwarded untouched; the scoring service's JSON
reply is handed back as-is. Uses a persistent connection pool shared by all
requests.
"""

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx
from fastapi import Request
from starlette.datastructures import UploadFile

from knee_classifier.api.errors import (
    ClassifierError,
    MissingFileError,
    ScoringNotConfiguredError,
    ScoringUnavailableError,
    UpstreamError,
)
from knee_classifier.core.logging import FastAPIStructLogger
from knee_classifier.core.settings import Settings

logger = FastAPIStructLogger(__name__)

# Multipart field the upload page puts the image under
UPLOAD_FIELD = "file"


# Global persistent HTTP client for connection pooling
_http_client: httpx.AsyncClient | None = None
_client_lock = asyncio.Lock()


async def get_scoring_client() -> httpx.AsyncClient:
    """Get or create the persistent HTTP client for scoring requests.

    Returns:
        Shared httpx.AsyncClient instance with connection pooling enabled.
    """
    global _http_client

    if _http_client is not None and not _http_client.is_closed:
        return _http_client

    async with _client_lock:
        # Double-check after acquiring lock
        if _http_client is not None and not _http_client.is_closed:
            return _http_client

        logger.info("Creating persistent HTTP client for the scoring service")

        limits = httpx.Limits(
            max_connections=20,
            max_keepalive_connections=10,
            keepalive_expiry=30.0,
        )
        _http_client = httpx.AsyncClient(limits=limits)
        return _http_client


async def close_scoring_client() -> None:
    """Close the persistent HTTP client.

    Should be called during application shutdown to cleanly close connections.
    """
    global _http_client

    async with _client_lock:
        if _http_client is not None:
            logger.info("Closing persistent HTTP client")
            await _http_client.aclose()
            _http_client = None


@dataclass
class ImageUpload:
    """One inbound upload: the raw multipart body plus the parsed file part."""

    body: bytes
    content_type: str
    filename: str
    file_content_type: str | None
    file_bytes: bytes


async def read_upload(request: Request) -> ImageUpload:
    """Read the raw multipart body and make sure it carries a file part.

    The body is read before the form is parsed so the exact bytes the client
    sent can be forwarded later.

    Raises:
        MissingFileError: If there is no `file` part with a filename
    """
    body = await request.body()
    content_type = request.headers.get("content-type", "")

    try:
        async with request.form() as form:
            upload = form.get(UPLOAD_FIELD)
            if not isinstance(upload, UploadFile) or not upload.filename:
                raise MissingFileError()
            file_bytes = await upload.read()
            return ImageUpload(
                body=body,
                content_type=content_type,
                filename=upload.filename,
                file_content_type=upload.content_type,
                file_bytes=file_bytes,
            )
    except ClassifierError:
        raise
    except Exception as e:
        # Not multipart at all, or a malformed body
        logger.warning(f"Could not parse upload body: {e}")
        raise MissingFileError() from e


class ClassificationService:
    """Relays uploads to the configured scoring endpoint."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        self.client = client
        self.settings = settings

    def _headers(self, content_type: str) -> dict[str, str]:
        return {
            "Content-Type": content_type,
            self.settings.ibm_api_key_header: self.settings.ibm_api_key,
        }

    async def classify(self, upload: ImageUpload) -> Any:
        """Forward the upload and return the scoring service's JSON reply.

        Args:
            upload: The inbound upload, body forwarded byte-for-byte

        Returns:
            Parsed JSON exactly as the scoring service sent it

        Raises:
            ScoringNotConfiguredError: If the endpoint or API key is missing
            UpstreamError: If the scoring service answers with a non-2xx status
            ScoringUnavailableError: On network failure, timeout or invalid JSON
        """
        if not self.settings.scoring_configured:
            raise ScoringNotConfiguredError()

        logger.debug(
            "Forwarding upload to scoring service",
            filename=upload.filename,
            size=len(upload.body),
        )

        try:
            response = await self.client.post(
                self.settings.ibm_scoring_endpoint,
                content=upload.body,
                headers=self._headers(upload.content_type),
                timeout=self.settings.ibm_request_timeout,
                follow_redirects=True,
            )

            if not response.is_success:
                error_text = response.text
                logger.error(
                    "Scoring API error",
                    status_code=response.status_code,
                    upstream_body=error_text,
                )
                raise UpstreamError(
                    status_code=response.status_code,
                    reason=response.reason_phrase or f"HTTP {response.status_code}",
                )

            return response.json()

        except ClassifierError:
            raise
        except Exception as e:
            logger.error(f"Error calling scoring API: {e}", exc_info=True)
            raise ScoringUnavailableError() from e
