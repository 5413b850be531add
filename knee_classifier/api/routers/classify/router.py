"""
Classify Router - Relays knee X-ray uploads to the external scoring service.

- POST /api/classify - multipart form data with a `file` part
"""

from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from knee_classifier.core.logging import FastAPIStructLogger
from knee_classifier.core.settings import Settings, get_settings
from knee_classifier.services.classification_service import (
    ClassificationService,
    get_scoring_client,
    read_upload,
)

from .types import ClassificationResult, ErrorResponse

logger = FastAPIStructLogger(__name__)

router = APIRouter(prefix="/api", tags=["classify"])


def get_classification_service(
    client: Annotated[httpx.AsyncClient, Depends(get_scoring_client)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ClassificationService:
    return ClassificationService(client=client, settings=settings)


@router.post(
    "/classify",
    operation_id="classify_knee_xray",
    summary="Classify a knee X-ray",
    responses={
        200: {"model": ClassificationResult},
        400: {"model": ErrorResponse, "description": "No file uploaded"},
        500: {"model": ErrorResponse, "description": "Missing configuration or internal error"},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "multipart/form-data": {
                    "schema": {
                        "type": "object",
                        "properties": {"file": {"type": "string", "format": "binary"}},
                        "required": ["file"],
                    }
                }
            },
        }
    },
)
async def classify_image(
    request: Request,
    service: Annotated[ClassificationService, Depends(get_classification_service)],
) -> JSONResponse:
    """Forward an uploaded X-ray to the scoring service and relay its reply.

    The multipart body is sent on unmodified with the API key header added.
    A non-2xx reply from the scoring service is returned with the same status
    code and an `error` message naming the upstream status.
    """
    upload = await read_upload(request)
    result = await service.classify(upload)

    logger.info("Classification relayed", filename=upload.filename)
    return JSONResponse(content=result)
