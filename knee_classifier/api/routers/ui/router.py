"""
UI Router - The single upload page.

GET / renders the form; the browser script posts to /api/classify.
POST / is the same flow rendered server-side for clients without JavaScript.
"""

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from knee_classifier.api.errors import ClassifierError, MissingFileError
from knee_classifier.api.routers.classify.router import get_classification_service
from knee_classifier.core.image_utils import upload_preview_uri
from knee_classifier.core.logging import FastAPIStructLogger
from knee_classifier.services.classification_service import (
    ClassificationService,
    read_upload,
)

from .state import UploadViewState

logger = FastAPIStructLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[3] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["ui"], include_in_schema=False)


def _render(request: Request, state: UploadViewState, status_code: int = 200) -> HTMLResponse:
    return templates.TemplateResponse(
        request, "index.html", {"state": state}, status_code=status_code
    )


@router.get("/", response_class=HTMLResponse)
async def upload_page(request: Request):
    return _render(request, UploadViewState())


@router.post("/", response_class=HTMLResponse)
async def submit_upload(
    request: Request,
    service: Annotated[ClassificationService, Depends(get_classification_service)],
):
    state = UploadViewState()

    try:
        upload = await read_upload(request)
    except MissingFileError:
        state.start_submit()
        return _render(request, state, status_code=400)

    state.select_file(
        upload.filename,
        upload_preview_uri(upload.file_bytes, upload.filename, upload.file_content_type),
    )
    state.start_submit()

    try:
        result = await service.classify(upload)
    except ClassifierError as e:
        state.reject(e.message)
        return _render(request, state, status_code=e.status_code)

    state.resolve(result)
    logger.info("Classification rendered", filename=upload.filename)
    return _render(request, state)
