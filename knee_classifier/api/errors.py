"""Error types for the classification API and their JSON rendering.

Every failure reaches the client as ``{"error": "<message>"}``. Messages are
fixed strings or upstream status text; exception details are only logged.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from knee_classifier.core.logging import FastAPIStructLogger

logger = FastAPIStructLogger(__name__)

NO_FILE_MESSAGE = "No file uploaded."
NOT_CONFIGURED_MESSAGE = "API endpoint or key is not configured."
INTERNAL_ERROR_MESSAGE = "An internal error occurred."


class ClassifierError(Exception):
    """Base exception for classification request failures."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MissingFileError(ClassifierError):
    """Raised when the multipart body carries no file part."""

    def __init__(self):
        super().__init__(message=NO_FILE_MESSAGE, status_code=400)


class ScoringNotConfiguredError(ClassifierError):
    """Raised when the scoring endpoint or API key is unset."""

    def __init__(self):
        super().__init__(message=NOT_CONFIGURED_MESSAGE, status_code=500)


class UpstreamError(ClassifierError):
    """Raised when the scoring service answers with a non-2xx status."""

    def __init__(self, status_code: int, reason: str):
        super().__init__(
            message=f"Error from classification API: {reason}",
            status_code=status_code,
        )
        self.reason = reason


class ScoringUnavailableError(ClassifierError):
    """Raised when the scoring call fails for any other reason."""

    def __init__(self):
        super().__init__(message=INTERNAL_ERROR_MESSAGE, status_code=500)


def format_error_response(message: str) -> dict[str, str]:
    return {"error": message}


async def classifier_error_handler(request: Request, exc: ClassifierError) -> JSONResponse:
    logger.warning(
        "Classification request failed",
        path=request.url.path,
        status_code=exc.status_code,
        error=exc.message,
    )
    return JSONResponse(
        status_code=exc.status_code, content=format_error_response(exc.message)
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ClassifierError, classifier_error_handler)
