from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from knee_classifier.api.errors import INTERNAL_ERROR_MESSAGE
from knee_classifier.core.logging import FastAPIStructLogger

logger = FastAPIStructLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last line of defence: nothing that escapes a route reaches the client
    as a traceback."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error", method=request.method, path=request.url.path
            )
            return JSONResponse(
                status_code=500, content={"error": INTERNAL_ERROR_MESSAGE}
            )
