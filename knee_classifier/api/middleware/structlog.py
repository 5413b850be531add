import time

import structlog
from asgi_correlation_id import correlation_id
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from knee_classifier.core.logging import FastAPIStructLogger
from knee_classifier.core.settings import settings

access_logger = FastAPIStructLogger(settings.LOG_ACCESS_NAME)


class StructLogMiddleware:
    """Writes one structured access line per HTTP request.

    Binds the correlation id so every log line emitted while handling the
    request carries the same `request_id`.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=correlation_id.get())

        start_time = time.perf_counter_ns()
        status_code = 500

        async def send_wrapper(message: Message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            process_time = time.perf_counter_ns() - start_time
            client = scope.get("client")
            client_host, client_port = client if client else (None, None)
            http_method = scope["method"]
            http_version = scope["http_version"]
            url = scope["path"]
            if scope.get("query_string"):
                url = f"{url}?{scope['query_string'].decode('latin-1')}"

            access_logger.info(
                f"""{client_host}:{client_port} - "{http_method} {url} HTTP/{http_version}" {status_code}""",
                http={
                    "url": url,
                    "status_code": status_code,
                    "method": http_method,
                    "version": http_version,
                },
                network={"client": {"ip": client_host, "port": client_port}},
                duration=process_time,
            )
