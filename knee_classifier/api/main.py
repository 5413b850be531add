from contextlib import asynccontextmanager
from pathlib import Path
from typing import Annotated

import fastapi
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import Depends
from fastapi.staticfiles import StaticFiles

import knee_classifier.api.routers as routers
from knee_classifier.api.errors import register_exception_handlers
from knee_classifier.api.middleware.errors import ErrorHandlerMiddleware
from knee_classifier.api.middleware.structlog import StructLogMiddleware
from knee_classifier.core.logging import FastAPIStructLogger
from knee_classifier.core.settings import Settings, get_settings, settings
from knee_classifier.core.version import version
from knee_classifier.services.classification_service import close_scoring_client

logger = FastAPIStructLogger()

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI):
    """Manage application lifecycle (startup and shutdown)."""

    # Startup
    logger.info("Starting knee classifier", version=version)
    if not settings.scoring_configured:
        logger.warning(
            "Scoring endpoint or API key not set; classification requests will fail"
        )
    yield
    # Shutdown
    logger.info("Shutting down knee classifier")
    await close_scoring_client()
    logger.info("Shutdown complete")


def get_info(current: Annotated[Settings, Depends(get_settings)]):
    return {
        "version": version,
        "api_key_header": current.ibm_api_key_header,
    }


def knee_classifier_api() -> fastapi.FastAPI:
    app = fastapi.FastAPI(
        title="Knee Osteoarthritis Classification",
        version=version,
        lifespan=lifespan,
    )

    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(StructLogMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    # Register global exception handlers
    register_exception_handlers(app)

    app.include_router(routers.classify_router)
    # Health endpoints are exposed at the root
    app.include_router(routers.health_router)
    app.include_router(routers.ui_router)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    app.add_api_route(
        path="/info",
        methods=["GET"],
        endpoint=get_info,
    )

    return app


app = knee_classifier_api()
