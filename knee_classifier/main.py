import uvicorn

from knee_classifier.core.logging import setup_logging
from knee_classifier.core.settings import settings

# Configure logging FIRST, before anything else
setup_logging(settings.LOG_JSON_FORMAT, settings.LOG_LEVEL, settings.LOG_FILE)

from knee_classifier.api.main import knee_classifier_api  # noqa: E402

app = knee_classifier_api()


def run() -> None:
    uvicorn.run(
        "knee_classifier.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_config=None,  # Disable uvicorn's log config (handled in setup_logging)
        access_log=False,  # Disable uvicorn access logs (handled by StructLogMiddleware)
    )


if __name__ == "__main__":
    run()
