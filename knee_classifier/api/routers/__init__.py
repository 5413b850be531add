from .classify import router as classify_router
from .health import router as health_router
from .ui import router as ui_router

__all__ = [
    "classify_router",
    "health_router",
    "ui_router",
]
