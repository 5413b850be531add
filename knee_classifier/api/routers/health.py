from typing import Annotated

from fastapi import APIRouter, Depends

from knee_classifier.core.settings import Settings, get_settings
from knee_classifier.services.health_service import health_summary

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def get_health(settings: Annotated[Settings, Depends(get_settings)]):
    return health_summary(settings)


@router.get("/liveness")
def get_liveness():
    return {"status": "alive"}
