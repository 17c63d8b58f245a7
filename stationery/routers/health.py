from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from stationery.config import Settings
from stationery.database.storage import Storage
from stationery.dependencies import get_settings_dep, get_storage

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(
    settings: Settings = Depends(get_settings_dep),
    storage: Storage = Depends(get_storage),
):
    init_result = storage.init_result
    return {
        "status": "ok" if storage.ready else "starting",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "database_ready": storage.ready,
        "database_error": init_result.error if init_result else None,
        "time": datetime.now(timezone.utc).isoformat(),
    }
