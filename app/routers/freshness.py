from fastapi import APIRouter

from app.schemas import FreshnessSettingUpdate
from freezer_tracker.core import freshness as freshness_core

router = APIRouter(prefix="/freshness-settings", tags=["freshness"])


@router.get("")
def freshness_settings():
    return freshness_core.get_all_settings()


@router.patch("/{setting_id}")
def freshness_setting_update(setting_id: int, body: FreshnessSettingUpdate):
    return freshness_core.update_setting(setting_id, **body.model_dump())
