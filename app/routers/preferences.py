from fastapi import APIRouter

from app.schemas import PreferenceValue
from freezer_tracker.config import get_all, set_setting

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("")
def preferences():
    return get_all()


@router.put("/{key}")
def preference_save(key: str, body: PreferenceValue):
    set_setting(key, body.value)
    return {"key": key, "value": body.value}
