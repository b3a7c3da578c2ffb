from fastapi import APIRouter

from app.schemas import SUCCESS, entry_payload
from freezer_tracker.core import dismissals, inventory

router = APIRouter(tags=["red-zone"])


@router.get("/red-zone")
def red_zone_items():
    return {
        "dismissed": dismissals.is_dismissed_today(),
        "items": [entry_payload(e) for e in inventory.red_zone()],
    }


@router.get("/red-zone-dismissed")
def red_zone_dismissed():
    return {"dismissed": dismissals.is_dismissed_today()}


@router.post("/red-zone-dismiss")
def red_zone_dismiss():
    dismissals.dismiss_today()
    return SUCCESS
