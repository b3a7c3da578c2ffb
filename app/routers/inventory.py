from fastapi import APIRouter

from app.schemas import collect_warnings, entry_payload
from freezer_tracker.core import inventory as inventory_core

router = APIRouter(tags=["inventory"])


@router.get("/inventory")
def inventory_list(category: str = "all", search: str = "", freshness: str = "all", sort: str = "newest"):
    entries = inventory_core.list_inventory(
        category=category, search=search, status=freshness, sort=sort,
    )
    return {
        "items": [entry_payload(e) for e in entries],
        "warnings": collect_warnings(entries),
    }
