from fastapi import APIRouter

from freezer_tracker.core import stats as stats_core

router = APIRouter(tags=["stats"])


@router.get("/stats")
def freezer_stats():
    return stats_core.compute()
