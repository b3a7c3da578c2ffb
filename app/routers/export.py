from fastapi import APIRouter
from fastapi.responses import Response

from freezer_tracker.core import export as export_core

router = APIRouter(tags=["export"])


@router.get("/export")
def export_workbook():
    content = export_core.build_workbook()
    return Response(
        content=content,
        media_type=export_core.CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{export_core.export_filename()}"'},
    )
