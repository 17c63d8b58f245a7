from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from stationery.core.constants import API_PREFIX
from stationery.dependencies import get_data_service
from stationery.schemas.data import (
    ClearSummary,
    ExportDocument,
    ImportDocument,
    ImportSummary,
    StatusRead,
)
from stationery.services.data_service import DataService

router = APIRouter(prefix=API_PREFIX, tags=["Data"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/status", response_model=StatusRead)
def database_status(data: DataService = Depends(get_data_service)):
    return data.status()


@router.get("/export", response_model=ExportDocument)
def export_data(data: DataService = Depends(get_data_service)):
    return data.export()


@router.get("/export/xlsx")
def export_workbook(data: DataService = Depends(get_data_service)):
    return Response(
        content=data.export_workbook(),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="stationery-export.xlsx"'},
    )


@router.post("/import", response_model=ImportSummary)
def import_data(
    payload: ImportDocument,
    replace: bool = Query(False, description="Clear existing records before importing"),
    data: DataService = Depends(get_data_service),
):
    return data.import_data(payload.model_dump(), replace=replace)


@router.delete("/clear-all", response_model=ClearSummary)
def clear_all(data: DataService = Depends(get_data_service)):
    counts = data.clear_all()
    return ClearSummary(message="All data cleared successfully", **counts)


__all__ = ["router"]
