"""
Schema Intelligence API Routes
JSON endpoints over the schema loader, comparator and migration analyzers.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from core.report import SchemaIntelligence
from logger import get_logger
from services.api.dependencies import get_schema_intelligence
from services.api.schemas import CompareRequest, ErrorResponse

log = get_logger(__name__)

router = APIRouter(
    tags=["Schema Intelligence"],
    responses={502: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)


@router.get("/database-info")
def database_info(intel: SchemaIntelligence = Depends(get_schema_intelligence)) -> Dict[str, Any]:
    """Product and driver metadata of the catalog connection."""
    return intel.get_database_info().to_dict()


@router.get("/schema")
def view_schema(
    owner: str = Query(..., min_length=1),
    intel: SchemaIntelligence = Depends(get_schema_intelligence),
) -> Dict[str, Any]:
    """Tables, resolved table details and views of one owner."""
    schema = intel.load_schema(owner)
    log.debug(
        "Schema %s served: %d tables, %d views, %d resolved.",
        schema.owner, schema.total_tables, schema.total_views, len(schema.table_details),
    )
    return schema.to_dict()


@router.get("/table-details", responses={404: {"model": ErrorResponse}})
def table_details(
    owner: str = Query(..., min_length=1),
    table: str = Query(..., min_length=1),
    intel: SchemaIntelligence = Depends(get_schema_intelligence),
) -> Dict[str, Any]:
    """Columns and indexes of one table."""
    details = intel.get_table_details(owner, table)
    if details is None:
        raise HTTPException(status_code=404, detail=f"Table {owner}.{table} not found")
    return details.to_dict()


@router.post("/compare")
def compare_schemas(
    request: CompareRequest,
    intel: SchemaIntelligence = Depends(get_schema_intelligence),
) -> Dict[str, Any]:
    """Structural diff of two owners."""
    return intel.compare_schemas(request.schema1, request.schema2).to_dict()


@router.get("/migration")
def migration_analysis(
    owner: str = Query(..., min_length=1),
    intel: SchemaIntelligence = Depends(get_schema_intelligence),
) -> Dict[str, Any]:
    """Type mappings, compatibility issues and recommendations for one owner."""
    schema = intel.load_schema(owner)
    analysis = intel.analyze_migration(schema)
    return {"owner": schema.owner, "schema": schema.to_dict(), "analysis": analysis.to_dict()}


@router.get("/file-analysis")
def file_analysis(
    owner: str = Query(..., min_length=1),
    intel: SchemaIntelligence = Depends(get_schema_intelligence),
) -> Dict[str, Any]:
    """Tables used as file storage, with risk levels."""
    analysis = intel.analyze_file_storage(owner)
    schema = intel.load_schema(owner)
    return {"owner": schema.owner, "schema": schema.to_dict(), "analysis": analysis.to_dict()}


@router.get("/report")
def report(
    owner: str = Query(..., min_length=1),
    compare_with: Optional[str] = Query(None),
    intel: SchemaIntelligence = Depends(get_schema_intelligence),
) -> Dict[str, Any]:
    """Full migration report, optionally with a comparison."""
    return intel.build_report(owner, compare_with=compare_with).to_dict()
