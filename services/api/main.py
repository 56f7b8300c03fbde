"""
FastAPI application for the Schema Intelligence service.
"""
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config import CONFIG
from core.catalog import CatalogConnectionError, CatalogError
from logger import get_logger
from services.api.routers import schema
from services.api.schemas import HealthResponse, ServiceInfoResponse

log = get_logger(__name__)

app = FastAPI(
    title=f"{CONFIG.app_name} API",
    description="Read-only catalog introspection, schema diffing and migration advice",
    version=CONFIG.app_version,
)

app.include_router(schema.router)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Connection failures map to 503, any other catalog failure to 502."""
    status_code = 503 if isinstance(exc, CatalogConnectionError) else 502
    log.error("Catalog failure on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.get("/", response_model=ServiceInfoResponse, tags=["root"])
async def root():
    """Root endpoint."""
    return ServiceInfoResponse(
        service=CONFIG.app_name,
        version=CONFIG.app_version,
        status="operational",
    )


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Liveness only; catalog reachability is reported per request."""
    return HealthResponse(status="healthy", timestamp=datetime.now(timezone.utc))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.api.main:app",
        host=CONFIG.api.host,
        port=CONFIG.api.port,
        log_level=CONFIG.logging.log_level.lower(),
    )
