"""
RMF Assessment Service - Main Application
=========================================

FastAPI application for NIST AI RMF assessments, scoring and reports.

Version: 0.1.0
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import settings
from shared.logging import clear_context, get_logger, setup_logging
from shared.database import MongoDBClient
from shared.models.common import HealthResponse

from services.rmf_assessment.routes import assessments, reports
from services.rmf_assessment.routes.common import catalog_service

# Setup logging
setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name="rmf-assessment",
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    """Application lifespan manager."""
    logger.info(
        "rmf_assessment_starting",
        environment=settings.environment.value,
        port=settings.ports.rmf_assessment,
    )

    # Startup
    try:
        MongoDBClient.get_client()
        await MongoDBClient.create_indexes()
        logger.info("mongodb_connected")

        if settings.seed_templates:
            await catalog_service.seed_risk_templates(MongoDBClient.get_database())

    except Exception as e:
        logger.error("startup_failed", error=str(e))
        raise

    yield

    # Shutdown
    logger.info("rmf_assessment_shutting_down")
    await MongoDBClient.close()


# Create FastAPI application
app = FastAPI(
    title="NIST AI RMF Assessment Service",
    description="AI risk management assessments, scoring and compliance reports",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins_list,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


@app.middleware("http")
async def reset_log_context(request: Request, call_next: Any) -> Any:
    """Start every request with an empty log context."""
    clear_context()
    return await call_next(request)


# ============================================================================
# Health Check Endpoints
# ============================================================================


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """
    Service health check.

    Returns health status of the service and its database.
    """
    components: dict[str, dict[str, Any]] = {
        "mongodb": await MongoDBClient.health_check(),
    }

    all_healthy = all(c.get("status") == "healthy" for c in components.values())

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        service="rmf-assessment",
        version="0.1.0",
        components=components,
    )


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": "NIST AI RMF Assessment Service",
        "version": "0.1.0",
        "docs": "/docs",
    }


# ============================================================================
# Include Routers
# ============================================================================

app.include_router(
    assessments.router,
    prefix="/api/v1/assessments",
    tags=["Assessments"],
)

app.include_router(
    reports.router,
    prefix="/api/v1/reports",
    tags=["Reports"],
)


# ============================================================================
# Error Handlers
# ============================================================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "status_code": exc.status_code,
        },
        headers=exc.headers,
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions, including report rendering failures."""
    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": "Internal server error",
            "status_code": 500,
        },
    )


# ============================================================================
# Run with Uvicorn
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.rmf_assessment.main:app",
        host="0.0.0.0",
        port=settings.ports.rmf_assessment,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )
