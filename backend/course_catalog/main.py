"""
Course Catalog Main Application
FastAPI application with a pluggable record store and dependency injection
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import time
from uuid import uuid4

from .core.config import get_settings, validate_configuration
from .core.dependencies import (
    cleanup_resources,
    get_course_repository,
    get_service_health,
)
from .api.v1 import courses, recommendations
from .models.requests import ErrorResponse, HealthCheckResponse

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Get settings
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment.value}")

    # Validate configuration
    try:
        validate_configuration(settings)
        logger.info("Configuration validation passed")
    except ValueError as e:
        logger.error(f"Configuration validation failed: {e}")
        raise

    if settings.seed_on_startup:
        seeded = await get_course_repository().seed_initial_data()
        logger.info(f"Startup seeding inserted {seeded} courses")

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application")
    await cleanup_resources()
    logger.info("Application shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Course catalog with CRUD, search and recommendations",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests for monitoring"""
    start_time = time.time()
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    request.state.request_id = request_id

    logger.info(
        f"Request {request_id}: {request.method} {request.url.path} "
        f"from {request.client.host if request.client else 'unknown'}"
    )

    response = await call_next(request)

    process_time = time.time() - start_time
    response.headers["X-Request-ID"] = request_id
    response.headers["X-Process-Time"] = str(process_time)

    logger.info(
        f"Response {request_id}: {response.status_code} " f"in {process_time:.3f}s"
    )

    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"error": ...}"""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Reject invalid payloads with a 422"""
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder(
            ErrorResponse(
                error="Invalid request",
                details=[
                    {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
                    for error in exc.errors()
                ],
            ).model_dump(exclude_none=True)
        ),
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions"""
    request_id = getattr(request.state, "request_id", "unknown")

    logger.error(
        f"Unhandled exception in request {request_id}: {str(exc)}", exc_info=True
    )

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="An unexpected error occurred" if not settings.debug else str(exc),
        ).model_dump(exclude_none=True),
    )


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"Welcome to {settings.app_name} v{settings.app_version}",
        "environment": settings.environment.value,
        "status": "healthy",
        "docs_url": "/docs" if settings.debug else "disabled",
    }


# Health check endpoint
@app.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """Health check endpoint"""
    services_health = await get_service_health()

    overall_status = "healthy"
    for service_status in services_health.values():
        if "unhealthy" in service_status.lower():
            overall_status = "degraded"
            break

    return HealthCheckResponse(
        status=overall_status,
        version=settings.app_version,
        environment=settings.environment.value,
        services=services_health,
    )


# Include API routers
app.include_router(
    courses.router, prefix=settings.api_prefix + "/courses", tags=["Courses"]
)

app.include_router(
    recommendations.router,
    prefix=settings.api_prefix + "/recommendations",
    tags=["Recommendations"],
)


def run():
    """Development server entry point"""
    import uvicorn

    uvicorn.run(
        "course_catalog.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level="info" if not settings.debug else "debug",
    )


if __name__ == "__main__":
    run()
