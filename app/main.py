"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import OperationalError

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.errors import ScheduleError, StorageUnavailableError
from app.core.logger import setup_logger

setup_logger(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.DESCRIPTION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix="/api/v1")


# ======================================================================
# Error handlers
# ======================================================================


@app.exception_handler(ScheduleError)
async def schedule_error_handler(request: Request, exc: ScheduleError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    messages = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()]
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST,
                        content={ "detail": "Invalid request data", "code": "validation_error", "errors": messages })


@app.exception_handler(OperationalError)
async def storage_error_handler(request: Request, exc: OperationalError):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    error = StorageUnavailableError("Storage is unavailable, try again later")
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


# ======================================================================
# Service metadata
# ======================================================================


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "message": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "status": "healthy"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "fittrack-api",
        "version": settings.VERSION
    }


@app.get("/info")
async def info():
    return {
        "project name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "conflict rule": settings.CONFLICT_RULE,
        "alternative time policy": settings.ALTERNATIVE_TIME_POLICY,
    }
