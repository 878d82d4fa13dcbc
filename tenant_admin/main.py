from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import time

from tenant_admin.core.config import settings
from tenant_admin.core.firebase import init_firebase, shutdown_firebase
from tenant_admin.api.v1 import accounts, migrations, notifications
from tenant_admin.middleware.logging import LoggingMiddleware
from tenant_admin.utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"Starting up {settings.app_name}...")
    logger.info(f"Environment: {settings.environment}, debug: {settings.debug}")
    init_firebase(settings)

    yield

    shutdown_firebase()
    logger.info(f"Shutting down {settings.app_name}...")


app = FastAPI(
    title=settings.app_name,
    description="Administrative operations for the multi-tenant user store",
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Health Check"},
        {"name": "Migrations"},
        {"name": "Accounts"},
        {"name": "Notifications"},
    ],
)

# cors_origins defaults to "*" so the HTTP migration trigger is open to any origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(LoggingMiddleware)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "timestamp": time.time()
        }
    )


@app.get("/health", tags=["Health Check"])
async def health_check():
    """System health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "service": settings.app_name,
        "version": settings.app_version
    }


@app.get("/", tags=["Health Check"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
    }


app.include_router(migrations.router)
app.include_router(accounts.router, prefix="/api/v1")
app.include_router(notifications.router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "tenant_admin.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
