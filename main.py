from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import time
import uuid

from app.core.config import settings
from app.api.v1.api import api_router
from app.utils.error_handlers import register_exception_handlers
from app.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Solver timeout: {settings.solver_timeout_seconds}s")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="3x3x3 cube state engine: move application, facelet strings, scrambles and solving",
    openapi_url="/api/openapi.json",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins or [
        "http://localhost:5173",                       # Local development
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

register_exception_handlers(app)


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": str(exc),
            "error_code": "validation_error",
            "timestamp": time.time()
        }
    )


@app.exception_handler(500)
async def internal_error_handler(request: Request, exc):
    request_id = str(uuid.uuid4())
    logger.error(f"Internal server error [{request_id}]: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error_code": "internal_error",
            "timestamp": time.time(),
            "request_id": request_id
        }
    )


# Health check endpoint
@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint for monitoring and load balancers.
    """
    return {
        "status": "healthy",
        "version": settings.app_version,
        "timestamp": time.time(),
        "environment": "development" if settings.debug else "production"
    }


@app.get("/", tags=["root"])
async def root():
    return "API is running... Visit /docs for documentation"


# Include API routes (single versioned prefix)
app.include_router(api_router, prefix="/api/v1")


@app.get("/api/v1/info", tags=["info"])
async def api_info():
    """
    Get API information and capabilities.
    """
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "features": [
            "move_expansion",
            "facelet_strings",
            "scrambles",
            "solving"
        ],
        "move_grammar": "U D L R F B M E S, wide u d l r f b, suffix ' or 2",
        "endpoints": {
            "cube": "/api/v1/cube",
            "health": "/api/v1/health"
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
