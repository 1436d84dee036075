from fastapi import APIRouter

from app.api.v1.endpoints import cube, health

api_router = APIRouter()

api_router.include_router(cube.router, prefix="/cube", tags=["cube"])

# System Management
api_router.include_router(health.router, prefix="/health", tags=["health"])
