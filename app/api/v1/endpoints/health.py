from fastapi import APIRouter
from datetime import datetime
import importlib.util

from app.core.config import settings
from app.models.schemas import HealthCheck
from app.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


def _solver_status() -> str:
    return "available" if importlib.util.find_spec("kociemba") is not None else "not_installed"


@router.get("/", response_model=HealthCheck)
async def health_check():
    """
    Basic health check endpoint

    Returns service health, version, timestamp and whether the default
    solver backend is installed
    """
    return HealthCheck(
        status="healthy",
        version=settings.app_version,
        timestamp=datetime.utcnow(),
        solver=_solver_status()
    )


@router.get("/live")
async def liveness_check():
    """
    Liveness check for container orchestration

    Returns 200 if the process can still run the engine
    """
    from cubesim import apply_moves, create_solved_cube, is_solved

    responsive = is_solved(apply_moves(create_solved_cube(), ["R", "R'"]))
    if not responsive:
        logger.error("Liveness check failed: engine round trip broken")
    return {
        "status": "alive" if responsive else "error",
        "timestamp": datetime.utcnow()
    }
