"""
Services module - contains all business logic services
"""

from .cube_service import cube_service, get_cube_service

__all__ = [
    "cube_service",
    "get_cube_service",
]
