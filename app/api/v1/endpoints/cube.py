from fastapi import APIRouter, Depends, Query
from typing import Optional

from app.models.schemas import (
    CubeStateResponse,
    ErrorResponse,
    ExpandResponse,
    MoveSequenceRequest,
    ScrambleResponse,
    SolveResponse,
)
from app.services.cube_service import CubeService, get_cube_service

router = APIRouter()


@router.get("/scramble", response_model=ScrambleResponse)
async def get_scramble(
    length: Optional[int] = Query(default=None, description="Number of moves (default from settings)"),
    seed: Optional[int] = Query(default=None, description="Seed for a reproducible scramble"),
    service: CubeService = Depends(get_cube_service)
):
    """
    Generate a random scramble

    No face is turned twice in a row. The quarter-turn expansion is what an
    animated client should queue.
    """
    return service.scramble(length, seed)


@router.post("/expand",
             response_model=ExpandResponse,
             responses={400: {"model": ErrorResponse, "description": "Invalid move token"}})
async def expand_moves(
    request: MoveSequenceRequest,
    service: CubeService = Depends(get_cube_service)
):
    """Expand move tokens into single quarter turns"""
    return service.expand(request.moves)


@router.post("/state",
             response_model=CubeStateResponse,
             responses={400: {"model": ErrorResponse, "description": "Invalid move token"}})
async def cube_state(
    request: MoveSequenceRequest,
    service: CubeService = Depends(get_cube_service)
):
    """Apply moves to a solved cube and return the facelet string"""
    return service.state(request.moves)


@router.post("/solve",
             response_model=SolveResponse,
             responses={
                 400: {"model": ErrorResponse, "description": "Invalid move token"},
                 422: {"model": ErrorResponse, "description": "Solver failed"},
                 503: {"model": ErrorResponse, "description": "Solver unavailable"}
             })
async def solve_cube(
    request: MoveSequenceRequest,
    service: CubeService = Depends(get_cube_service)
):
    """
    Solve the cube reached by applying the given moves to a solved cube

    An already solved cube answers with an empty solution and
    ``already_solved`` set.
    """
    return await service.solve(request.moves)
