"""
Cube service - stateless operations on cubes reached from the solved state
"""

import asyncio
import time
from typing import List, Optional

from cubesim import (
    CubeState,
    apply_moves,
    create_solved_cube,
    expand_quarter_turns,
    generate_scramble,
    solve,
)
from cubesim.exceptions import SolverFailed
from cubesim.facelets import face_colors, is_solved, to_facelet_string
from cubesim.moves import MoveToken, parse_moves
from cubesim.solver import SolverBackend

from app.core.config import settings
from app.models.schemas import CubeStateResponse, ExpandResponse, ScrambleResponse, SolveResponse
from app.utils.error_handlers import validation_error
from app.utils.logging import RequestLogger, get_logger

logger = get_logger(__name__)
request_logger = RequestLogger()


def _quarter_strings(moves: List[MoveToken]) -> List[str]:
    return [str(q) for move in moves for q in expand_quarter_turns(move)]


class CubeService:
    """Applies, expands, scrambles and solves move sequences"""

    def __init__(self, backend: Optional[SolverBackend] = None, timeout: Optional[float] = None):
        self.backend = backend
        self.timeout = timeout if timeout is not None else settings.solver_timeout_seconds
        # Solve requests are serialized; the engine keeps no queue of its own
        self._solve_lock = asyncio.Lock()

    def _release_solve_lock(self, task: asyncio.Task):
        self._solve_lock.release()

    async def wait_idle(self):
        """Wait until no solver call is running, timed-out ones included"""
        async with self._solve_lock:
            pass

    def _parse(self, moves: List[str]) -> List[MoveToken]:
        if len(moves) > settings.max_moves_per_request:
            raise validation_error(
                f"At most {settings.max_moves_per_request} moves per request"
            )
        return parse_moves(moves)

    def _state_for(self, tokens: List[MoveToken]) -> CubeState:
        return apply_moves(create_solved_cube(), tokens)

    def scramble(self, length: Optional[int] = None, seed: Optional[int] = None) -> ScrambleResponse:
        """Generate a scramble and its quarter-turn expansion"""
        length = settings.scramble_length if length is None else length
        if length < 0 or length > settings.max_scramble_length:
            raise validation_error(
                f"Scramble length must be between 0 and {settings.max_scramble_length}"
            )

        moves = generate_scramble(length, seed)
        return ScrambleResponse(
            moves=[str(m) for m in moves],
            quarter_turns=_quarter_strings(moves),
            seed=seed
        )

    def expand(self, moves: List[str]) -> ExpandResponse:
        """Expand tokens into single quarter turns"""
        tokens = self._parse(moves)
        return ExpandResponse(moves=[str(t) for t in tokens], quarter_turns=_quarter_strings(tokens))

    def state(self, moves: List[str]) -> CubeStateResponse:
        """Apply moves to a solved cube and describe the result"""
        tokens = self._parse(moves)
        state = self._state_for(tokens)
        quarter_turns = len(_quarter_strings(tokens))
        request_logger.moves_applied("state", len(tokens), quarter_turns)

        return CubeStateResponse(
            facelets=to_facelet_string(state),
            faces={face: [c.value for c in cells] for face, cells in face_colors(state).items()},
            is_solved=is_solved(state),
            quarter_turns=quarter_turns
        )

    async def solve(self, moves: List[str]) -> SolveResponse:
        """Solve the cube reached by applying moves to a solved cube"""
        tokens = self._parse(moves)
        state = self._state_for(tokens)
        facelets = to_facelet_string(state)

        await self._solve_lock.acquire()
        started = time.perf_counter()
        # A thread backend keeps running after a timeout, so the lock is
        # released when the backend call finishes, not when we stop waiting
        task = asyncio.ensure_future(solve(state, self.backend))
        task.add_done_callback(self._release_solve_lock)
        try:
            solution = await asyncio.wait_for(asyncio.shield(task), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error("Solver timed out", facelets=facelets, timeout=self.timeout)
            raise SolverFailed(
                f"Solver did not answer within {self.timeout}s", facelets=facelets
            ) from e
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        request_logger.solve_finished(len(solution), elapsed_ms)
        return SolveResponse(
            facelets=facelets,
            solution=[str(m) for m in solution],
            quarter_turns=_quarter_strings(solution),
            already_solved=not solution
        )


cube_service = CubeService()


def get_cube_service() -> CubeService:
    """FastAPI dependency returning the shared cube service"""
    return cube_service
