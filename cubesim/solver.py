"""
Adapter between cube states and an external solver.

A solver backend is any callable taking the 54-character facelet string and
returning a whitespace separated move string (``"R U2 Fprime"``), or an
empty/falsy value when there is nothing to do. Backends may be plain
functions or coroutine functions. The default backend is the ``kociemba``
package, installed with the ``solver`` extra.
"""

import asyncio
import inspect
from typing import Awaitable, Callable, List, Optional, Union

import structlog

from .cube import CubeState
from .exceptions import InvalidMoveToken, SolverFailed, SolverUnavailable
from .facelets import SOLVED_FACELETS, to_facelet_string
from .moves import MoveToken, parse_move

logger = structlog.get_logger(__name__)

SolverBackend = Callable[[str], Union[Optional[str], Awaitable[Optional[str]]]]


def kociemba_backend(facelets: str) -> str:
    """
    Solve with the two-phase ``kociemba`` package.

    Raises:
        SolverUnavailable: If ``kociemba`` is not installed
    """
    try:
        import kociemba
    except ImportError as e:
        raise SolverUnavailable("The kociemba package is not installed") from e

    return kociemba.solve(facelets)


def parse_solution(solution: Optional[str]) -> List[MoveToken]:
    """
    Translate raw solver output into move tokens.

    ``prime`` spellings become ``'`` and every token is parsed strictly.

    Args:
        solution: Raw solver output

    Returns:
        List[MoveToken]: Parsed tokens, empty for a falsy result

    Raises:
        SolverFailed: If the output contains a token outside the grammar
    """
    if not solution:
        return []

    tokens = solution.replace("prime", "'").split()
    try:
        return [parse_move(token) for token in tokens]
    except InvalidMoveToken as e:
        raise SolverFailed(
            f"Solver returned an unrecognised token: {e.token!r}",
            details={"solution": solution}
        ) from e


async def _call_backend(backend: SolverBackend, facelets: str) -> Optional[str]:
    if inspect.iscoroutinefunction(backend):
        return await backend(facelets)
    result = await asyncio.to_thread(backend, facelets)
    if inspect.isawaitable(result):
        result = await result
    return result


async def solve(state: CubeState, backend: Optional[SolverBackend] = None) -> List[MoveToken]:
    """
    Ask the solver for a move sequence that solves ``state``.

    A solved cube returns an empty list without consulting the backend.
    The state itself is never touched; applying the solution is up to the
    caller.

    Args:
        state (CubeState): The state to solve
        backend: Solver callable (default: kociemba)

    Returns:
        List[MoveToken]: The solution, empty when already solved

    Raises:
        SolverUnavailable: If the backend cannot be loaded
        SolverFailed: If the backend raised or returned unusable output
    """
    facelets = to_facelet_string(state)
    if facelets == SOLVED_FACELETS:
        return []

    backend = backend or kociemba_backend
    try:
        raw = await _call_backend(backend, facelets)
    except SolverUnavailable:
        raise
    except Exception as e:
        logger.error("Solver failed", facelets=facelets, error=str(e))
        raise SolverFailed(f"Solver failed: {e}", facelets=facelets) from e

    moves = parse_solution(raw)
    logger.debug("Solver returned solution", facelets=facelets, length=len(moves))
    return moves
