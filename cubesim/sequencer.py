"""
Move sequencing for an animated presentation.

The sequencer owns a FIFO queue of quarter-turn moves. The presentation
layer pulls one move at a time with ``start_next()``, animates it, and calls
``complete()`` once the animation reaches its end. Only then does the
logical state advance, so the drawn cube and the logical cube never disagree
about which cubie sits where.
"""

import random
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional, Tuple, Union

import numpy as np
import structlog

from . import quaternion as quat
from .cube import CubeState, create_solved_cube
from .exceptions import SequencerBusy
from .moves import MoveLike, MoveToken, expand_quarter_turns, parse_moves, quarter_turn
from .operations import apply_turn
from .scramble import DEFAULT_SCRAMBLE_LENGTH, generate_scramble
from .solver import SolverBackend, solve

logger = structlog.get_logger(__name__)


class MoveSource(str, Enum):
    USER = "user"
    SCRAMBLE = "scramble"
    SOLUTION = "solution"


class Status(str, Enum):
    READY = "ready"
    MOVING = "moving"
    SCRAMBLING = "scrambling"
    SOLVING = "solving"


@dataclass(frozen=True)
class QueuedMove:
    move: MoveToken
    source: MoveSource
    # undo moves consume a history entry instead of adding one
    undo: bool = False


@dataclass(frozen=True)
class Frame:
    """
    What the presentation layer needs to draw one frame.

    Attributes:
        state (CubeState): The logical state (before the in-flight move)
        active (QueuedMove): The move being animated, if any
        progress (float): Interpolation progress in [0, 1]
    """

    state: CubeState
    active: Optional[QueuedMove] = None
    progress: float = 0.0

    def pose(self, cubie_id: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Interpolated display pose of a cubie.

        Returns:
            (position, orientation) as float arrays
        """
        cubie = self.state.by_id(cubie_id)
        position = np.asarray(cubie.position, dtype=float)
        orientation = np.asarray(cubie.orientation, dtype=float)

        if self.active is None or self.progress <= 0.0:
            return position, orientation

        turn = quarter_turn(self.active.move)
        if not turn.selects(cubie.position):
            return position, orientation

        rotation = quat.from_axis_angle(turn.axis, turn.angle * self.progress)
        return (
            quat.rotate_vector(rotation, position),
            quat.normalize(quat.multiply(rotation, orientation)),
        )


class MoveSequencer:
    """
    Queue of pending quarter turns drained one at a time.

    Attributes:
        state (CubeState): The current logical state
        history (Tuple[QueuedMove, ...]): Completed moves, oldest first
    """

    def __init__(
        self,
        state: Optional[CubeState] = None,
        solver: Optional[SolverBackend] = None,
        rng: Optional[Union[random.Random, int]] = None
    ):
        self._state = state or create_solved_cube()
        self._solver = solver
        self._rng = rng if isinstance(rng, random.Random) else random.Random(rng)
        self._queue: Deque[QueuedMove] = deque()
        self._active: Optional[QueuedMove] = None
        self._history: List[QueuedMove] = []
        self._scrambling = False
        self._solving = False
        self._solve_pending = False

    @property
    def state(self) -> CubeState:
        return self._state

    @property
    def active(self) -> Optional[QueuedMove]:
        return self._active

    @property
    def pending(self) -> Tuple[QueuedMove, ...]:
        return tuple(self._queue)

    @property
    def history(self) -> Tuple[QueuedMove, ...]:
        return tuple(self._history)

    @property
    def is_busy(self) -> bool:
        return self._active is not None or bool(self._queue)

    @property
    def status(self) -> Status:
        if self._scrambling:
            return Status.SCRAMBLING
        if self._solving:
            return Status.SOLVING
        if self.is_busy:
            return Status.MOVING
        return Status.READY

    def enqueue(self, moves, source: MoveSource = MoveSource.USER) -> List[QueuedMove]:
        """
        Queue one token or a sequence of tokens, expanded to quarter turns.

        Args:
            moves: A token or an iterable of tokens
            source (MoveSource): Who asked for the moves

        Returns:
            List[QueuedMove]: The quarter turns appended to the queue

        Raises:
            InvalidMoveToken: If any token is invalid; nothing is queued then
        """
        if isinstance(moves, (str, MoveToken)):
            moves = [moves]

        queued = [
            QueuedMove(quarter, source)
            for token in parse_moves(moves)
            for quarter in expand_quarter_turns(token)
        ]
        self._queue.extend(queued)
        return queued

    def start_next(self) -> Optional[QueuedMove]:
        """
        Put the next queued move in flight.

        Returns the move already in flight if there is one, or None when the
        queue is empty.
        """
        if self._active is not None:
            return self._active
        if not self._queue:
            return None

        self._active = self._queue.popleft()
        logger.debug("Move started", move=str(self._active.move), source=self._active.source.value)
        return self._active

    def complete(self) -> Optional[CubeState]:
        """
        Signal that the in-flight animation finished and advance the state.

        Returns:
            CubeState: The new state, or None if nothing was in flight
        """
        if self._active is None:
            logger.warning("Move completion signalled with no move in flight")
            return None

        move = self._active
        self._state = apply_turn(self._state, quarter_turn(move.move))
        if not move.undo:
            self._history.append(move)
        self._active = None

        if not self._queue:
            self._scrambling = False
            self._solving = False
        return self._state

    def frame(self, progress: float = 0.0) -> Frame:
        progress = min(max(progress, 0.0), 1.0)
        return Frame(self._state, self._active, progress if self._active else 0.0)

    def scramble(self, length: int = DEFAULT_SCRAMBLE_LENGTH) -> List[MoveToken]:
        """
        Clear the history and queue a random scramble.

        Raises:
            SequencerBusy: If moves are queued or in flight
        """
        if self.is_busy or self._solve_pending:
            raise SequencerBusy("Cannot scramble while moves are pending")

        moves = generate_scramble(length, self._rng)
        self._history.clear()
        self.enqueue(moves, MoveSource.SCRAMBLE)
        self._scrambling = bool(moves)
        self._solving = False
        logger.info("Scramble queued", moves=" ".join(str(m) for m in moves))
        return moves

    async def solve(self) -> List[MoveToken]:
        """
        Ask the solver for a solution and queue it.

        Returns:
            List[MoveToken]: The solution; empty when the cube is already solved

        Raises:
            SequencerBusy: If moves are pending, another solve is outstanding,
                           or the cube changed before the solution arrived
            SolverUnavailable: If no solver backend is available
            SolverFailed: If the solver failed; the state is left untouched
        """
        if self.is_busy or self._solve_pending:
            raise SequencerBusy("Cannot solve while moves are pending")

        snapshot = self._state
        self._solve_pending = True
        try:
            solution = await solve(snapshot, self._solver)
        finally:
            self._solve_pending = False

        if self._state is not snapshot or self.is_busy:
            logger.warning("Discarding stale solution", length=len(solution))
            raise SequencerBusy("Cube changed while the solver was running")

        if solution:
            self.enqueue(solution, MoveSource.SOLUTION)
            self._solving = True
            self._scrambling = False
        return solution

    def undo(self) -> Optional[QueuedMove]:
        """
        Queue the inverse of the most recent completed quarter turn.

        The undone move is removed from the history right away; the inverse
        is not recorded when it completes.

        Raises:
            SequencerBusy: If moves are queued or in flight
        """
        if self.is_busy:
            raise SequencerBusy("Cannot undo while moves are pending")
        if not self._history:
            return None

        last = self._history.pop()
        queued = QueuedMove(last.move.inverse(), last.source, undo=True)
        self._queue.append(queued)
        return queued

    def reset(self) -> CubeState:
        """Drop every pending move and return to the solved cube."""
        self._queue.clear()
        self._active = None
        self._history.clear()
        self._scrambling = False
        self._solving = False
        self._state = create_solved_cube()
        return self._state
