"""
Operations that can be performed on cube states.
"""

import numpy as np
from typing import Iterable, List, Union

from . import quaternion as quat
from .cube import CubeState, Cubie
from .exceptions import CorruptState
from .moves import MoveLike, PrimitiveTurn, expand, parse_moves

LAYER_SIZE = 9

TurnLike = Union[MoveLike, PrimitiveTurn]


def snap(vector) -> tuple:
    """
    Snap a rotated position back onto the integer lattice.

    Args:
        vector: Position with possible rounding error

    Returns:
        tuple: Integer coordinates

    Raises:
        CorruptState: If a coordinate lands outside {-1, 0, 1}
    """
    snapped = tuple(int(c) for c in np.rint(vector))
    if any(c not in (-1, 0, 1) for c in snapped):
        raise CorruptState("Rotated position left the lattice", details={"position": list(snapped)})
    return snapped


def apply_turn(state: CubeState, turn: PrimitiveTurn) -> CubeState:
    """
    Apply a single quarter turn to a cube state.

    Args:
        state (CubeState): The state to turn
        turn (PrimitiveTurn): Axis, layer and direction of the turn

    Returns:
        CubeState: A new state; unselected cubies are shared with ``state``

    Raises:
        CorruptState: If the layer does not hold exactly nine cubies
    """
    rotation = quat.from_axis_angle(turn.axis, turn.angle)

    cubies = []
    selected = 0
    for cubie in state.cubies:
        if not turn.selects(cubie.position):
            cubies.append(cubie)
            continue

        selected += 1
        position = snap(quat.rotate_vector(rotation, cubie.position))
        orientation = quat.normalize(quat.multiply(rotation, cubie.orientation))
        cubies.append(Cubie(cubie.id, position, quat.as_tuple(orientation), cubie.facelets))

    if selected != LAYER_SIZE:
        raise CorruptState(
            f"Turn selected {selected} cubies instead of {LAYER_SIZE}",
            details={"axis": turn.axis, "layer": turn.layer}
        )

    return CubeState(tuple(cubies))


def _turns(move: TurnLike) -> List[PrimitiveTurn]:
    if isinstance(move, PrimitiveTurn):
        return [move]
    return expand(move)


def apply_move(state: CubeState, move: TurnLike) -> CubeState:
    """
    Apply a move token (or a single primitive turn) to a cube state.

    Args:
        state (CubeState): The state to turn
        move: Token string, MoveToken or PrimitiveTurn

    Returns:
        CubeState: The resulting state

    Raises:
        InvalidMoveToken: If the token does not match the grammar

    Example:
        >>> state = apply_move(create_solved_cube(), "r'")
    """
    result = state
    for turn in _turns(move):
        result = apply_turn(result, turn)
    return result


def apply_moves(state: CubeState, moves: Iterable[TurnLike]) -> CubeState:
    """
    Apply a sequence of moves in order.

    Every token is parsed before the first turn is applied, so an invalid
    token anywhere in the sequence raises without producing a state.

    Args:
        state (CubeState): The starting state
        moves: Token strings, MoveTokens or PrimitiveTurns

    Returns:
        CubeState: The resulting state
    """
    moves = list(moves)
    parse_moves(m for m in moves if not isinstance(m, PrimitiveTurn))

    result = state
    for move in moves:
        result = apply_move(result, move)
    return result
