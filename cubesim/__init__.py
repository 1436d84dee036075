"""
cubesim
A 3x3x3 cube state and move engine.
"""

__version__ = "0.2.0"
__author__ = "Domingos97"

from .cube import Color, Cubie, CubeState, create_solved_cube
from .exceptions import (
    CorruptState,
    CubeError,
    InvalidMoveToken,
    SequencerBusy,
    SolverFailed,
    SolverUnavailable,
)
from .facelets import SOLVED_FACELETS, is_solved, to_facelet_string
from .moves import (
    MoveToken,
    OuterFace,
    PrimitiveTurn,
    SliceFace,
    WideFace,
    expand,
    expand_quarter_turns,
    parse_move,
)
from .operations import apply_move, apply_moves, apply_turn
from .scramble import generate_scramble
from .sequencer import MoveSequencer, MoveSource, Status
from .solver import solve

__all__ = [
    "Color",
    "Cubie",
    "CubeState",
    "create_solved_cube",
    "CorruptState",
    "CubeError",
    "InvalidMoveToken",
    "SequencerBusy",
    "SolverFailed",
    "SolverUnavailable",
    "SOLVED_FACELETS",
    "is_solved",
    "to_facelet_string",
    "MoveToken",
    "OuterFace",
    "PrimitiveTurn",
    "SliceFace",
    "WideFace",
    "expand",
    "expand_quarter_turns",
    "parse_move",
    "apply_move",
    "apply_moves",
    "apply_turn",
    "generate_scramble",
    "MoveSequencer",
    "MoveSource",
    "Status",
    "solve",
]
