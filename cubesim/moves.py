"""
Move grammar: parsing move tokens and expanding them into quarter turns.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple, Union

from .exceptions import InvalidMoveToken

OUTER_LETTERS = "UDLRFB"
SLICE_LETTERS = "MES"
WIDE_LETTERS = "udlrfb"

_TOKEN_RE = re.compile(f"([{OUTER_LETTERS}{SLICE_LETTERS}{WIDE_LETTERS}])(['2]?)")


class Suffix(str, Enum):
    NONE = ""
    PRIME = "'"
    DOUBLE = "2"

    def inverted(self) -> "Suffix":
        if self is Suffix.NONE:
            return Suffix.PRIME
        if self is Suffix.PRIME:
            return Suffix.NONE
        return Suffix.DOUBLE


@dataclass(frozen=True)
class PrimitiveTurn:
    """
    A single quarter turn of one layer.

    Attributes:
        axis (str): 'x', 'y' or 'z'
        layer (int): Coordinate on ``axis`` selecting the slice (-1, 0 or 1)
        direction (int): +1 or -1 quarter turns about the positive axis
    """

    axis: str
    layer: int
    direction: int

    @property
    def axis_index(self) -> int:
        return "xyz".index(self.axis)

    @property
    def angle(self) -> float:
        return self.direction * math.pi / 2

    def selects(self, position) -> bool:
        """Layer predicate over a (rounded) position."""
        return int(round(position[self.axis_index])) == self.layer

    def inverse(self) -> "PrimitiveTurn":
        return PrimitiveTurn(self.axis, self.layer, -self.direction)


# letter -> (axis, layer, direction of the unsuffixed turn)
LAYER_TABLE: Dict[str, Tuple[str, int, int]] = {
    'R': ('x', 1, -1),
    'L': ('x', -1, 1),
    'U': ('y', 1, -1),
    'D': ('y', -1, 1),
    'F': ('z', 1, -1),
    'B': ('z', -1, 1),
    'M': ('x', 0, 1),
    'E': ('y', 0, 1),
    'S': ('z', 0, -1),
}

# wide letter -> (slice partner, whether the partner takes the inverted suffix)
WIDE_PARTNERS: Dict[str, Tuple[str, bool]] = {
    'u': ('E', True),
    'd': ('E', False),
    'l': ('M', False),
    'r': ('M', True),
    'f': ('S', False),
    'b': ('S', True),
}


@dataclass(frozen=True)
class MoveToken:
    letter: str
    suffix: Suffix = Suffix.NONE

    def __str__(self) -> str:
        return f"{self.letter}{self.suffix.value}"

    def inverse(self) -> "MoveToken":
        return type(self)(self.letter, self.suffix.inverted())

    def components(self) -> List["MoveToken"]:
        """Single-layer tokens this token stands for."""
        return [self]


@dataclass(frozen=True)
class OuterFace(MoveToken):
    """Turn of one of the six outer faces (``U D L R F B``)."""


@dataclass(frozen=True)
class SliceFace(MoveToken):
    """Turn of a middle slice (``M E S``)."""


@dataclass(frozen=True)
class WideFace(MoveToken):
    """Outer face plus its adjacent slice (``u d l r f b``)."""

    def components(self) -> List[MoveToken]:
        partner, inverted = WIDE_PARTNERS[self.letter]
        partner_suffix = self.suffix.inverted() if inverted else self.suffix
        return [
            OuterFace(self.letter.upper(), self.suffix),
            SliceFace(partner, partner_suffix),
        ]


MoveLike = Union[str, MoveToken]


def parse_move(text: MoveLike) -> MoveToken:
    """
    Parse a move token.

    Args:
        text: A token such as ``"R"``, ``"U'"``, ``"F2"`` or ``"r"``; an
              already parsed MoveToken is returned as is

    Returns:
        MoveToken: An OuterFace, SliceFace or WideFace

    Raises:
        InvalidMoveToken: If the token does not match the grammar
    """
    if isinstance(text, MoveToken):
        return text
    if not isinstance(text, str):
        raise InvalidMoveToken(text)

    match = _TOKEN_RE.fullmatch(text)
    if match is None:
        raise InvalidMoveToken(text)

    letter, suffix = match.group(1), Suffix(match.group(2))
    if letter in OUTER_LETTERS:
        return OuterFace(letter, suffix)
    if letter in SLICE_LETTERS:
        return SliceFace(letter, suffix)
    return WideFace(letter, suffix)


def parse_moves(moves) -> List[MoveToken]:
    """Parse every token up front so a bad token rejects the whole sequence."""
    return [parse_move(move) for move in moves]


def expand_quarter_turns(move: MoveLike) -> List[MoveToken]:
    """
    Expand a token into single quarter-turn tokens, one per animation step.

    ``R2`` becomes ``R, R``; ``r'`` becomes ``R', M``; ``u2`` becomes
    ``U, U, E, E``. Both halves of a wide double are turned in their own
    unsuffixed direction, so for ``u2`` the slice animates opposite to the
    face; two quarter turns land in the same state either way.

    Args:
        move: Token to expand

    Returns:
        List[MoveToken]: Tokens with no ``2`` suffix
    """
    token = parse_move(move)
    quarters = []
    for part in token.components():
        if part.suffix is Suffix.DOUBLE:
            single = type(part)(part.letter, Suffix.NONE)
            quarters.extend([single, single])
        else:
            quarters.append(part)
    return quarters


def quarter_turn(token: MoveToken) -> PrimitiveTurn:
    """
    Convert a single-layer quarter-turn token into a PrimitiveTurn.

    Raises:
        InvalidMoveToken: If the token is wide or a double turn
    """
    if isinstance(token, WideFace) or token.suffix is Suffix.DOUBLE:
        raise InvalidMoveToken(str(token), details={"reason": "not a single quarter turn"})

    axis, layer, direction = LAYER_TABLE[token.letter]
    if token.suffix is Suffix.PRIME:
        direction = -direction
    return PrimitiveTurn(axis, layer, direction)


def expand(move: MoveLike) -> List[PrimitiveTurn]:
    """
    Expand a token into the primitive quarter turns to apply, in order.

    Args:
        move: Token string or MoveToken

    Returns:
        List[PrimitiveTurn]: One entry per quarter turn

    Raises:
        InvalidMoveToken: If the token does not match the grammar
    """
    return [quarter_turn(token) for token in expand_quarter_turns(move)]


def inverse(move: MoveLike) -> MoveToken:
    """Algebraic inverse of a token (``R`` <-> ``R'``, ``R2`` -> ``R2``)."""
    return parse_move(move).inverse()
