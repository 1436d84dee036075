"""
Random scramble generation.
"""

import random
from typing import List, Optional, Union

from .moves import OUTER_LETTERS, MoveToken, OuterFace, Suffix

DEFAULT_SCRAMBLE_LENGTH = 20

SCRAMBLE_SUFFIXES = (Suffix.NONE, Suffix.PRIME, Suffix.DOUBLE)


def _resolve_rng(rng: Union[random.Random, int, None]) -> random.Random:
    if isinstance(rng, random.Random):
        return rng
    return random.Random(rng)


def generate_scramble(
    length: int = DEFAULT_SCRAMBLE_LENGTH,
    rng: Optional[Union[random.Random, int]] = None
) -> List[MoveToken]:
    """
    Generate a random scramble of outer-face turns.

    The same face is never drawn twice in a row, so no two neighbouring
    tokens cancel or merge.

    Args:
        length (int): Number of tokens (default: 20)
        rng: A ``random.Random`` instance or an integer seed for
             reproducible scrambles

    Returns:
        List[MoveToken]: The scramble

    Raises:
        ValueError: If length is negative
    """
    if length < 0:
        raise ValueError("Scramble length must not be negative")

    rng = _resolve_rng(rng)
    moves = []
    last_face = None

    for _ in range(length):
        face = rng.choice(OUTER_LETTERS)
        while face == last_face:
            face = rng.choice(OUTER_LETTERS)
        moves.append(OuterFace(face, rng.choice(SCRAMBLE_SUFFIXES)))
        last_face = face

    return moves
