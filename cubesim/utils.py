"""
Utility functions for working with move sequences.
"""

from typing import Iterable, List

from .exceptions import InvalidMoveToken
from .moves import MoveLike, MoveToken, expand_quarter_turns, parse_move, parse_moves


def split_moves(text: str) -> List[MoveToken]:
    """
    Parse a whitespace separated move string.

    Args:
        text (str): Moves such as ``"R U R' U'"``

    Returns:
        List[MoveToken]: The parsed tokens

    Raises:
        InvalidMoveToken: If any token is invalid
    """
    return parse_moves(text.split())


def format_moves(moves: Iterable[MoveLike]) -> str:
    """Join moves back into a single space separated string."""
    return " ".join(str(parse_move(move)) for move in moves)


def invert_moves(moves: Iterable[MoveLike]) -> List[MoveToken]:
    """
    Invert a move sequence.

    Args:
        moves: Tokens to invert

    Returns:
        List[MoveToken]: The inverse tokens in reverse order
    """
    return [token.inverse() for token in reversed(parse_moves(moves))]


def count_quarter_turns(moves: Iterable[MoveLike]) -> int:
    """Number of single-layer quarter turns the moves expand to."""
    return sum(len(expand_quarter_turns(move)) for move in moves)


def validate_move(move: MoveLike) -> bool:
    """
    Check that a token matches the move grammar.

    Args:
        move: The token to validate

    Returns:
        bool: True if the token is valid, False otherwise
    """
    try:
        parse_move(move)
    except InvalidMoveToken:
        return False
    return True
