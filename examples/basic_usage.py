"""
Basic usage examples for the CubeSim engine.
"""

from cubesim import (
    apply_move,
    apply_moves,
    create_solved_cube,
    expand_quarter_turns,
    generate_scramble,
    is_solved,
    to_facelet_string,
)
from cubesim.exceptions import InvalidMoveToken
from cubesim.facelets import face_colors
from cubesim.utils import format_moves, invert_moves


def example_solved_cube():
    """Create a solved cube and look at it."""
    print("=== Solved Cube Example ===")

    cube = create_solved_cube()
    print(f"Created cube: {cube}")
    print(f"Facelets: {to_facelet_string(cube)}")
    print(f"Solved: {is_solved(cube)}")

    core = cube.cubie_at((0, 0, 0))
    print(f"\nCore cubie id: {core.id}, stickers: {core.sticker_count}")
    print()


def example_moves():
    """Apply single moves and sequences."""
    print("=== Move Example ===")

    cube = create_solved_cube()
    after_r = apply_move(cube, "R")
    print(f"After R:  {to_facelet_string(after_r)}")
    print(f"Up face colors: {[c.value for c in face_colors(after_r)['U']]}")

    # The original state is never modified
    print(f"Original still solved: {is_solved(cube)}")

    sexy = ["R", "U", "R'", "U'"]
    state = cube
    for i in range(6):
        state = apply_moves(state, sexy)
        print(f"(R U R' U') x{i + 1}: solved={is_solved(state)}")
    print()


def example_expansion():
    """Show how tokens expand into quarter turns."""
    print("=== Expansion Example ===")

    for token in ["R2", "r", "u'", "M2"]:
        quarters = " ".join(str(q) for q in expand_quarter_turns(token))
        print(f"{token:>3} -> {quarters}")

    try:
        expand_quarter_turns("Rprime")
    except InvalidMoveToken as e:
        print(f"\nRejected: {e.message}")
    print()


def example_scramble():
    """Scramble and unscramble a cube."""
    print("=== Scramble Example ===")

    scramble = generate_scramble(20, rng=42)
    print(f"Scramble: {format_moves(scramble)}")

    state = apply_moves(create_solved_cube(), scramble)
    print(f"Scrambled: {to_facelet_string(state)}")

    inverse = invert_moves(scramble)
    print(f"\nInverse:  {format_moves(inverse)}")
    print(f"Solved again: {is_solved(apply_moves(state, inverse))}")
    print()


if __name__ == "__main__":
    example_solved_cube()
    example_moves()
    example_expansion()
    example_scramble()

    print("=== All examples completed! ===")
