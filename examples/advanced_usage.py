"""
Advanced usage examples for the CubeSim engine.
Drives the move sequencer the way an animated client would.
"""

import asyncio

from cubesim import MoveSequencer, is_solved
from cubesim.exceptions import SequencerBusy, SolverUnavailable
from cubesim.utils import format_moves

FRAMES_PER_MOVE = 4


def animate(sequencer):
    """Drain the queue, sampling a few interpolated frames per move."""
    while True:
        active = sequencer.start_next()
        if active is None:
            break

        for step in range(1, FRAMES_PER_MOVE + 1):
            frame = sequencer.frame(step / FRAMES_PER_MOVE)
            position, _ = frame.pose(26)
            if step == FRAMES_PER_MOVE // 2:
                print(f"  {active.move!s:<3} halfway, corner 26 at {position.round(3)}")

        sequencer.complete()


def example_scramble_and_undo():
    """Scramble, then undo a few moves."""
    print("=== Scramble and Undo Example ===")

    sequencer = MoveSequencer(rng=7)
    moves = sequencer.scramble(6)
    print(f"Scramble: {format_moves(moves)} (status: {sequencer.status.value})")

    try:
        sequencer.scramble()
    except SequencerBusy as e:
        print(f"Second scramble rejected: {e.message}")

    animate(sequencer)
    print(f"History: {len(sequencer.history)} quarter turns, status: {sequencer.status.value}")

    for _ in range(3):
        undone = sequencer.undo()
        print(f"Undo -> {undone.move}")
        animate(sequencer)
    print(f"History after undo: {len(sequencer.history)} quarter turns")
    print()


async def example_solve():
    """Solve a scrambled cube with the default solver."""
    print("=== Solve Example ===")

    sequencer = MoveSequencer(rng=11)
    sequencer.scramble(15)
    animate(sequencer)

    try:
        solution = await sequencer.solve()
    except SolverUnavailable as e:
        print(f"Solver unavailable: {e.message} (pip install cubesim[solver])")
        return

    print(f"Solution: {format_moves(solution)} (status: {sequencer.status.value})")
    animate(sequencer)
    print(f"Solved: {is_solved(sequencer.state)}")
    print()


if __name__ == "__main__":
    example_scramble_and_undo()
    asyncio.run(example_solve())

    print("=== All examples completed! ===")
