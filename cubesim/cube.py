"""
Core cubie model and immutable cube state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

from .exceptions import CorruptState
from .quaternion import IDENTITY, Quaternion, same_rotation

Position = Tuple[int, int, int]


class Color(str, Enum):
    WHITE = "white"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"
    GREEN = "green"
    BLUE = "blue"


# Local facelet slots in the cubie's unrotated frame: +x, -x, +y, -y, +z, -z
SLOT_NORMALS: Tuple[Position, ...] = (
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
)

SOLVED_SLOT_COLORS: Tuple[Color, ...] = (
    Color.RED,
    Color.ORANGE,
    Color.WHITE,
    Color.YELLOW,
    Color.GREEN,
    Color.BLUE,
)

Facelets = Tuple[Optional[Color], ...]


@dataclass(frozen=True, eq=False)
class Cubie:
    """
    One of the 27 sub-cubes.

    Attributes:
        id (int): Stable identity assigned at construction
        position (Position): Lattice position, each coordinate in {-1, 0, 1}
        orientation (Quaternion): Accumulated rotation ``(w, x, y, z)``
        facelets (Facelets): Six local sticker slots, ``None`` where bare
    """

    id: int
    position: Position
    orientation: Quaternion = IDENTITY
    facelets: Facelets = field(default=(None,) * 6)

    @property
    def sticker_count(self) -> int:
        return sum(1 for color in self.facelets if color is not None)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cubie):
            return NotImplemented
        return (
            self.id == other.id
            and self.position == other.position
            and self.facelets == other.facelets
            and same_rotation(self.orientation, other.orientation)
        )

    def __hash__(self) -> int:
        return hash((self.id, self.position, self.facelets))


@dataclass(frozen=True)
class CubeState:
    """
    Immutable snapshot of all 27 cubies, ordered by id.

    Every operation on a CubeState returns a new one; nothing here is ever
    mutated after construction.
    """

    cubies: Tuple[Cubie, ...]

    def __post_init__(self):
        if len(self.cubies) != 27:
            raise CorruptState(f"Expected 27 cubies, got {len(self.cubies)}")

        positions = {cubie.position for cubie in self.cubies}
        if len(positions) != 27:
            raise CorruptState("Cubie positions are not a bijection onto the 3x3x3 lattice")

        for cubie in self.cubies:
            if any(c not in (-1, 0, 1) for c in cubie.position):
                raise CorruptState(
                    f"Cubie {cubie.id} is off the lattice",
                    details={"position": list(cubie.position)}
                )

    def __iter__(self) -> Iterator[Cubie]:
        return iter(self.cubies)

    def __len__(self) -> int:
        return len(self.cubies)

    def by_id(self, cubie_id: int) -> Cubie:
        for cubie in self.cubies:
            if cubie.id == cubie_id:
                return cubie
        raise KeyError(cubie_id)

    def position_index(self) -> Dict[Position, Cubie]:
        """Map every lattice position to the cubie currently occupying it."""
        return {cubie.position: cubie for cubie in self.cubies}

    def cubie_at(self, position: Position) -> Cubie:
        """
        Get the cubie at a lattice position.

        Raises:
            CorruptState: If no cubie sits at that position
        """
        key = tuple(int(round(c)) for c in position)
        for cubie in self.cubies:
            if cubie.position == key:
                return cubie
        raise CorruptState(f"No cubie at position {key}", details={"position": list(key)})

    def __repr__(self) -> str:
        moved = sum(1 for cubie in self.cubies if cubie != _home(cubie))
        return f"CubeState(cubies=27, displaced={moved})"


def _home(cubie: Cubie) -> Cubie:
    return Cubie(cubie.id, _solved_position(cubie.id), IDENTITY, cubie.facelets)


def _solved_position(cubie_id: int) -> Position:
    # ids are assigned iterating x, then y, then z over -1..1
    x, rest = divmod(cubie_id, 9)
    y, z = divmod(rest, 3)
    return (x - 1, y - 1, z - 1)


def solved_facelets(position: Position) -> Facelets:
    """
    Sticker slots a cubie carries when it sits at ``position`` on a solved cube.

    Args:
        position (Position): Lattice position of the cubie

    Returns:
        Facelets: The six slot colors, ``None`` for inner faces
    """
    slots = []
    for normal, color in zip(SLOT_NORMALS, SOLVED_SLOT_COLORS):
        axis = next(i for i, c in enumerate(normal) if c != 0)
        slots.append(color if position[axis] == normal[axis] else None)
    return tuple(slots)


def create_solved_cube() -> CubeState:
    """
    Create a cube in the solved configuration.

    Returns:
        CubeState: 27 cubies with identity orientation, the core included
    """
    cubies = []
    for cubie_id in range(27):
        position = _solved_position(cubie_id)
        cubies.append(Cubie(cubie_id, position, IDENTITY, solved_facelets(position)))
    return CubeState(tuple(cubies))
