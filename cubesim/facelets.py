"""
Facelet extraction: flattening the 3D cubie state into the 54-sticker
URFDLB string consumed by two-phase and CFOP solvers.
"""

import numpy as np
from typing import Dict, List, NamedTuple, Optional, Tuple

from . import quaternion as quat
from .cube import Color, CubeState, Cubie
from .exceptions import CorruptState

FACE_ORDER = "URFDLB"
UNKNOWN = "X"
ALIGNMENT_THRESHOLD = 0.9


class FaceGeometry(NamedTuple):
    normal: Tuple[int, int, int]
    origin: Tuple[int, int, int]
    row_step: Tuple[int, int, int]
    col_step: Tuple[int, int, int]


FACE_GEOMETRY: Dict[str, FaceGeometry] = {
    'U': FaceGeometry((0, 1, 0), (-1, 1, -1), (0, 0, 1), (1, 0, 0)),
    'D': FaceGeometry((0, -1, 0), (-1, -1, 1), (0, 0, -1), (1, 0, 0)),
    'L': FaceGeometry((-1, 0, 0), (-1, 1, -1), (0, -1, 0), (0, 0, 1)),
    'R': FaceGeometry((1, 0, 0), (1, 1, 1), (0, -1, 0), (0, 0, -1)),
    'F': FaceGeometry((0, 0, 1), (-1, 1, 1), (0, -1, 0), (1, 0, 0)),
    'B': FaceGeometry((0, 0, -1), (1, 1, -1), (0, -1, 0), (-1, 0, 0)),
}

SOLVED_FACELETS = "".join(face * 9 for face in FACE_ORDER)


def cell_positions(face: str) -> List[Tuple[int, int, int]]:
    """
    Lattice positions of a face's nine cells in row-major reading order.

    Args:
        face (str): One of ``U R F D L B``

    Returns:
        List of nine positions, top-left to bottom-right seen from outside
    """
    geometry = FACE_GEOMETRY[face]
    origin = np.array(geometry.origin)
    row_step = np.array(geometry.row_step)
    col_step = np.array(geometry.col_step)
    return [
        tuple(int(c) for c in origin + row * row_step + col * col_step)
        for row in range(3)
        for col in range(3)
    ]


def facing_slot(cubie: Cubie, normal) -> int:
    """
    Index of the cubie's local sticker slot currently pointing along ``normal``.

    Raises:
        CorruptState: If no local axis is aligned with the normal
    """
    local = quat.rotate_vector(quat.conjugate(cubie.orientation), normal)
    axis = int(np.argmax(np.abs(local)))
    if abs(local[axis]) <= ALIGNMENT_THRESHOLD:
        raise CorruptState(
            f"Cubie {cubie.id} is not axis-aligned",
            details={"orientation": list(cubie.orientation)}
        )
    # slots are ordered +x, -x, +y, -y, +z, -z
    return axis * 2 + (0 if local[axis] > 0 else 1)


def face_colors(state: CubeState) -> Dict[str, List[Color]]:
    """
    Read the nine sticker colors of every face.

    Args:
        state (CubeState): The state to read

    Returns:
        Dict mapping face letter to its nine colors in reading order

    Raises:
        CorruptState: If a cell has no cubie or no sticker facing outward
    """
    index = state.position_index()
    colors = {}
    for face in FACE_ORDER:
        normal = FACE_GEOMETRY[face].normal
        cells = []
        for position in cell_positions(face):
            cubie = index.get(position)
            if cubie is None:
                raise CorruptState(f"No cubie at {position} on face {face}")
            color = cubie.facelets[facing_slot(cubie, normal)]
            if color is None:
                raise CorruptState(
                    f"Cubie {cubie.id} shows no sticker on face {face}",
                    details={"position": list(position)}
                )
            cells.append(color)
        colors[face] = cells
    return colors


def center_mapping(colors: Dict[str, List[Color]]) -> Dict[Color, str]:
    """
    Build the color -> face letter table from the six centers.

    Raises:
        CorruptState: If two centers carry the same color
    """
    mapping = {colors[face][4]: face for face in FACE_ORDER}
    if len(mapping) != len(FACE_ORDER):
        raise CorruptState("Center colors are not distinct")
    return mapping


def to_facelet_string(state: CubeState) -> str:
    """
    Convert a cube state into the 54-character solver string.

    Faces are emitted in U, R, F, D, L, B order, nine characters each.
    Colors are mapped to face letters through the center stickers; a color
    with no matching center becomes ``X``.

    Args:
        state (CubeState): The state to convert

    Returns:
        str: The facelet string
    """
    colors = face_colors(state)
    mapping = center_mapping(colors)
    return "".join(
        mapping.get(color, UNKNOWN)
        for face in FACE_ORDER
        for color in colors[face]
    )


def is_solved(state: CubeState) -> bool:
    """True when every face shows a single color."""
    return to_facelet_string(state) == SOLVED_FACELETS


def color_counts(state: CubeState) -> Dict[Color, int]:
    counts: Dict[Color, int] = {}
    for cells in face_colors(state).values():
        for color in cells:
            counts[color] = counts.get(color, 0) + 1
    return counts
