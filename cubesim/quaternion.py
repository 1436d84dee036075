"""
Quaternion helpers used to rotate cubies.

Quaternions are stored as ``(w, x, y, z)`` tuples so they can live inside
frozen dataclasses; the math is done on numpy arrays.
"""

import numpy as np
from typing import Sequence, Tuple

Quaternion = Tuple[float, float, float, float]

IDENTITY: Quaternion = (1.0, 0.0, 0.0, 0.0)

AXES = {
    'x': np.array([1.0, 0.0, 0.0]),
    'y': np.array([0.0, 1.0, 0.0]),
    'z': np.array([0.0, 0.0, 1.0]),
}


def from_axis_angle(axis: str, angle: float) -> np.ndarray:
    """
    Build a unit quaternion for a rotation about a principal axis.

    Args:
        axis (str): The axis to rotate around ('x', 'y', or 'z')
        angle (float): Rotation angle in radians (right-hand rule)

    Returns:
        np.ndarray: The quaternion as ``[w, x, y, z]``

    Raises:
        ValueError: If axis is not 'x', 'y', or 'z'
    """
    if axis not in AXES:
        raise ValueError(f"Invalid axis '{axis}'. Must be 'x', 'y', or 'z'")

    half = angle / 2.0
    return np.concatenate(([np.cos(half)], np.sin(half) * AXES[axis]))


def multiply(a: Sequence[float], b: Sequence[float]) -> np.ndarray:
    """Hamilton product ``a * b``."""
    w1, x1, y1, z1 = a
    w2, x2, y2, z2 = b
    return np.array([
        w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
        w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
        w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
    ])


def normalize(q: Sequence[float]) -> np.ndarray:
    q = np.asarray(q, dtype=float)
    norm = np.linalg.norm(q)
    if norm == 0.0:
        raise ValueError("Cannot normalize a zero quaternion")
    return q / norm


def conjugate(q: Sequence[float]) -> np.ndarray:
    """Inverse of a unit quaternion."""
    w, x, y, z = q
    return np.array([w, -x, -y, -z])


def rotate_vector(q: Sequence[float], v: Sequence[float]) -> np.ndarray:
    """
    Rotate a 3-vector by a unit quaternion (``q * v * q^-1``).

    Args:
        q: Unit quaternion ``(w, x, y, z)``
        v: Vector to rotate

    Returns:
        np.ndarray: The rotated vector
    """
    w = q[0]
    u = np.asarray(q[1:], dtype=float)
    v = np.asarray(v, dtype=float)
    t = 2.0 * np.cross(u, v)
    return v + w * t + np.cross(u, t)


def same_rotation(a: Sequence[float], b: Sequence[float], tolerance: float = 1e-9) -> bool:
    """True when two unit quaternions describe the same rotation (``q`` and ``-q`` included)."""
    return abs(float(np.dot(a, b))) >= 1.0 - tolerance


def as_tuple(q: Sequence[float]) -> Quaternion:
    return tuple(float(c) for c in q)
