"""
Transform Builder

Homogeneous 4x4 rigid transforms for the kinematic chain.

All matrices are row-major float64 with the translation in the last column
and a last row of [0, 0, 0, 1]. A joint's local transform is always

    Rx(rx) @ Ry(ry) @ Rz(rz) @ T(0, 0, length)

i.e. the bone is laid along its local Z axis and then rotated about the
joint's own X, Y and Z axes.
"""

import numpy as np
from typing import Sequence


# Homogeneous origin of any local frame
ORIGIN = np.array([0.0, 0.0, 0.0, 1.0])


def translation_matrix(t: Sequence[float]) -> np.ndarray:
    """
    Create a 4x4 translation matrix.

    Args:
        t: (3,) translation vector

    Returns:
        4x4 matrix translating a point by t
    """
    T = np.eye(4)
    T[:3, 3] = np.asarray(t, dtype=np.float64)[:3]
    return T


def to_homogeneous_matrix(m: np.ndarray) -> np.ndarray:
    """
    Embed a 3x3 linear map in a 4x4 transformation matrix.

    The added row and column are zero except for the (3, 3) element, which
    is 1.
    """
    m = np.asarray(m, dtype=np.float64)
    if m.shape != (3, 3):
        raise ValueError(f"Expected a 3x3 matrix, got shape {m.shape}")
    H = np.eye(4)
    H[:3, :3] = m
    return H


def rotation_x(angle: float) -> np.ndarray:
    """4x4 rotation about the X axis (radians)."""
    c, s = np.cos(angle), np.sin(angle)
    return to_homogeneous_matrix(np.array([
        [1.0, 0.0, 0.0],
        [0.0, c, -s],
        [0.0, s, c],
    ]))


def rotation_y(angle: float) -> np.ndarray:
    """4x4 rotation about the Y axis (radians)."""
    c, s = np.cos(angle), np.sin(angle)
    return to_homogeneous_matrix(np.array([
        [c, 0.0, s],
        [0.0, 1.0, 0.0],
        [-s, 0.0, c],
    ]))


def rotation_z(angle: float) -> np.ndarray:
    """4x4 rotation about the Z axis (radians)."""
    c, s = np.cos(angle), np.sin(angle)
    return to_homogeneous_matrix(np.array([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0],
    ]))


def local_transform(length: float, rotation: Sequence[float]) -> np.ndarray:
    """
    Build a joint's local rigid transform.

    Args:
        length: Segment length along the local Z axis
        rotation: (x, y, z) Euler angles in radians

    Returns:
        4x4 matrix Rx @ Ry @ Rz @ T(0, 0, length)
    """
    rx, ry, rz = rotation
    Tz = translation_matrix((0.0, 0.0, length))
    return rotation_x(rx) @ (rotation_y(ry) @ (rotation_z(rz) @ Tz))


def as_homogeneous_points(points: np.ndarray) -> np.ndarray:
    """Promote (N, 3) points to (N, 4) with w = 1; (N, 4) passes through."""
    pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
    if pts.shape[1] == 3:
        return np.hstack([pts, np.ones((len(pts), 1))])
    if pts.shape[1] != 4:
        raise ValueError(f"Expected (N, 3) or (N, 4) points, got shape {pts.shape}")
    return pts


def apply_to_points(matrix: np.ndarray, points: np.ndarray) -> np.ndarray:
    """
    Apply a 4x4 matrix to every point.

    Args:
        matrix: 4x4 transformation matrix
        points: (N, 3) or (N, 4) points

    Returns:
        (N, 4) transformed homogeneous points
    """
    pts = as_homogeneous_points(points)
    return (matrix @ pts.T).T
