"""
Projection Pipeline

Composes an orthographic plane projection with a screen map into a single
world-to-screen matrix per view.

World space:
- Z is height, X is depth (into the screen for the front view), Y is left/right

Screen space:
- X grows to the right, Y grows downwards (so world height must be negated)
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Tuple, Union

from ..config import ViewConfig
from ..kinematics.transform import apply_to_points


# Rows select which world axis lands on screen X and screen Y
PLANE_PROJECTIONS = {
    # Front view: drop X, Y -> screen X, Z -> screen Y
    "yz": np.array([
        [0.0, 1.0, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]),
    # Side view: drop Y, X -> screen X, Z -> screen Y
    "xz": np.array([
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]),
    # Top view: drop Z, X -> screen X, Y -> screen Y
    "xy": np.array([
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]),
}


def plane_projection(plane: str) -> np.ndarray:
    """
    Orthographic projection onto one of the world coordinate planes.

    Args:
        plane: 'yz' (front), 'xz' (side) or 'xy' (top)

    Returns:
        4x4 projection matrix (a fresh copy)
    """
    try:
        return PLANE_PROJECTIONS[plane].copy()
    except KeyError:
        raise ValueError(
            f"Unknown projection plane: {plane}. Expected one of {list(PLANE_PROJECTIONS)}"
        ) from None


def screen_map(
    scale: Union[float, Tuple[float, float]],
    offset: Tuple[float, float],
) -> np.ndarray:
    """
    Map projected world units to screen pixels.

    A scalar scale s becomes (s, -s): screen Y grows downwards while world
    height should appear as "up". An explicit (sx, sy) pair is used as-is.

    Args:
        scale: Pixels per world unit, or an explicit (sx, sy) pair
        offset: Screen pixel (x, y) where the world origin lands

    Returns:
        4x4 scale + translation matrix
    """
    if np.isscalar(scale):
        sx, sy = float(scale), -float(scale)
    else:
        sx, sy = (float(s) for s in scale)
    ox, oy = offset
    return np.array([
        [sx, 0.0, 0.0, float(ox)],
        [0.0, sy, 0.0, float(oy)],
        [0.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def world_to_screen(screen: np.ndarray, plane: np.ndarray) -> np.ndarray:
    """Compose screen_map @ plane_projection into one matrix."""
    return np.asarray(screen, dtype=np.float64) @ np.asarray(plane, dtype=np.float64)


@dataclass(frozen=True, eq=False)
class ViewProjection:
    """
    Immutable world-to-screen mapping of one logical view.

    The matrix is stored read-only; build a new ViewProjection to change it.
    """
    name: str
    matrix: np.ndarray = field(repr=False)

    def __post_init__(self):
        matrix = np.array(self.matrix, dtype=np.float64)
        if matrix.shape != (4, 4):
            raise ValueError(f"World-to-screen matrix must be 4x4, got shape {matrix.shape}")
        matrix.setflags(write=False)
        object.__setattr__(self, "matrix", matrix)

    @classmethod
    def create(
        cls,
        name: str,
        plane: str = "yz",
        scale: Union[float, Tuple[float, float]] = 50.0,
        offset: Tuple[float, float] = (200.0, 200.0),
    ) -> "ViewProjection":
        """Build a view from a plane name and screen placement."""
        return cls(name, world_to_screen(screen_map(scale, offset), plane_projection(plane)))

    @classmethod
    def from_config(cls, view: ViewConfig) -> "ViewProjection":
        return cls.create(view.name, view.plane, view.scale, view.offset)

    def project(self, points: np.ndarray) -> np.ndarray:
        """
        Project world points to screen coordinates.

        Args:
            points: (N, 3) or (N, 4) world points

        Returns:
            (N, 2) screen coordinates
        """
        return apply_to_points(self.matrix, points)[:, :2]
