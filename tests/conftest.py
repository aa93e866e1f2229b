"""
Shared test fixtures for StickFigure testing.

Provides small skeletons, a recording drawing surface, and the standard
front/side projections.
"""

import pytest
import numpy as np
from typing import Any, List, Tuple

from stickfigure.kinematics.joint import Joint, Shape
from stickfigure.kinematics.humanoid import build_humanoid
from stickfigure.kinematics.shapes import regular_polygon
from stickfigure.render.projection import ViewProjection, screen_map, plane_projection, world_to_screen


# ============================================================================
# Synthetic Skeletons
# ============================================================================

def make_chain(child_rotation=(0.0, 0.0, 0.0)) -> Joint:
    """Root at the origin with length 0, one child of length 1."""
    root = Joint("root", 0.0)
    root.add_child(Joint("child", 1.0, child_rotation))
    return root


def make_branching_skeleton() -> Joint:
    """
    A small tree with a zero-length anchor, two branches and a polygon.

        pelvis (0)
        +-- spine (0.5)
        |   +-- head (0.2, polygon)
        |   +-- arm (0.3)
        +-- leg (0.4)
    """
    pelvis = Joint("pelvis", 0.0, (0.0, 0.0, 0.3))
    spine = pelvis.add_child(Joint("spine", 0.5, (0.2, -0.1, 0.0)))
    spine.add_child(Joint("head", 0.2, shape=Shape.POLYGON, polygon=regular_polygon(6, 0.1)))
    spine.add_child(Joint("arm", 0.3, (1.2, 0.4, -0.7)))
    pelvis.add_child(Joint("leg", 0.4, (np.pi - 0.2, 0.0, 0.1)))
    return pelvis


def random_rotations(rng: np.random.Generator, n: int) -> np.ndarray:
    """n random Euler triples in [-pi, pi]."""
    return rng.uniform(-np.pi, np.pi, size=(n, 3))


# ============================================================================
# Recording Surface
# ============================================================================

class RecordingSurface:
    """Drawing surface that records every call and hands out integer handles."""

    def __init__(self):
        self.calls: List[Tuple[str, Any]] = []
        self.primitives = {}
        self._next_handle = 0

    def _new_handle(self, kind: str, points) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self.primitives[handle] = (kind, np.array(points, dtype=np.float64))
        return handle

    def create_line(self, p1, p2):
        self.calls.append(("create_line", (p1, p2)))
        return self._new_handle("line", [p1[:2], p2[:2]])

    def update_line(self, handle, p1, p2):
        self.calls.append(("update_line", handle))
        self.primitives[handle] = ("line", np.array([p1[:2], p2[:2]], dtype=np.float64))

    def create_polygon(self, points):
        self.calls.append(("create_polygon", len(points)))
        return self._new_handle("polygon", np.asarray(points)[:, :2])

    def update_polygon(self, handle, points):
        self.calls.append(("update_polygon", handle))
        self.primitives[handle] = ("polygon", np.asarray(points, dtype=np.float64)[:, :2])

    def remove(self, handle):
        self.calls.append(("remove", handle))
        del self.primitives[handle]

    def count(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def chain():
    return make_chain()


@pytest.fixture
def branching():
    return make_branching_skeleton()


@pytest.fixture
def humanoid():
    return build_humanoid()


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def front_projection():
    """Drop X, Y -> screen X, Z -> screen Y, scale (50, -50), origin at (100, 100)."""
    matrix = world_to_screen(screen_map((50.0, -50.0), (100.0, 100.0)), plane_projection("yz"))
    return ViewProjection("front", matrix)


@pytest.fixture
def side_projection():
    return ViewProjection.create("side", "xz", 50.0, (300.0, 100.0))


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for test files."""
    return tmp_path
