"""
Skeleton Joints

A stick figure is a tree of Joint instances. Each joint stores only its
relative pose parameters (segment length, Euler rotation, shape). Its world
space transform and endpoints are always derived by propagating transforms
down from the root, never cached at construction time.
"""

import numpy as np
from enum import Enum
from typing import Optional, List, Iterator, Sequence, Union

from .transform import ORIGIN, local_transform, apply_to_points, as_homogeneous_points
from ..errors import SkeletonDefinitionError, InvalidPoseError
from ..utils.logging import skeleton_log


class Shape(Enum):
    """How a joint is drawn."""
    SEGMENT = "segment"  # Line from the joint's world start to its world end
    POLYGON = "polygon"  # Closed polygon through its local points


AXES = {"x": 0, "y": 1, "z": 2}

Axis = Union[str, int]


def axis_index(axis: Axis) -> int:
    """Map 'x'/'y'/'z' (or 0/1/2) to a rotation component index."""
    if isinstance(axis, str):
        key = axis.lower()
        if key in AXES:
            return AXES[key]
    elif isinstance(axis, (int, np.integer)) and 0 <= axis <= 2:
        return int(axis)
    raise ValueError(f"Unknown rotation axis: {axis!r}. Expected 'x', 'y', 'z' or 0-2")


def _check_rotation(name: str, rotation: np.ndarray) -> None:
    if not np.all(np.isfinite(rotation)):
        raise InvalidPoseError(
            f"Joint '{name}' has a non-finite rotation {rotation.tolist()}"
        )


class Joint:
    """
    A node of the skeleton tree.

    Attributes:
        name: Identifier used by the pose-edit surface
        length: Segment length along the local Z axis (0 for anchors)
        rotation: (3,) Euler angles in radians, applied X then Y then Z
        shape: Shape.SEGMENT or Shape.POLYGON, fixed at construction
        polygon: (N, 4) local-frame points for polygon joints, else None
        origin: (3,) start point in the parent frame; informational only, since
            world_start is always derived from the parent transform
        children: Ordered child joints; order is the traversal order

    Derived by propagate():
        local_transform, world_transform, world_start, world_end
    """

    def __init__(
        self,
        name: str,
        length: float = 0.0,
        rotation: Sequence[float] = (0.0, 0.0, 0.0),
        shape: Optional[Shape] = None,
        polygon: Optional[np.ndarray] = None,
        origin: Sequence[float] = (0.0, 0.0, 0.0),
    ):
        if not np.isfinite(length) or length < 0:
            raise SkeletonDefinitionError(
                f"Joint '{name}' needs a finite, non-negative length, got {length}"
            )

        if shape is None:
            shape = Shape.SEGMENT if polygon is None else Shape.POLYGON

        if shape == Shape.POLYGON:
            if polygon is None:
                raise SkeletonDefinitionError(f"Polygon joint '{name}' has no points")
            polygon = as_homogeneous_points(polygon)
            if len(polygon) < 3:
                raise SkeletonDefinitionError(
                    f"Polygon joint '{name}' needs at least 3 points, got {len(polygon)}"
                )
        elif polygon is not None:
            raise SkeletonDefinitionError(
                f"Segment joint '{name}' cannot carry polygon points"
            )

        origin = np.asarray(origin, dtype=np.float64)
        if origin.shape != (3,) or not np.all(np.isfinite(origin)):
            raise SkeletonDefinitionError(
                f"Joint '{name}' origin must be 3 finite values, got {origin.tolist()}"
            )

        self.name = name
        self.length = float(length)
        self.shape = shape
        self.polygon = polygon
        self.origin = origin
        self.children: List["Joint"] = []
        self.parent: Optional["Joint"] = None

        self._rotation = np.zeros(3)
        self.rotation = rotation

        # Derived state, filled in by propagate()
        self.local_transform: Optional[np.ndarray] = None
        self.world_transform: Optional[np.ndarray] = None
        self.world_start: Optional[np.ndarray] = None
        self.world_end: Optional[np.ndarray] = None

    def __repr__(self) -> str:
        return (
            f"Joint({self.name!r}, length={self.length}, "
            f"rotation={self._rotation.tolist()}, shape={self.shape.value})"
        )

    @property
    def rotation(self) -> np.ndarray:
        """(x, y, z) Euler angles in radians."""
        return self._rotation

    @rotation.setter
    def rotation(self, value: Sequence[float]) -> None:
        rotation = np.asarray(value, dtype=np.float64)
        if rotation.shape != (3,):
            raise SkeletonDefinitionError(
                f"Joint '{self.name}' rotation must have 3 components, got shape {rotation.shape}"
            )
        _check_rotation(self.name, rotation)
        self._rotation = rotation.copy()

    @property
    def is_propagated(self) -> bool:
        return self.world_transform is not None

    def add_child(self, child: "Joint") -> "Joint":
        """
        Attach a child joint after any existing children.

        Returns:
            The child, so chains can be built inline
        """
        if child.parent is not None:
            raise SkeletonDefinitionError(
                f"Joint '{child.name}' is already attached to '{child.parent.name}'"
            )
        if any(j is self for j in child.iter_joints()):
            raise SkeletonDefinitionError(
                f"Attaching '{child.name}' under '{self.name}' would create a cycle"
            )
        child.parent = self
        self.children.append(child)
        return child

    def iter_joints(self) -> Iterator["Joint"]:
        """Depth-first pre-order traversal, children in list order."""
        yield self
        for child in self.children:
            yield from child.iter_joints()

    def count(self) -> int:
        """Number of joints in this subtree."""
        return sum(1 for _ in self.iter_joints())

    def find(self, name: str) -> "Joint":
        """Find a joint in this subtree by name."""
        for joint in self.iter_joints():
            if joint.name == name:
                return joint
        raise KeyError(f"No joint named '{name}' under '{self.name}'")

    def set_rotation_axis(self, axis: Axis, radians: float) -> None:
        """
        Change a single rotation component.

        The caller is responsible for re-propagating the skeleton and every
        observing view afterwards.
        """
        index = axis_index(axis)
        if not np.isfinite(radians):
            raise InvalidPoseError(
                f"Joint '{self.name}' rotation about {'xyz'[index]} must be finite, got {radians}"
            )
        self._rotation[index] = float(radians)

    def propagate(self, parent_world_transform: Optional[np.ndarray] = None) -> None:
        """
        Recompute world transforms and endpoints for this whole subtree.

        Every rotation in the subtree is checked before any joint is touched,
        so a failure leaves the previous propagation intact.

        Args:
            parent_world_transform: 4x4 world transform of the parent frame;
                identity for the root
        """
        if parent_world_transform is None:
            parent_world_transform = np.eye(4)
        else:
            parent_world_transform = np.asarray(parent_world_transform, dtype=np.float64)
            if parent_world_transform.shape != (4, 4):
                raise InvalidPoseError(
                    f"Parent transform must be 4x4, got shape {parent_world_transform.shape}"
                )
            if not np.all(np.isfinite(parent_world_transform)):
                skeleton_log.error(f"Non-finite parent transform passed to '{self.name}'")
                raise InvalidPoseError(
                    f"Parent transform of '{self.name}' contains non-finite values"
                )

        try:
            for joint in self.iter_joints():
                _check_rotation(joint.name, joint.rotation)
        except InvalidPoseError as e:
            skeleton_log.error(f"Propagation aborted: {e}")
            raise

        self._propagate(parent_world_transform)
        skeleton_log.debug(f"Propagated pose from '{self.name}'")

    def _propagate(self, parent_world_transform: np.ndarray) -> None:
        self.local_transform = local_transform(self.length, self._rotation)
        self.world_start = parent_world_transform @ ORIGIN
        self.world_transform = parent_world_transform @ self.local_transform
        self.world_end = self.world_transform @ ORIGIN

        for child in self.children:
            child._propagate(self.world_transform)

    def world_points(self) -> np.ndarray:
        """
        World-space points describing this joint's drawable.

        Returns:
            (2, 4) [world_start, world_end] for a segment, or (N, 4) polygon
            points transformed by world_transform
        """
        if not self.is_propagated:
            raise InvalidPoseError(f"Joint '{self.name}' has not been propagated yet")

        if self.shape == Shape.POLYGON:
            return apply_to_points(self.world_transform, self.polygon)
        return np.vstack([self.world_start, self.world_end])
