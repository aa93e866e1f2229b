"""Skeleton model and pose propagation."""

from .transform import (
    ORIGIN,
    translation_matrix,
    rotation_x,
    rotation_y,
    rotation_z,
    local_transform,
    apply_to_points,
)
from .joint import Joint, Shape, axis_index
from .shapes import regular_polygon
from .humanoid import build_humanoid, PoseControl, POSE_CONTROLS

__all__ = [
    "ORIGIN",
    "translation_matrix",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "local_transform",
    "apply_to_points",
    "Joint",
    "Shape",
    "axis_index",
    "regular_polygon",
    "build_humanoid",
    "PoseControl",
    "POSE_CONTROLS",
]
