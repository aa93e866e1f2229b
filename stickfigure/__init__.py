"""
StickFigure - articulated stick figures with incrementally synced 2D views.

A skeleton of joints is posed by Euler rotations, propagated from the root
into world space, and projected onto any number of views that update their
drawing primitives in place.
"""

from .errors import (
    StickFigureError,
    SkeletonDefinitionError,
    InvalidPoseError,
    ShapeMismatchError,
    TopologyMismatchError,
)
from .kinematics import Joint, Shape, build_humanoid, regular_polygon, POSE_CONTROLS
from .render import ViewProjection, ViewTree, SvgSurface
from .figure import StickFigure

__version__ = "0.1.0"

__all__ = [
    "StickFigureError",
    "SkeletonDefinitionError",
    "InvalidPoseError",
    "ShapeMismatchError",
    "TopologyMismatchError",
    "Joint",
    "Shape",
    "build_humanoid",
    "regular_polygon",
    "POSE_CONTROLS",
    "ViewProjection",
    "ViewTree",
    "SvgSurface",
    "StickFigure",
]
