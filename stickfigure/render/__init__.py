"""Projection and incremental rendering of skeleton views."""

from .projection import (
    PLANE_PROJECTIONS,
    plane_projection,
    screen_map,
    world_to_screen,
    ViewProjection,
)
from .surface import DrawingSurface, SvgSurface, SvgLine, SvgPath, closed_path_data
from .view_tree import ViewNode, ViewTree, build_view_tree

__all__ = [
    "PLANE_PROJECTIONS",
    "plane_projection",
    "screen_map",
    "world_to_screen",
    "ViewProjection",
    "DrawingSurface",
    "SvgSurface",
    "SvgLine",
    "SvgPath",
    "closed_path_data",
    "ViewNode",
    "ViewTree",
    "build_view_tree",
]
