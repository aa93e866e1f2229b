"""
Drawing Surfaces

A drawing surface creates, updates and removes two kinds of primitives:
straight line segments and closed polygons. View trees only ever talk to this small
contract, so the same skeleton can be shown on an in-memory SVG document or
on a live Dear PyGui drawlist.

Points passed to a surface are 2D screen coordinates; any extra components
are ignored.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Sequence, Union, runtime_checkable

from ..config import ExportConfig
from ..utils.logging import export_log


@runtime_checkable
class DrawingSurface(Protocol):
    """Primitive create/update/remove contract consumed by view nodes."""

    def create_line(self, p1: Sequence[float], p2: Sequence[float]) -> Any:
        ...

    def update_line(self, handle: Any, p1: Sequence[float], p2: Sequence[float]) -> None:
        ...

    def create_polygon(self, points: np.ndarray) -> Any:
        ...

    def update_polygon(self, handle: Any, points: np.ndarray) -> None:
        ...

    def remove(self, handle: Any) -> None:
        ...


def _fmt(value: float) -> str:
    """Format a coordinate compactly (no trailing zeros, no '-0')."""
    text = f"{float(value):.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def closed_path_data(points: np.ndarray) -> str:
    """
    Build an SVG path string through all points, closed back to the first.

    Args:
        points: (N, >=2) screen points, visited in order

    Returns:
        Value for the 'd' attribute, e.g. "M 1 2 L 3 4 L 5 6 Z"
    """
    pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
    if len(pts) == 0:
        raise ValueError("Cannot build a path from zero points")

    commands = []
    for i, (x, y) in enumerate(pts[:, :2]):
        op = "M" if i == 0 else "L"
        commands.append(f"{op} {_fmt(x)} {_fmt(y)}")
    commands.append("Z")
    return " ".join(commands)


@dataclass
class SvgLine:
    """An SVG <line> element."""
    x1: float
    y1: float
    x2: float
    y2: float

    def set_points(self, p1: Sequence[float], p2: Sequence[float]) -> None:
        self.x1, self.y1 = float(p1[0]), float(p1[1])
        self.x2, self.y2 = float(p2[0]), float(p2[1])

    def to_markup(self, style: str) -> str:
        return (
            f'<line x1="{_fmt(self.x1)}" y1="{_fmt(self.y1)}" '
            f'x2="{_fmt(self.x2)}" y2="{_fmt(self.y2)}" style="{style}"/>'
        )


@dataclass
class SvgPath:
    """An SVG <path> element holding a closed polygon."""
    d: str
    points: np.ndarray = field(repr=False)

    def set_points(self, points: np.ndarray) -> None:
        self.points = np.array(points, dtype=np.float64)[:, :2]
        self.d = closed_path_data(self.points)

    @property
    def segment_count(self) -> int:
        """Number of straight segments, including the closing one."""
        return self.d.count("L") + self.d.count("Z")

    def to_markup(self, style: str) -> str:
        return f'<path d="{self.d}" style="{style}; fill:none"/>'


SvgElement = Union[SvgLine, SvgPath]


class SvgSurface:
    """
    In-memory SVG document.

    Elements are kept in creation order and mutated in place on update, so a
    handle stays valid for the lifetime of the surface. The operation
    counters make the in-place discipline observable.
    """

    def __init__(self, export: Optional[ExportConfig] = None):
        self.export = export or ExportConfig()
        self.elements: List[SvgElement] = []
        self.created = 0
        self.updated = 0
        self.removed = 0

    def create_line(self, p1: Sequence[float], p2: Sequence[float]) -> SvgLine:
        line = SvgLine(float(p1[0]), float(p1[1]), float(p2[0]), float(p2[1]))
        self.elements.append(line)
        self.created += 1
        return line

    def update_line(self, handle: SvgLine, p1: Sequence[float], p2: Sequence[float]) -> None:
        handle.set_points(p1, p2)
        self.updated += 1

    def create_polygon(self, points: np.ndarray) -> SvgPath:
        pts = np.array(points, dtype=np.float64)[:, :2]
        path = SvgPath(closed_path_data(pts), pts)
        self.elements.append(path)
        self.created += 1
        return path

    def update_polygon(self, handle: SvgPath, points: np.ndarray) -> None:
        handle.set_points(points)
        self.updated += 1

    def remove(self, handle: SvgElement) -> None:
        """Drop an element, matched by identity."""
        remaining = [element for element in self.elements if element is not handle]
        if len(remaining) == len(self.elements):
            raise KeyError(f"Element {handle!r} is not on this surface")
        self.elements = remaining
        self.removed += 1

    def to_markup(self) -> str:
        """Serialize the current elements to a standalone SVG document."""
        style = f"stroke:{self.export.stroke}; stroke-width:{_fmt(self.export.stroke_width)}"
        lines = [
            f'<svg xmlns="http://www.w3.org/2000/svg" '
            f'width="{self.export.width}" height="{self.export.height}">'
        ]
        lines.extend(f"  {element.to_markup(style)}" for element in self.elements)
        lines.append("</svg>")
        export_log.debug(f"Serialized {len(self.elements)} SVG elements")
        return "\n".join(lines) + "\n"
