"""
Dear PyGui Drawing Surface

Draws view primitives onto a Dear PyGui drawlist. Lines become draw_line
items and polygons become closed draw_polyline items; updates reconfigure
the existing item instead of deleting and re-adding it.
"""

import dearpygui.dearpygui as dpg
import numpy as np
from typing import List, Sequence, Tuple, Union


Color = Tuple[int, int, int, int]


class DearPyGuiSurface:
    """Drawing surface bound to one drawlist."""

    def __init__(
        self,
        drawlist: Union[int, str],
        color: Color = (230, 230, 230, 255),
        thickness: float = 2.0,
    ):
        """
        Args:
            drawlist: Tag or id of an existing drawlist
            color: RGBA stroke color
            thickness: Stroke thickness in pixels
        """
        self.drawlist = drawlist
        self.color = color
        self.thickness = thickness
        self.items: List[Union[int, str]] = []

    @staticmethod
    def _point(p: Sequence[float]) -> List[float]:
        return [float(p[0]), float(p[1])]

    def create_line(self, p1: Sequence[float], p2: Sequence[float]) -> Union[int, str]:
        item = dpg.draw_line(
            self._point(p1),
            self._point(p2),
            color=self.color,
            thickness=self.thickness,
            parent=self.drawlist,
        )
        self.items.append(item)
        return item

    def update_line(self, handle: Union[int, str], p1: Sequence[float], p2: Sequence[float]) -> None:
        dpg.configure_item(handle, p1=self._point(p1), p2=self._point(p2))

    def create_polygon(self, points: np.ndarray) -> Union[int, str]:
        item = dpg.draw_polyline(
            [self._point(p) for p in points],
            closed=True,
            color=self.color,
            thickness=self.thickness,
            parent=self.drawlist,
        )
        self.items.append(item)
        return item

    def update_polygon(self, handle: Union[int, str], points: np.ndarray) -> None:
        dpg.configure_item(handle, points=[self._point(p) for p in points])

    def remove(self, handle: Union[int, str]) -> None:
        dpg.delete_item(handle)
        self.items.remove(handle)
