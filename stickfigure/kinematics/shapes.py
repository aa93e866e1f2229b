"""Polygon markers attached to joints (head, hands)."""

import numpy as np


def regular_polygon(n: int, radius: float) -> np.ndarray:
    """
    Generate a regular polygon on the local Oyz plane, centered at the origin.

    With enough points the polygon resembles a circle. Point i sits at angle
    2*pi*i/n, so the first point is (0, radius, 0).

    Args:
        n: Number of points; must be at least 3
        radius: Circumradius of the polygon

    Returns:
        (n, 4) homogeneous points in order
    """
    if n < 3:
        raise ValueError(f"A polygon needs at least 3 points, got {n}")
    if radius <= 0:
        raise ValueError(f"Polygon radius must be positive, got {radius}")

    angles = np.arange(n) * (2.0 * np.pi / n)
    points = np.zeros((n, 4))
    points[:, 1] = radius * np.cos(angles)
    points[:, 2] = radius * np.sin(angles)
    points[:, 3] = 1.0
    return points
