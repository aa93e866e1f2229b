"""
StickFigure Errors

Structural and numeric failures raised while building, posing or rendering
a figure. All of them are raised before any state is partially updated.
"""

from typing import Optional


class StickFigureError(Exception):
    """Base class for all stick figure failures."""


class SkeletonDefinitionError(StickFigureError, ValueError):
    """A joint was constructed or linked with invalid parameters."""


class InvalidPoseError(StickFigureError, ValueError):
    """A rotation or transform would produce non-finite world coordinates."""


class ShapeMismatchError(StickFigureError):
    """A view node received a point list that does not fit its shape."""


class TopologyMismatchError(StickFigureError):
    """
    A view tree no longer mirrors its skeleton.

    Raised when a view node's child count (or shape) diverges from the joint
    it mirrors. The view subtree must be rebuilt.
    """

    def __init__(
        self,
        path: str,
        expected: int,
        actual: int,
        detail: Optional[str] = None,
    ):
        self.path = path
        self.expected = expected
        self.actual = actual
        message = (
            f"View tree does not mirror skeleton at '{path}': "
            f"joint has {expected} children, view node has {actual}"
        )
        if detail:
            message = f"View tree does not mirror skeleton at '{path}': {detail}"
        super().__init__(message)
