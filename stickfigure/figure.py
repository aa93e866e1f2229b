"""
Stick Figure Coordinator

Owns one skeleton and every view observing it. Pose edits go through the
coordinator, which re-propagates the skeleton and then each view, in that
order, before returning.
"""

import numpy as np
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Sequence

from .config import StickFigureConfig
from .errors import InvalidPoseError, SkeletonDefinitionError, StickFigureError
from .kinematics.humanoid import build_humanoid
from .kinematics.joint import Axis, Joint, axis_index
from .render.projection import ViewProjection
from .render.surface import DrawingSurface, SvgSurface
from .render.view_tree import ViewTree
from .utils.logging import skeleton_log, view_log, export_log


def _check_unique_names(skeleton: Joint) -> None:
    names = [joint.name for joint in skeleton.iter_joints()]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise SkeletonDefinitionError(f"Joint names must be unique, duplicated: {duplicates}")


class StickFigure:
    """
    A skeleton plus the views rendering it.

    Example:
        figure = StickFigure(build_humanoid())
        figure.add_view(ViewProjection.create("front", "yz"), SvgSurface())
        figure.refresh()
        figure.set_rotation_degrees("left_lower_leg", "y", 45.0)
    """

    def __init__(self, skeleton: Joint):
        _check_unique_names(skeleton)
        self.skeleton = skeleton
        self._views: Dict[str, ViewTree] = {}

    @property
    def views(self) -> Mapping[str, ViewTree]:
        """Read-only mapping of view name to view tree."""
        return MappingProxyType(self._views)

    def joint(self, name: str) -> Joint:
        return self.skeleton.find(name)

    def add_view(self, projection: ViewProjection, surface: DrawingSurface) -> ViewTree:
        """
        Attach a new view. If the skeleton has already been propagated the
        view is drawn immediately.
        """
        if projection.name in self._views:
            raise ValueError(f"A view named '{projection.name}' already exists")

        view = ViewTree(self.skeleton, projection, surface)
        self._views[projection.name] = view
        if self.skeleton.is_propagated:
            view.propagate(self.skeleton)
        return view

    def remove_view(self, name: str) -> ViewTree:
        """Detach a view; its primitives stay on its surface."""
        try:
            return self._views.pop(name)
        except KeyError:
            raise KeyError(f"No view named '{name}'") from None

    def get_view(self, name: str) -> ViewTree:
        try:
            return self._views[name]
        except KeyError:
            raise KeyError(f"No view named '{name}'") from None

    def refresh(self) -> None:
        """
        Propagate the skeleton, then render every view.

        View topology is checked up front, so a mismatch aborts the pass
        before the skeleton or any view changes.
        """
        for view in self._views.values():
            view.root.check_topology(self.skeleton)
        self.skeleton.propagate()
        for view in self._views.values():
            view.propagate(self.skeleton)

    def rebuild_views(self) -> None:
        """
        Re-mirror every view after joints were added or removed.

        Raises:
            SkeletonDefinitionError: If the edited skeleton repeats a joint
                name; no view is touched
        """
        _check_unique_names(self.skeleton)
        for view in self._views.values():
            view.rebuild(self.skeleton)
        if self.skeleton.is_propagated:
            self.refresh()

    def set_rotation_axis(self, joint_name: str, axis: Axis, radians: float) -> None:
        """
        Set one rotation component of a joint and redraw.

        If the redraw fails the previous rotation is restored, so the figure
        is left as it was.
        """
        joint = self.joint(joint_name)
        previous = joint.rotation.copy()
        joint.set_rotation_axis(axis, radians)
        self._refresh_or_restore({joint: previous})
        skeleton_log.debug(f"{joint_name}.{'xyz'[axis_index(axis)]} = {radians:.4f} rad")

    def set_rotation_degrees(self, joint_name: str, axis: Axis, degrees: float) -> None:
        """Slider-friendly variant of set_rotation_axis."""
        self.set_rotation_axis(joint_name, axis, (np.pi * degrees) / 180.0)

    def apply_pose(
        self,
        rotations: Mapping[str, Sequence[float]],
        degrees: bool = False,
    ) -> None:
        """
        Set full rotations for several joints and redraw once.

        Every joint name and value is validated before any joint changes.

        Args:
            rotations: joint name -> (x, y, z) rotation
            degrees: Interpret the values as degrees instead of radians
        """
        staged = {}
        for name, value in rotations.items():
            joint = self.joint(name)
            rotation = np.asarray(value, dtype=np.float64)
            if rotation.shape != (3,):
                raise InvalidPoseError(
                    f"Rotation for '{name}' must have 3 components, got shape {rotation.shape}"
                )
            if degrees:
                rotation = np.radians(rotation)
            if not np.all(np.isfinite(rotation)):
                raise InvalidPoseError(f"Rotation for '{name}' is not finite: {rotation.tolist()}")
            staged[joint] = rotation

        previous = {joint: joint.rotation.copy() for joint in staged}
        for joint, rotation in staged.items():
            joint.rotation = rotation
        self._refresh_or_restore(previous)
        skeleton_log.info(f"Applied pose to {len(staged)} joints")

    def _refresh_or_restore(self, previous: Dict[Joint, np.ndarray]) -> None:
        try:
            self.refresh()
        except StickFigureError:
            for joint, rotation in previous.items():
                joint.rotation = rotation
            if self.skeleton.is_propagated:
                self._redraw_restored()
            raise

    def _redraw_restored(self) -> None:
        """Bring world transforms and views back to the restored rotations."""
        self.skeleton.propagate()
        for view in self._views.values():
            try:
                view.propagate(self.skeleton)
            except StickFigureError as e:
                view_log.error(f"View '{view.name}' could not be restored: {e}")

    def export_svg(self, view_name: str) -> str:
        """
        Serialize a view's surface to SVG markup.

        The markup reflects the latest completed propagation.
        """
        view = self.get_view(view_name)
        if not isinstance(view.surface, SvgSurface):
            raise TypeError(
                f"View '{view_name}' draws on {type(view.surface).__name__}, not an SvgSurface"
            )
        export_log.info(f"Exporting view '{view_name}' ({view.primitive_count()} primitives)")
        return view.surface.to_markup()

    @classmethod
    def from_config(cls, config: Optional[StickFigureConfig] = None) -> "StickFigure":
        """Build the default humanoid with one SVG view per configured view."""
        if config is None:
            config = StickFigureConfig()

        figure = cls(build_humanoid(config.figure))
        for view_config in config.views:
            figure.add_view(ViewProjection.from_config(view_config), SvgSurface(config.export))
        figure.refresh()
        view_log.info(f"Figure ready with views: {list(figure.views)}")
        return figure
