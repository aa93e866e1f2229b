"""
Stick Figure Coordinator Tests

Tests pose edits, multi-view refresh ordering, rollback on failure and SVG
export.
"""

import pytest
import numpy as np
from conftest import RecordingSurface, make_chain

from stickfigure.config import StickFigureConfig, ViewConfig
from stickfigure.errors import (
    InvalidPoseError,
    ShapeMismatchError,
    SkeletonDefinitionError,
    TopologyMismatchError,
)
from stickfigure.figure import StickFigure
from stickfigure.kinematics.joint import Joint
from stickfigure.render.projection import ViewProjection
from stickfigure.render.surface import SvgSurface


class FlakySurface(RecordingSurface):
    """Recording surface that can be told to reject its next line update."""

    def __init__(self):
        super().__init__()
        self.fail_next_update = False

    def update_line(self, handle, p1, p2):
        if self.fail_next_update:
            self.fail_next_update = False
            raise ShapeMismatchError("line update rejected")
        super().update_line(handle, p1, p2)


@pytest.fixture
def figure(humanoid, front_projection, side_projection):
    fig = StickFigure(humanoid)
    fig.add_view(front_projection, RecordingSurface())
    fig.add_view(side_projection, RecordingSurface())
    fig.refresh()
    return fig


class TestViews:
    """View registration."""

    def test_duplicate_view_name(self, figure, front_projection):
        with pytest.raises(ValueError):
            figure.add_view(front_projection, RecordingSurface())

    def test_views_read_only(self, figure):
        with pytest.raises(TypeError):
            figure.views["extra"] = None

    def test_late_view_drawn_immediately(self, figure):
        """A view added after propagation renders the current pose."""
        surface = RecordingSurface()
        view = figure.add_view(ViewProjection.create("top", "xy"), surface)

        assert view.primitive_count() == figure.skeleton.count()

    def test_early_view_waits(self, humanoid, front_projection):
        surface = RecordingSurface()
        fig = StickFigure(humanoid)
        fig.add_view(front_projection, surface)

        assert surface.calls == []
        fig.refresh()
        assert len(surface.primitives) == humanoid.count()

    def test_remove_view(self, figure):
        removed = figure.remove_view("side")

        assert removed.name == "side"
        assert list(figure.views) == ["front"]
        with pytest.raises(KeyError):
            figure.remove_view("side")

    def test_duplicate_joint_names(self):
        root = Joint("a")
        root.add_child(Joint("a"))

        with pytest.raises(SkeletonDefinitionError):
            StickFigure(root)


class TestPoseEdits:
    """Pose-edit surface."""

    def test_edit_updates_every_view_in_place(self, figure):
        """One edit: one update per joint per view, no new primitives."""
        surfaces = [view.surface for view in figure.views.values()]
        created = [len(s.primitives) for s in surfaces]

        figure.set_rotation_axis("left_lower_leg", "y", 0.5)

        for surface, before in zip(surfaces, created):
            assert len(surface.primitives) == before
            updates = surface.count("update_line") + surface.count("update_polygon")
            assert updates == figure.skeleton.count()

    def test_edit_moves_descendants(self, figure):
        hand = figure.joint("left_hand")
        before = hand.world_end.copy()

        figure.set_rotation_axis("left_upper_arm", "y", 1.0)

        assert not np.allclose(hand.world_end, before)

    def test_degrees(self, figure):
        figure.set_rotation_degrees("back", "y", 90.0)

        np.testing.assert_allclose(figure.joint("back").rotation[1], np.pi / 2)

    def test_unknown_joint(self, figure):
        with pytest.raises(KeyError):
            figure.set_rotation_axis("tail", "x", 0.1)

    def test_non_finite_edit_not_applied(self, figure):
        back = figure.joint("back")
        before = back.rotation.copy()

        with pytest.raises(InvalidPoseError):
            figure.set_rotation_axis("back", "x", float("nan"))
        np.testing.assert_allclose(back.rotation, before)

    def test_topology_failure_restores_rotation(self, figure):
        """A failed redraw leaves rotation, skeleton and views as they were."""
        knee = figure.joint("left_lower_leg")
        rotation_before = knee.rotation.copy()
        end_before = knee.world_end.copy()
        figure.joint("right_hand").add_child(Joint("finger", 0.05))
        front = figure.views["front"].surface
        calls_before = len(front.calls)

        with pytest.raises(TopologyMismatchError):
            figure.set_rotation_axis("left_lower_leg", "y", 1.2)

        np.testing.assert_allclose(knee.rotation, rotation_before)
        np.testing.assert_allclose(knee.world_end, end_before)
        assert len(front.calls) == calls_before

    def test_rebuild_views_after_topology_change(self, figure):
        figure.joint("right_hand").add_child(Joint("finger", 0.05))
        figure.rebuild_views()

        for view in figure.views.values():
            assert view.primitive_count() == figure.skeleton.count()
        figure.set_rotation_axis("left_lower_leg", "y", 1.2)

    def test_rebuild_views_rejects_duplicate_names(self, figure):
        """A re-used joint name is refused before any view is re-mirrored."""
        roots = {name: view.root for name, view in figure.views.items()}
        figure.joint("left_hip").add_child(Joint("right_hand", 0.1))

        with pytest.raises(SkeletonDefinitionError):
            figure.rebuild_views()
        for name, view in figure.views.items():
            assert view.root is roots[name]

    def test_failed_view_pass_restores_world_pose(self, humanoid, front_projection, side_projection):
        """A view failing after propagation leaves transforms and views at the old pose."""
        front, side = RecordingSurface(), FlakySurface()
        fig = StickFigure(humanoid)
        fig.add_view(front_projection, front)
        fig.add_view(side_projection, side)
        fig.refresh()
        knee = fig.joint("left_lower_leg")
        end_before = knee.world_end.copy()
        front_before = {h: pts.copy() for h, (_, pts) in front.primitives.items()}

        side.fail_next_update = True
        with pytest.raises(ShapeMismatchError):
            fig.set_rotation_axis("left_lower_leg", "y", 1.2)

        np.testing.assert_allclose(knee.rotation, [0.0, 0.0, 0.0])
        np.testing.assert_allclose(knee.world_end, end_before)
        for handle, (_, pts) in front.primitives.items():
            np.testing.assert_allclose(pts, front_before[handle])

    def test_apply_pose_degrees(self, figure):
        figure.apply_pose({"back": (10.0, 20.0, 30.0), "left_lower_arm": (0.0, 45.0, 0.0)}, degrees=True)

        np.testing.assert_allclose(figure.joint("back").rotation, np.radians([10.0, 20.0, 30.0]))
        np.testing.assert_allclose(figure.joint("left_lower_arm").rotation, [0.0, np.pi / 4, 0.0])

    def test_apply_pose_all_or_nothing(self, figure):
        """One bad entry means no joint changes."""
        back_before = figure.joint("back").rotation.copy()

        with pytest.raises(InvalidPoseError):
            figure.apply_pose({"back": (0.3, 0.3, 0.3), "left_hip": (0.0, float("inf"), 0.0)})
        with pytest.raises(KeyError):
            figure.apply_pose({"back": (0.3, 0.3, 0.3), "tail": (0.0, 0.0, 0.0)})
        with pytest.raises(InvalidPoseError):
            figure.apply_pose({"back": (0.3, 0.3)})

        np.testing.assert_allclose(figure.joint("back").rotation, back_before)


class TestScenarios:
    """End-to-end scenarios on a two-joint chain."""

    def test_chain_front_view(self, front_projection):
        """Child end (0, 0, 1) projects to (100, 50)."""
        surface = SvgSurface()
        fig = StickFigure(make_chain())
        fig.add_view(front_projection, surface)
        fig.refresh()

        line = surface.elements[1]
        assert (line.x1, line.y1, line.x2, line.y2) == pytest.approx((100.0, 100.0, 100.0, 50.0))

    def test_chain_rotated_about_y(self, front_projection):
        """Child rotated pi/2 about Y ends at (1, 0, 0), a point in the front view."""
        fig = StickFigure(make_chain())
        surface = SvgSurface()
        fig.add_view(front_projection, surface)
        fig.refresh()
        fig.set_rotation_axis("child", "y", np.pi / 2)

        np.testing.assert_allclose(fig.joint("child").world_end[:3], [1.0, 0.0, 0.0], atol=1e-9)
        line = surface.elements[1]
        assert (line.x2, line.y2) == pytest.approx((100.0, 100.0))


class TestExport:
    """SVG export through the coordinator."""

    def test_from_config_exports_each_view(self):
        config = StickFigureConfig(views=[
            ViewConfig(name="front", plane="yz"),
            ViewConfig(name="side", plane="xz", offset=(600.0, 200.0)),
        ])
        fig = StickFigure.from_config(config)

        for name in ("front", "side"):
            markup = fig.export_svg(name)
            assert markup.count("<line") == 14
            assert markup.count("<path") == 3

    def test_export_reflects_latest_pose(self):
        fig = StickFigure.from_config(StickFigureConfig())
        before = fig.export_svg("front")
        fig.set_rotation_degrees("left_lower_leg", "y", 60.0)

        assert fig.export_svg("front") != before

    def test_export_after_joint_removed(self):
        """Removed bones disappear from the exported document."""
        fig = StickFigure.from_config(StickFigureConfig())
        fig.skeleton.children.pop()  # right_hip, right_upper_leg, right_lower_leg
        fig.rebuild_views()

        markup = fig.export_svg("front")
        assert markup.count("<line") == 11
        assert markup.count("<path") == 3

    def test_export_requires_svg_surface(self, figure):
        with pytest.raises(TypeError):
            figure.export_svg("front")

    def test_unknown_view(self, figure):
        with pytest.raises(KeyError):
            figure.export_svg("top")
