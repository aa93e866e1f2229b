"""
StickFigure GUI Application

One window with a drawlist per configured view and a slider per pose
control. Every slider move edits one joint rotation, then the skeleton and
all views are re-propagated before the next frame is rendered.
"""

import dearpygui.dearpygui as dpg
import numpy as np
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from ..config import StickFigureConfig, ViewConfig
from ..errors import StickFigureError
from ..figure import StickFigure
from ..kinematics.humanoid import POSE_CONTROLS, PoseControl, build_humanoid
from ..kinematics.joint import axis_index
from ..render.projection import ViewProjection
from ..render.surface import SvgSurface
from ..utils.logging import gui_log
from .surface import DearPyGuiSurface


SVG_SUFFIX = "_svg"


@dataclass
class AppState:
    """Global application state."""
    is_running: bool = True
    last_error: str = ""
    edits: int = 0


class StickFigureApp:
    """
    Main StickFigure GUI application.

    Each configured view is shown twice: live on a drawlist, and mirrored on
    an in-memory SVG surface that the export button writes to disk.
    """

    def __init__(
        self,
        config: Optional[StickFigureConfig] = None,
        title: str = "StickFigure",
        width: int = 1280,
        height: int = 720,
        controls: Optional[List[PoseControl]] = None,
    ):
        """
        Initialize the application.

        Args:
            config: Views, figure proportions and export styling
            title: Window title
            width: Window width
            height: Window height
            controls: Slider bindings; defaults to POSE_CONTROLS
        """
        self.config = config or StickFigureConfig()
        self.title = title
        self.width = width
        self.height = height
        self.controls = list(controls) if controls is not None else list(POSE_CONTROLS)

        self.state = AppState()
        self.figure = StickFigure(build_humanoid(self.config.figure))

        self._drawlists: Dict[str, str] = {}
        self._slider_tags: Dict[str, PoseControl] = {}

    def setup(self) -> None:
        """Setup DearPyGui context and window."""
        dpg.create_context()
        dpg.create_viewport(title=self.title, width=self.width, height=self.height)

        self._create_main_window()
        self._attach_views()
        self.figure.refresh()

        dpg.setup_dearpygui()
        dpg.show_viewport()

    def _create_main_window(self) -> None:
        """Create the main application window."""
        export = self.config.export
        with dpg.window(label="StickFigure", tag="main_window", no_title_bar=True):
            with dpg.group(horizontal=True):
                for view in self.config.views:
                    tag = f"drawlist_{view.name}"
                    with dpg.group():
                        dpg.add_text(view.name.title(), color=(150, 150, 150))
                        dpg.add_drawlist(width=export.width, height=export.height, tag=tag)
                    self._drawlists[view.name] = tag

            dpg.add_separator()

            for control in self.controls:
                tag = f"slider_{control.joint}_{control.axis}"
                joint = self.figure.joint(control.joint)
                dpg.add_slider_float(
                    label=control.label,
                    tag=tag,
                    default_value=float(np.degrees(joint.rotation[axis_index(control.axis)])),
                    min_value=control.min_degrees,
                    max_value=control.max_degrees,
                    width=300,
                    callback=self._on_slider_change,
                )
                self._slider_tags[tag] = control

            with dpg.group(horizontal=True):
                dpg.add_button(label="Export SVG", callback=self._on_export_click)
                dpg.add_text("", tag="status_text", color=(200, 100, 100))

        dpg.set_primary_window("main_window", True)

    def _attach_views(self) -> None:
        """Create one live and one SVG view per configured view."""
        for view in self.config.views:
            self.figure.add_view(
                ViewProjection.from_config(view),
                DearPyGuiSurface(self._drawlists[view.name]),
            )
            self.figure.add_view(
                self._svg_projection(view),
                SvgSurface(self.config.export),
            )

    @staticmethod
    def _svg_projection(view: ViewConfig) -> ViewProjection:
        return ViewProjection.create(view.name + SVG_SUFFIX, view.plane, view.scale, view.offset)

    def _on_slider_change(self, sender, app_data) -> None:
        """Apply a slider move (degrees) to its joint."""
        control = self._slider_tags[sender]
        self.apply_control(control, float(app_data))

    def apply_control(self, control: PoseControl, degrees: float) -> bool:
        """
        Apply one pose control value.

        Returns:
            True if the figure was updated
        """
        try:
            self.figure.set_rotation_degrees(control.joint, control.axis, degrees)
        except StickFigureError as e:
            self.state.last_error = str(e)
            gui_log.error(f"Pose edit '{control.label}' rejected: {e}")
            return False
        self.state.edits += 1
        self.state.last_error = ""
        return True

    def _on_export_click(self, sender, app_data) -> None:
        paths = self.export_svgs(self.config.config_dir / "exports")
        dpg.set_value("status_text", f"Saved {len(paths)} file(s)")

    def export_svgs(self, directory: Path) -> List[Path]:
        """Write every SVG mirror view to directory/<view>.svg."""
        directory.mkdir(parents=True, exist_ok=True)
        paths = []
        for view in self.config.views:
            markup = self.figure.export_svg(view.name + SVG_SUFFIX)
            path = directory / f"{view.name}.svg"
            path.write_text(markup)
            paths.append(path)
        gui_log.info(f"Exported {len(paths)} views to {directory}")
        return paths

    def run(self) -> None:
        """Run the application main loop."""
        self.setup()

        while dpg.is_dearpygui_running() and self.state.is_running:
            dpg.render_dearpygui_frame()

        self.shutdown()

    def shutdown(self) -> None:
        """Clean up and shutdown."""
        self.state.is_running = False
        dpg.destroy_context()

    def request_stop(self) -> None:
        """Request application stop."""
        self.state.is_running = False
