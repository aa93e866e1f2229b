"""
StickFigure Configuration Management

Handles loading/saving of view layouts, figure proportions, export styling
and stored poses.
Uses Pydantic for validation and YAML for human-readable config files.
"""

from pathlib import Path
from typing import Optional, List, Dict, Tuple, Literal
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml


# Default paths
CONFIG_DIR = Path.home() / ".stickfigure"
POSES_DIR = CONFIG_DIR / "poses"


class ViewConfig(BaseModel):
    """Configuration for a single projected view."""
    name: str
    plane: Literal["yz", "xz", "xy"] = "yz"  # Plane kept by the projection
    scale: float = 50.0  # Pixels per meter
    offset: Tuple[float, float] = (200.0, 200.0)  # Screen pixel of the world origin

    @field_validator("scale")
    @classmethod
    def _positive_scale(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("scale must be positive; the screen map flips Y itself")
        return value


class FigureConfig(BaseModel):
    """Proportions of the default humanoid figure (meters)."""
    back_length: float = 0.6
    neck_length: float = 0.30
    hip_length: float = 0.15
    upper_leg_length: float = 0.40
    lower_leg_length: float = 0.40
    shoulder_length: float = 0.15
    upper_arm_length: float = 0.30
    lower_arm_length: float = 0.30

    # Polygon markers
    polygon_sides: int = Field(default=10, ge=3)
    head_radius: float = Field(default=0.15, gt=0)
    hand_radius: float = Field(default=0.05, gt=0)


class ExportConfig(BaseModel):
    """SVG export styling."""
    width: int = 800
    height: int = 400
    stroke: str = "black"
    stroke_width: float = 1.0


class PoseConfig(BaseModel):
    """A stored pose: joint name -> (x, y, z) rotation in degrees."""
    rotations: Dict[str, Tuple[float, float, float]] = Field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "PoseConfig":
        """Load a pose from a YAML file."""
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        if "rotations" not in data:
            data = {"rotations": data}
        return cls(**data)

    def save(self, path: Path) -> None:
        """Save the pose to a YAML file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.dump(self.model_dump(mode='json'), f, default_flow_style=False)


def _default_views() -> List[ViewConfig]:
    return [
        ViewConfig(name="front", plane="yz", offset=(200.0, 200.0)),
        ViewConfig(name="side", plane="xz", offset=(600.0, 200.0)),
    ]


class StickFigureConfig(BaseSettings):
    """Main configuration container."""
    model_config = SettingsConfigDict(env_prefix="STICKFIGURE_")

    views: List[ViewConfig] = Field(default_factory=_default_views)
    figure: FigureConfig = Field(default_factory=FigureConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    log_level: str = "INFO"

    # Paths
    config_dir: Path = CONFIG_DIR
    poses_dir: Path = POSES_DIR

    @field_validator("views")
    @classmethod
    def _unique_view_names(cls, views: List[ViewConfig]) -> List[ViewConfig]:
        names = [v.name for v in views]
        if len(names) != len(set(names)):
            raise ValueError(f"View names must be unique, got {names}")
        return views

    def get_view(self, name: str) -> ViewConfig:
        """Look up a view configuration by name."""
        for view in self.views:
            if view.name == name:
                return view
        raise KeyError(f"No view named '{name}'")

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "StickFigureConfig":
        """Load configuration from YAML file."""
        if path is None:
            path = CONFIG_DIR / "config.yaml"

        if path.exists():
            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        return cls()

    def save(self, path: Optional[Path] = None) -> None:
        """Save configuration to YAML file."""
        if path is None:
            path = CONFIG_DIR / "config.yaml"

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            yaml.dump(self.model_dump(mode='json'), f, default_flow_style=False)
