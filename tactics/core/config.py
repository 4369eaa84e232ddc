"""
Battle configuration loader.

Loads tunable battle settings (animation speeds, default unit movement stats,
highlight colours, logging switches) from a YAML file, falling back to the
built-in defaults when the file is missing or unreadable.
"""
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from .data import HighlightColor
from .exceptions import GridConfigurationError


DEFAULT_CONFIG_PATH = "assets/config/battle.yaml"


@dataclass
class BattleConfig:
    """Tunable settings for one battle."""
    move_speed: float = 6.0           # tiles per second
    skill_duration: float = 0.5       # seconds
    default_movement_points: int = 4
    default_jump_height: int = 1
    default_fall_height: int = 10
    event_history_size: int = 1000
    max_log_messages: int = 1000
    debug_logging: bool = False
    highlight_colors: dict[str, str] = field(default_factory=lambda: {
        color.name.lower(): color.value for color in HighlightColor
    })

    def __post_init__(self):
        if self.move_speed <= 0:
            raise GridConfigurationError(f"move_speed must be positive, got {self.move_speed}")
        if self.skill_duration < 0:
            raise GridConfigurationError(f"skill_duration cannot be negative, got {self.skill_duration}")
        for name in ("default_movement_points", "default_jump_height", "default_fall_height"):
            if getattr(self, name) < 0:
                raise GridConfigurationError(f"{name} cannot be negative")

    def color_for(self, highlight: HighlightColor) -> str:
        """Resolve the display colour configured for a highlight kind."""
        return self.highlight_colors.get(highlight.name.lower(), highlight.value)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BattleConfig":
        """Build a config from a parsed mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {key: value for key, value in data.items() if key in known}
        if "highlight_colors" in kwargs:
            colors = cls().highlight_colors
            colors.update({str(k).lower(): str(v) for k, v in (kwargs["highlight_colors"] or {}).items()})
            kwargs["highlight_colors"] = colors
        return cls(**kwargs)


class BattleConfigLoader:
    """Loads BattleConfig from a YAML file."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.warnings: list[str] = []

    def _resolve_path(self) -> Path:
        if os.path.isabs(self.config_path):
            return Path(self.config_path)
        # Relative paths are resolved against the project root
        project_root = Path(__file__).parent.parent.parent
        return project_root / self.config_path

    def load(self) -> BattleConfig:
        """Load the configuration, using defaults when the file is absent.

        Malformed YAML or invalid values raise GridConfigurationError.
        """
        config_file = self._resolve_path()

        if not config_file.exists():
            self.warnings.append(f"Battle config not found: {config_file}, using defaults")
            return BattleConfig()

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise GridConfigurationError(f"Invalid YAML in battle config: {e}", str(config_file)) from e

        if not isinstance(data, dict):
            raise GridConfigurationError("Battle config must be a mapping", str(config_file))

        return BattleConfig.from_dict(data.get("battle", data))

