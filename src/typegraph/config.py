"""
Configuration loading for typegraph schemas.

Example typegraph.yaml:

    version: 1
    schema:
      auto_camelize: true
      warn_on_excluded_types: true
      global_id_separator: "-"
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


DEFAULT_CONFIG_PATH = "typegraph.yaml"


@dataclass(frozen=True)
class SchemaSettings:
    """Build-time settings consumed by SchemaRegistry."""
    auto_camelize: bool = True  # snake_case field names exposed as camelCase
    warn_on_excluded_types: bool = True  # log implementers left out of the schema
    global_id_separator: str = "-"

    def __post_init__(self):
        if not self.global_id_separator:
            raise ValueError("global_id_separator must not be empty")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SchemaSettings":
        """Create settings from a dictionary (the `schema` section of the YAML file)."""
        defaults = cls()
        return cls(
            auto_camelize=data.get("auto_camelize", defaults.auto_camelize),
            warn_on_excluded_types=data.get("warn_on_excluded_types", defaults.warn_on_excluded_types),
            global_id_separator=data.get("global_id_separator", defaults.global_id_separator),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary for YAML serialization."""
        return {
            "version": 1,
            "schema": {
                "auto_camelize": self.auto_camelize,
                "warn_on_excluded_types": self.warn_on_excluded_types,
                "global_id_separator": self.global_id_separator,
            },
        }

    def save(self, path: Path | str = DEFAULT_CONFIG_PATH) -> None:
        """Save settings to a YAML file."""
        path = Path(path)
        content = yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)
        path.write_text(content)


def load_settings(path: Path | str = DEFAULT_CONFIG_PATH) -> SchemaSettings:
    """Load settings from a YAML file, falling back to defaults when it does not exist."""
    path = Path(path)
    if not path.exists():
        return SchemaSettings()

    data = yaml.safe_load(path.read_text()) or {}
    return SchemaSettings.from_dict(data.get("schema") or {})
