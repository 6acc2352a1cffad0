"""Configuration loader for the pbattach CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

DEFAULTS = {
    "permissions_boundary": None,
    "default_format": "json",
    "template_format": None,
}


@dataclass(slots=True)
class Settings:
    permissions_boundary: str | None = DEFAULTS["permissions_boundary"]
    default_format: str = DEFAULTS["default_format"]
    template_format: str | None = DEFAULTS["template_format"]

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "Settings":
        return cls(
            permissions_boundary=data.get("permissions_boundary", DEFAULTS["permissions_boundary"]),
            default_format=data.get("default_format", DEFAULTS["default_format"]),
            template_format=data.get("template_format", DEFAULTS["template_format"]),
        )

    def merge_cli(
        self,
        boundary_override: str | None = None,
        format_override: str | None = None,
        template_format: str | None = None,
    ) -> "Settings":
        return Settings(
            permissions_boundary=boundary_override or self.permissions_boundary,
            default_format=format_override or self.default_format,
            template_format=template_format or self.template_format,
        )


def load_settings(path: Path) -> Settings:
    if not path.exists():
        return Settings()

    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    if not isinstance(data, dict):
        raise ValueError("Configuration file must be a mapping of keys to values.")

    return Settings.from_mapping(data)


__all__ = ["Settings", "load_settings"]
