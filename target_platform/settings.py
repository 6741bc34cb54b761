"""Settings management for target-platform.

Simple, scope-aware YAML settings. Scope priority (most specific wins):
1. local (.target-platform/settings.local.yaml) - machine-specific
2. project (.target-platform/settings.yaml) - shared with the project
3. global (~/.target-platform/settings.yaml) - user defaults

Recognised keys::

    variables:     # extra ${name} values for location templates
      eclipse_home: /opt/eclipse
    platform:      # overrides for the running-platform fallback
      ws: gtk
    environment:   # default target environment for the CLI
      arch: x86_64
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from target_platform.environment import RunningPlatform
from target_platform.models import TargetEnvironment
from target_platform.schema import SettingsFile
from target_platform.substitution import VariableSubstitution

logger = logging.getLogger(__name__)

SETTINGS_DIR = ".target-platform"


@dataclass
class SettingsPaths:
    """Standard paths for settings files."""

    global_settings: Path
    project_settings: Path
    local_settings: Path

    @classmethod
    def default(cls) -> SettingsPaths:
        """Create default paths for the standard layout."""
        return cls(
            global_settings=Path.home() / SETTINGS_DIR / "settings.yaml",
            project_settings=Path.cwd() / SETTINGS_DIR / "settings.yaml",
            local_settings=Path.cwd() / SETTINGS_DIR / "settings.local.yaml",
        )


class AppSettings:
    """Settings manager with scope-aware merging.

    Usage:
        settings = AppSettings()
        substitution = settings.create_substitution()
        running = settings.running_platform()
    """

    def __init__(self, paths: SettingsPaths | None = None) -> None:
        self.paths = paths or SettingsPaths.default()

    def get_merged_settings(self) -> dict[str, Any]:
        """Load and merge settings from all scopes."""
        result: dict[str, Any] = {}
        for path in [self.paths.global_settings, self.paths.project_settings, self.paths.local_settings]:
            if path.exists():
                try:
                    with open(path) as f:
                        content = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    logger.warning(f"Skipping malformed settings file {path}: {e}")
                    continue
                if not isinstance(content, dict):
                    logger.warning(f"Skipping settings file {path}: expected a mapping")
                    continue
                result = self._deep_merge(result, content)
        return result

    def get_sections(self) -> SettingsFile:
        """Validate the recognised sections of the merged settings.

        A section with the wrong shape is ignored with a warning; the others still apply.
        """
        merged = self.get_merged_settings()
        sections: dict[str, Any] = {}
        for name in SettingsFile.model_fields:
            if merged.get(name) is None:
                continue
            try:
                SettingsFile.model_validate({name: merged[name]})
            except ValidationError as e:
                logger.warning(f"Ignoring malformed '{name}' settings: {e}")
                continue
            sections[name] = merged[name]
        return SettingsFile.model_validate(sections)

    def get_variables(self) -> dict[str, str]:
        """Get extra substitution variables."""
        return self.get_sections().variables

    def get_platform_overrides(self) -> dict[str, Any]:
        """Get running-platform overrides (arch/os/ws/nl)."""
        return self.get_sections().platform.model_dump(exclude_none=True)

    def get_default_environment(self) -> TargetEnvironment:
        """Get the default target environment; unset axes stay unspecified."""
        return self.get_sections().environment

    def create_substitution(self) -> VariableSubstitution:
        return VariableSubstitution(self.get_variables())

    def running_platform(self) -> RunningPlatform:
        return RunningPlatform.current(self.get_platform_overrides())

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dicts, overlay wins."""
        result = base.copy()
        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result


def get_settings() -> AppSettings:
    """Get a settings instance with default paths."""
    return AppSettings()
