"""Target environment matching.

A descriptor plugin entry may constrain the architecture, operating system,
windowing system and locale it applies to. An entry is included for a target
environment only when every axis matches. Axes the target leaves unset are
compared against the running platform instead.
"""

from __future__ import annotations

import locale
import logging
import platform
from dataclasses import dataclass
from dataclasses import replace
from typing import Any

from target_platform.models import PluginEntry
from target_platform.models import TargetEnvironment

logger = logging.getLogger(__name__)

AXES = ("arch", "os", "ws", "nl")

_OS_NAMES = {
    "linux": "linux",
    "windows": "win32",
    "darwin": "macosx",
    "sunos": "solaris",
    "aix": "aix",
    "hp-ux": "hpux",
}

_ARCH_NAMES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "i386": "x86",
    "i486": "x86",
    "i586": "x86",
    "i686": "x86",
    "x86": "x86",
    "aarch64": "aarch64",
    "arm64": "aarch64",
    "armv7l": "arm",
    "arm": "arm",
    "ppc64le": "ppc64le",
    "ppc64": "ppc64",
    "s390x": "s390x",
}

_WS_NAMES = {
    "win32": "win32",
    "macosx": "cocoa",
}

DEFAULT_NL = "en_US"


def matches(target_value: str | None, entry_value: str | None, running_value: str | None) -> bool:
    """Return whether a plugin entry constraint accepts a target value.

    Args:
        target_value: Value requested by the target environment, or None
        entry_value: Constraint declared by the plugin entry, or None
        running_value: Value of the running platform

    Returns:
        True when the entry is unconstrained, or its constraint equals the target
        value (the running value when the target leaves the axis unset)
    """
    if entry_value is None:
        return True
    if target_value is None:
        return entry_value == running_value
    return target_value == entry_value


@dataclass(frozen=True)
class RunningPlatform:
    """The platform the resolver runs on, named the way feature descriptors name it."""

    arch: str
    os: str
    ws: str
    nl: str

    @classmethod
    def current(cls, overrides: dict[str, Any] | None = None) -> RunningPlatform:
        """Detect the host platform.

        Args:
            overrides: Optional per-axis replacements (e.g. from settings)
        """
        system = platform.system().lower()
        os_name = _OS_NAMES.get(system, system)
        machine = platform.machine().lower()
        detected = cls(
            arch=_ARCH_NAMES.get(machine, machine),
            os=os_name,
            ws=_WS_NAMES.get(os_name, "gtk"),
            nl=_current_locale(),
        )
        if overrides:
            known = {axis: str(value) for axis, value in overrides.items() if axis in AXES and value}
            detected = replace(detected, **known)
        return detected


def _current_locale() -> str:
    language, _encoding = locale.getlocale()
    if not language or language in ("C", "POSIX"):
        return DEFAULT_NL
    # "en_US.UTF-8" and "English_United States" both appear in the wild
    return language.split(".")[0]


def matches_environment(entry: PluginEntry, target: TargetEnvironment, running: RunningPlatform) -> bool:
    """Return whether a plugin entry passes all four environment axes."""
    for axis in AXES:
        if not matches(getattr(target, axis), getattr(entry, axis), getattr(running, axis)):
            logger.debug(f"[feature:match] {entry.id} {entry.version} excluded by {axis}={getattr(entry, axis)}")
            return False
    return True
