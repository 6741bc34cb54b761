"""Data models for feature descriptors, environments and resolved bundles.

Models read from files (descriptors, environments) are pydantic models.
Values produced at resolution time are frozen dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel
from pydantic import Field

if TYPE_CHECKING:
    from target_platform.containers.base import BundleContainer

__all__ = [
    "BundleKey",
    "BundleStatus",
    "FeatureDescriptor",
    "FeatureReference",
    "PluginEntry",
    "ResolvedBundle",
    "TargetEnvironment",
]

# (symbolic name, version) pair used to match descriptor entries to bundles
BundleKey = tuple[str, str]


class TargetEnvironment(BaseModel):
    """Requested target platform. Unset axes fall back to the running platform."""

    arch: str | None = Field(None, description="Processor architecture (e.g. 'x86_64')")
    os: str | None = Field(None, description="Operating system (e.g. 'linux', 'win32')")
    ws: str | None = Field(None, description="Windowing system (e.g. 'gtk', 'cocoa')")
    nl: str | None = Field(None, description="Locale (e.g. 'en_US')")


class PluginEntry(BaseModel):
    """A plugin listed in a feature descriptor."""

    id: str = Field(..., description="Bundle symbolic name")
    version: str = Field(..., description="Exact bundle version")
    arch: str | None = None
    os: str | None = None
    ws: str | None = None
    nl: str | None = None
    fragment: bool = Field(default=False, description="Entry names a fragment bundle")
    unpack: bool = Field(default=True, description="Bundle is installed as a directory")

    @property
    def key(self) -> BundleKey:
        return (self.id, self.version)


class FeatureDescriptor(BaseModel):
    """Contents of a parsed ``feature.xml``."""

    id: str
    version: str
    label: str | None = None
    provider: str | None = None
    plugins: list[PluginEntry] = Field(default_factory=list)
    path: Path | None = Field(None, description="Descriptor file this was read from")


@dataclass(frozen=True)
class FeatureReference:
    """A feature id with an optional version. No version means most recent."""

    id: str
    version: str | None = None

    def __str__(self) -> str:
        return f"{self.id}_{self.version}" if self.version else self.id


class BundleStatus(str, Enum):
    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ResolvedBundle:
    """A bundle found on disk, owned by the container that resolved it.

    Instances are immutable; moving a bundle to another container produces a
    copy via :meth:`with_parent`.
    """

    id: str
    version: str
    location: Path
    parent: BundleContainer | None = field(default=None, compare=False, repr=False)
    status: BundleStatus = BundleStatus.OK
    message: str | None = None
    fragment: bool = False
    source_bundle: bool = False

    @property
    def key(self) -> BundleKey:
        return (self.id, self.version)

    def with_parent(self, parent: BundleContainer) -> ResolvedBundle:
        """Return a copy of this bundle owned by ``parent``."""
        return replace(self, parent=parent)
