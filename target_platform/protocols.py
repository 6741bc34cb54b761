"""Collaborator interfaces consumed by bundle containers.

Containers receive these through their constructors; the defaults live in
``substitution``, ``discovery``, ``descriptor`` and ``scanner``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING
from typing import Protocol

from target_platform.cancellation import CancellationToken
from target_platform.models import FeatureDescriptor
from target_platform.models import ResolvedBundle

if TYPE_CHECKING:
    from target_platform.containers.base import BundleContainer


class Substitution(Protocol):
    def expand_path(self, template: str) -> Path:
        """Expand a location template to an absolute path; raises InvalidLocationError."""
        ...


class FeaturePathFinder(Protocol):
    def __call__(self, home: Path) -> list[Path]: ...


class DescriptorParser(Protocol):
    def __call__(self, path: Path) -> FeatureDescriptor:
        """Parse a feature descriptor; raises InvalidDescriptorError."""
        ...


class BundleScanner(Protocol):
    def discover(
        self,
        directory: Path,
        parent: BundleContainer | None = None,
        token: CancellationToken | None = None,
    ) -> list[ResolvedBundle]: ...
