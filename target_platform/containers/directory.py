"""Bundle container for every bundle in a directory."""

from __future__ import annotations

import logging
from collections.abc import Hashable

from target_platform.cancellation import CancellationToken
from target_platform.containers.base import BundleContainer
from target_platform.errors import NotFoundError
from target_platform.models import ResolvedBundle
from target_platform.models import TargetEnvironment
from target_platform.protocols import BundleScanner
from target_platform.protocols import Substitution
from target_platform.scanner import DirectoryBundleScanner
from target_platform.substitution import VariableSubstitution

logger = logging.getLogger(__name__)


class DirectoryBundleContainer(BundleContainer):
    """All bundles found directly in one directory, regardless of environment.

    Args:
        path: Directory location, which may contain substitution variables
        substitution: Variable expander (default: VariableSubstitution())
        scanner: Bundle scanner (default: DirectoryBundleScanner())
    """

    TYPE = "Directory"

    def __init__(
        self,
        path: str,
        *,
        substitution: Substitution | None = None,
        scanner: BundleScanner | None = None,
    ):
        self._path = path
        self._substitution = substitution or VariableSubstitution()
        self._scanner = scanner or DirectoryBundleScanner()

    @property
    def path(self) -> str:
        return self._path

    def get_location(self, resolve: bool = False) -> str:
        if resolve:
            return str(self._substitution.expand_path(self._path))
        return self._path

    def identity(self) -> tuple[Hashable, ...]:
        return (self._path,)

    def _resolve_bundles(self, environment: TargetEnvironment, token: CancellationToken) -> list[ResolvedBundle]:
        directory = self._substitution.expand_path(self._path)
        if token.is_cancelled:
            return []
        if not directory.exists() or not directory.is_dir():
            raise NotFoundError(f"Directory does not exist: {directory}")
        return self._scanner.discover(directory, parent=self, token=token)

    def __repr__(self) -> str:
        return f"Directory {self._path}"
