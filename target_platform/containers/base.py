"""Abstract bundle container.

A bundle container resolves the bundles available from one source (an install
directory, a feature, ...) for a target environment. Containers are immutable
after construction and compare by content, so a target definition can
deduplicate them.
"""

from __future__ import annotations

import logging
from abc import ABC
from abc import abstractmethod
from collections.abc import Hashable

from target_platform.cancellation import CancellationToken
from target_platform.models import ResolvedBundle
from target_platform.models import TargetEnvironment

logger = logging.getLogger(__name__)


class BundleContainer(ABC):
    """Base class for every bundle source in a target definition."""

    #: Container type name shown to users
    TYPE: str = ""

    @property
    def type(self) -> str:
        return self.TYPE

    @abstractmethod
    def get_location(self, resolve: bool = False) -> str:
        """Return the container location.

        Args:
            resolve: Expand variables and return an absolute path instead of the raw template

        Raises:
            InvalidLocationError: ``resolve`` is True and the template cannot be expanded
        """

    @abstractmethod
    def identity(self) -> tuple[Hashable, ...]:
        """Values that decide content equality."""

    @abstractmethod
    def _resolve_bundles(self, environment: TargetEnvironment, token: CancellationToken) -> list[ResolvedBundle]:
        """Resolve bundles; subclasses return an empty list when cancelled."""

    def resolve(
        self, environment: TargetEnvironment | None = None, token: CancellationToken | None = None
    ) -> list[ResolvedBundle]:
        """Resolve the bundles this container provides for a target environment.

        Args:
            environment: Target environment (default: every axis unspecified)
            token: Cancellation token polled at checkpoints

        Returns:
            Bundles owned by this container; empty when cancelled

        Raises:
            TargetResolutionError: Resolution failed. No partial result is returned.
        """
        bundles = self._resolve_bundles(environment or TargetEnvironment(), token or CancellationToken())
        logger.debug(f"[container:resolve] {self!r} -> {len(bundles)} bundles")
        return bundles

    def is_content_equal(self, other: object) -> bool:
        """Return whether ``other`` is a container of the same type with the same identity."""
        if type(other) is not type(self):
            return False
        return self.identity() == other.identity()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BundleContainer):
            return NotImplemented
        return self.is_content_equal(other)

    def __hash__(self) -> int:
        return hash((type(self), self.identity()))
