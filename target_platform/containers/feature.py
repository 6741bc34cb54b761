"""Bundle container for the plugins of one feature.

Resolution order:
1. Expand the home location template
2. Select the feature directory (exact version, or most recent by name)
3. Parse the feature descriptor
4. Scan the ``plugins/`` directory next to the feature's ``features/`` directory
5. Keep the bundles listed by descriptor entries that match the target environment
6. Hand the surviving bundles to this container

Cancellation is checked before any I/O, after the descriptor is read, around
the plugins scan and while filtering; a cancelled resolution returns nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from collections.abc import Iterable
from pathlib import Path

from target_platform.cancellation import CancellationToken
from target_platform.containers.base import BundleContainer
from target_platform.descriptor import FEATURE_DESCRIPTOR
from target_platform.descriptor import parse_feature_descriptor
from target_platform.discovery import find_feature_dirs
from target_platform.discovery import plugins_dir_for
from target_platform.environment import RunningPlatform
from target_platform.environment import matches_environment
from target_platform.errors import InvalidDescriptorError
from target_platform.errors import NotFoundError
from target_platform.models import BundleKey
from target_platform.models import FeatureDescriptor
from target_platform.models import FeatureReference
from target_platform.models import ResolvedBundle
from target_platform.models import TargetEnvironment
from target_platform.protocols import BundleScanner
from target_platform.protocols import DescriptorParser
from target_platform.protocols import FeaturePathFinder
from target_platform.protocols import Substitution
from target_platform.scanner import DirectoryBundleScanner
from target_platform.substitution import VariableSubstitution
from target_platform.versions import select_feature_directory

logger = logging.getLogger(__name__)


def filter_bundles(bundles: Iterable[ResolvedBundle], keys: set[BundleKey]) -> list[ResolvedBundle]:
    """Keep bundles whose exact (id, version) pair is in ``keys``."""
    return [bundle for bundle in bundles if bundle.key in keys]


class FeatureBundleContainer(BundleContainer):
    """The bundles of a feature installed under a home directory.

    Args:
        home: Install home containing ``features/`` and ``plugins/``; may contain variables
        feature_id: Feature symbolic name
        version: Feature version, or None for the most recent installed version
        substitution: Variable expander for ``home``
        find_features: Lists feature directories under a resolved home
        parse_descriptor: Parses a ``feature.xml``
        scanner: Scans the plugins directory
        running_platform: Fallback for environment axes the target leaves unset
            (default: detected at resolution time)
    """

    TYPE = "Feature"

    def __init__(
        self,
        home: str,
        feature_id: str,
        version: str | None = None,
        *,
        substitution: Substitution | None = None,
        find_features: FeaturePathFinder = find_feature_dirs,
        parse_descriptor: DescriptorParser = parse_feature_descriptor,
        scanner: BundleScanner | None = None,
        running_platform: RunningPlatform | None = None,
    ):
        self._home = home
        self._feature = FeatureReference(feature_id, version)
        self._substitution = substitution or VariableSubstitution()
        self._find_features = find_features
        self._parse_descriptor = parse_descriptor
        self._scanner = scanner or DirectoryBundleScanner()
        self._running_platform = running_platform

    @property
    def home(self) -> str:
        return self._home

    @property
    def feature_id(self) -> str:
        return self._feature.id

    @property
    def feature_version(self) -> str | None:
        return self._feature.version

    def get_location(self, resolve: bool = False) -> str:
        if resolve:
            return str(self._resolve_home())
        return self._home

    def identity(self) -> tuple[Hashable, ...]:
        return (self._home, self._feature.id, self._feature.version)

    def is_content_equal(self, other: object) -> bool:
        if not isinstance(other, FeatureBundleContainer):
            return False
        return (
            self._home == other._home
            and self._feature.id == other._feature.id
            and _is_null_or_equal(self._feature.version, other._feature.version)
        )

    def _resolve_home(self) -> Path:
        return self._substitution.expand_path(self._home)

    def resolve_feature_location(self) -> Path:
        """Return the directory of the selected feature version.

        Raises:
            InvalidLocationError: The home template cannot be expanded
            NotFoundError: No feature directories, or none for this id/version
        """
        home = self._resolve_home()
        return select_feature_directory(home, self._find_features(home), self._feature.id, self._feature.version)

    def _resolve_bundles(self, environment: TargetEnvironment, token: CancellationToken) -> list[ResolvedBundle]:
        home = self._resolve_home()
        if token.is_cancelled:
            return []

        location = select_feature_directory(
            home, self._find_features(home), self._feature.id, self._feature.version
        )
        manifest = location / FEATURE_DESCRIPTOR
        if not manifest.exists() or not manifest.is_file():
            raise InvalidDescriptorError(f"Feature '{self._feature.id}' has no {FEATURE_DESCRIPTOR} in {location}")
        descriptor = self._parse_descriptor(manifest)
        logger.debug(f"[feature:resolve] {self._feature} -> {location} ({len(descriptor.plugins)} plugin entries)")

        if token.is_cancelled:
            return []

        plugins_dir = plugins_dir_for(manifest)
        if not plugins_dir.exists() or not plugins_dir.is_dir():
            raise NotFoundError(f"Plug-ins directory for feature '{self._feature.id}' not found: {plugins_dir}")

        discovered = self._scanner.discover(plugins_dir, token=token)
        if token.is_cancelled:
            return []

        running = self._running_platform or RunningPlatform.current()
        keys: set[BundleKey] = set()
        for entry in descriptor.plugins:
            if token.is_cancelled:
                return []
            if matches_environment(entry, environment, running):
                keys.add(entry.key)

        # Scanned bundles have no owner yet; they belong to this container
        return [bundle.with_parent(self) for bundle in filter_bundles(discovered, keys)]

    def resolve_features(self, token: CancellationToken | None = None) -> list[FeatureDescriptor]:
        """Return the descriptor of this container's feature, if installed.

        Every feature under the home is parsed; unparsable descriptors are skipped.
        The version must match exactly when one was requested.

        Returns:
            A single-element list, or an empty list when nothing matches or on cancellation
        """
        token = token or CancellationToken()
        home = self._resolve_home()
        for feature_dir in self._find_features(home):
            if token.is_cancelled:
                return []
            manifest = feature_dir / FEATURE_DESCRIPTOR
            if not manifest.is_file():
                continue
            try:
                descriptor = self._parse_descriptor(manifest)
            except InvalidDescriptorError as e:
                logger.warning(f"Skipping feature at {feature_dir}: {e}")
                continue
            if descriptor.id != self._feature.id:
                continue
            if self._feature.version is None or descriptor.version == self._feature.version:
                return [descriptor]
        return []

    def __repr__(self) -> str:
        return f"Feature {self._feature.id} {self._feature.version} {self._home}"


def _is_null_or_equal(first: str | None, second: str | None) -> bool:
    if first is None:
        return second is None
    return first == second
