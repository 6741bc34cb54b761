"""Target definitions: collections of bundle containers for one target environment.

A resolution pass resolves every container in order and collects per-container
failures instead of stopping at the first one, so a user sees every broken
container at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

import yaml
from pydantic import ValidationError

from target_platform.cancellation import CancellationToken
from target_platform.containers import BundleContainer
from target_platform.containers import DirectoryBundleContainer
from target_platform.containers import FeatureBundleContainer
from target_platform.environment import RunningPlatform
from target_platform.errors import TargetDefinitionError
from target_platform.errors import TargetResolutionError
from target_platform.models import ResolvedBundle
from target_platform.models import TargetEnvironment
from target_platform.protocols import Substitution
from target_platform.schema import FeatureContainerConfig
from target_platform.schema import TargetDefinitionFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContainerError:
    """A container that failed to resolve, with the reason."""

    container: BundleContainer
    error: TargetResolutionError


@dataclass
class TargetResolution:
    """Outcome of resolving a target definition."""

    bundles: list[ResolvedBundle] = field(default_factory=list)
    errors: list[ContainerError] = field(default_factory=list)
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors


class TargetDefinition:
    """A named set of bundle containers resolved against one target environment."""

    def __init__(
        self,
        name: str,
        environment: TargetEnvironment | None = None,
        containers: list[BundleContainer] | None = None,
    ):
        self.name = name
        self.environment = environment or TargetEnvironment()
        self._containers: list[BundleContainer] = []
        for container in containers or []:
            self.add_container(container)

    @property
    def containers(self) -> list[BundleContainer]:
        return list(self._containers)

    def add_container(self, container: BundleContainer) -> bool:
        """Add a container unless a content-equal one is already present.

        Returns:
            True if the container was added
        """
        if any(existing.is_content_equal(container) for existing in self._containers):
            logger.debug(f"[target:add] {container!r} already in '{self.name}', skipping")
            return False
        self._containers.append(container)
        return True

    def resolve(self, token: CancellationToken | None = None) -> TargetResolution:
        """Resolve every container, collecting failures.

        Args:
            token: Cancellation token shared with every container

        Returns:
            TargetResolution; on cancellation, whatever was gathered so far flagged ``cancelled``
        """
        token = token or CancellationToken()
        result = TargetResolution()
        for container in self._containers:
            if token.is_cancelled:
                result.cancelled = True
                return result
            try:
                result.bundles.extend(container.resolve(self.environment, token))
            except TargetResolutionError as e:
                logger.warning(f"[target:resolve] {container!r} failed: {e}")
                result.errors.append(ContainerError(container, e))

        result.cancelled = token.is_cancelled
        logger.info(
            f"[target:resolve] '{self.name}': {len(result.bundles)} bundles, "
            f"{len(result.errors)} failed containers"
        )
        return result

    def __repr__(self) -> str:
        return f"TargetDefinition({self.name!r}, containers={len(self._containers)})"


def load_target_definition(
    path: Path,
    substitution: Substitution | None = None,
    running_platform: RunningPlatform | None = None,
) -> TargetDefinition:
    """Read a YAML target definition file.

    Args:
        path: Target definition file
        substitution: Variable expander handed to every container
        running_platform: Fallback platform handed to feature containers

    Raises:
        TargetDefinitionError: File unreadable, not YAML, or not a valid target definition
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise TargetDefinitionError(f"Unable to read target definition {path}: {e}") from e

    try:
        parsed = TargetDefinitionFile.model_validate(data)
    except ValidationError as e:
        raise TargetDefinitionError(f"Invalid target definition {path}:\n{e}") from e

    containers: list[BundleContainer] = []
    for config in parsed.containers:
        if isinstance(config, FeatureContainerConfig):
            containers.append(
                FeatureBundleContainer(
                    config.home,
                    config.id,
                    config.version,
                    substitution=substitution,
                    running_platform=running_platform,
                )
            )
        else:
            containers.append(DirectoryBundleContainer(config.path, substitution=substitution))

    return TargetDefinition(parsed.name, parsed.environment, containers)
