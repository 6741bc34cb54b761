"""Feature directory selection by install-directory naming convention.

Feature directories are named ``<id>_<version>``. When no version is requested
the "most recent" directory is the one whose name sorts last as a plain string.

Note: this is ordinal string ordering, not version ordering. ``foo_1.9.0``
sorts after ``foo_1.10.0``. The behavior is kept deliberately; swap
:func:`directory_name_order` to change it.
"""

import logging
from collections.abc import Callable
from collections.abc import Sequence
from pathlib import Path

from target_platform.errors import NotFoundError

logger = logging.getLogger(__name__)


def directory_name_order(path: Path) -> str:
    """Sort key used to pick the most recent feature directory."""
    return path.name


def select_feature_directory(
    home: Path,
    candidates: Sequence[Path],
    feature_id: str,
    version: str | None = None,
    order: Callable[[Path], object] = directory_name_order,
) -> Path:
    """Pick the directory of ``feature_id`` among the feature directories of ``home``.

    Args:
        home: Resolved install home (used for error messages)
        candidates: Feature directories found under the home
        feature_id: Feature symbolic name
        version: Exact version to select, or None for the most recent
        order: Sort key used for the most-recent selection

    Returns:
        The selected feature directory

    Raises:
        NotFoundError: No candidates, or none matching the id/version
    """
    if not candidates:
        raise NotFoundError(f"No features found in {home / 'features'}")

    if version is not None:
        name = f"{feature_id}_{version}"
        for candidate in candidates:
            if candidate.name == name:
                return candidate
        raise NotFoundError(f"Feature '{feature_id}' version '{version}' not found in {home}")

    prefix = f"{feature_id}_"
    matching = [c for c in candidates if c.name.startswith(prefix)]
    if not matching:
        raise NotFoundError(f"Feature '{feature_id}' not found in {home}")

    # Last after a stable sort, so later duplicates of a name win
    selected = sorted(matching, key=order)[-1]
    logger.debug(f"[feature:select] {feature_id} -> {selected.name} (of {len(matching)} candidates)")
    return selected
