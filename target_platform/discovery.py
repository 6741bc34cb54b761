"""Feature directory discovery for an install home.

Convention over configuration: an install home lays features out as

- ``features/<id>_<version>/`` for features installed in the home itself
- ``dropins/<name>/features/<id>_<version>/`` for dropped-in extensions
- ``dropins/<name>/eclipse/features/<id>_<version>/`` for the older dropin layout

Each feature directory has a sibling ``plugins/`` directory next to its
``features/`` parent.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

FEATURES_DIR = "features"
PLUGINS_DIR = "plugins"
DROPINS_DIR = "dropins"


def _subdirectories(path: Path) -> list[Path]:
    if not path.exists() or not path.is_dir():
        return []
    return sorted([p for p in path.iterdir() if p.is_dir()], key=lambda p: p.name)


def find_dropin_sites(home: Path) -> list[Path]:
    """Return dropin extension roots that contain a ``features/`` directory.

    Args:
        home: Resolved install home

    Returns:
        Site directories (the parents of each ``features/`` directory)
    """
    sites = []
    for dropin in _subdirectories(home / DROPINS_DIR):
        for site in (dropin, dropin / "eclipse"):
            if (site / FEATURES_DIR).is_dir():
                sites.append(site)
    return sites


def find_feature_dirs(home: Path) -> list[Path]:
    """Return every feature directory under an install home.

    Home features come first, followed by dropin features in dropin name order.
    Plain files are ignored and a missing ``features/`` directory contributes nothing.

    Args:
        home: Resolved install home

    Returns:
        Feature directories

    Example:
        >>> find_feature_dirs(Path("/opt/eclipse"))
        [PosixPath('/opt/eclipse/features/org.example.feature_1.0.0'), ...]
    """
    feature_dirs = _subdirectories(home / FEATURES_DIR)
    for site in find_dropin_sites(home):
        feature_dirs.extend(_subdirectories(site / FEATURES_DIR))

    logger.debug(f"[feature:discover] {len(feature_dirs)} feature directories under {home}")
    return feature_dirs


def plugins_dir_for(descriptor: Path) -> Path:
    """Return the ``plugins/`` directory that sits next to a descriptor's ``features/`` directory."""
    return descriptor.parent.parent.parent / PLUGINS_DIR
