"""Bundle containers: sources of resolved bundles in a target definition."""

from .base import BundleContainer
from .directory import DirectoryBundleContainer
from .feature import FeatureBundleContainer
from .feature import filter_bundles

__all__ = [
    "BundleContainer",
    "DirectoryBundleContainer",
    "FeatureBundleContainer",
    "filter_bundles",
]
