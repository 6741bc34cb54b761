"""CLI command groups."""

from .feature import feature
from .target import target

__all__ = ["feature", "target"]
