"""target-platform - resolve the bundles of features for a target environment.

Public API:
- FeatureBundleContainer: bundles of one feature under an install home
- DirectoryBundleContainer: every bundle in a directory
- TargetDefinition / load_target_definition: containers resolved together
- TargetEnvironment, ResolvedBundle, FeatureDescriptor: data models
- CancellationToken: cooperative cancellation
- TargetResolutionError and subclasses: resolution failures
"""

from .cancellation import CancellationToken
from .containers import BundleContainer
from .containers import DirectoryBundleContainer
from .containers import FeatureBundleContainer
from .descriptor import parse_feature_descriptor
from .discovery import find_feature_dirs
from .environment import RunningPlatform
from .environment import matches
from .errors import ErrorKind
from .errors import InvalidDescriptorError
from .errors import InvalidLocationError
from .errors import NotFoundError
from .errors import TargetDefinitionError
from .errors import TargetResolutionError
from .models import BundleStatus
from .models import FeatureDescriptor
from .models import FeatureReference
from .models import PluginEntry
from .models import ResolvedBundle
from .models import TargetEnvironment
from .scanner import DirectoryBundleScanner
from .substitution import VariableSubstitution
from .target import TargetDefinition
from .target import TargetResolution
from .target import load_target_definition
from .versions import select_feature_directory

__all__ = [
    "BundleContainer",
    "BundleStatus",
    "CancellationToken",
    "DirectoryBundleContainer",
    "DirectoryBundleScanner",
    "ErrorKind",
    "FeatureBundleContainer",
    "FeatureDescriptor",
    "FeatureReference",
    "InvalidDescriptorError",
    "InvalidLocationError",
    "NotFoundError",
    "PluginEntry",
    "ResolvedBundle",
    "RunningPlatform",
    "TargetDefinition",
    "TargetDefinitionError",
    "TargetEnvironment",
    "TargetResolution",
    "TargetResolutionError",
    "VariableSubstitution",
    "find_feature_dirs",
    "load_target_definition",
    "matches",
    "parse_feature_descriptor",
    "select_feature_directory",
]
