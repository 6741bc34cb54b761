"""Feature descriptor (``feature.xml``) parsing.

Reads the feature id, version, label and provider, plus the ordered list of
``<plugin>`` entries with their environment constraints. Labels and provider
names starting with ``%`` are translated through ``feature.properties`` next to
the descriptor.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from target_platform.errors import InvalidDescriptorError
from target_platform.models import FeatureDescriptor
from target_platform.models import PluginEntry

logger = logging.getLogger(__name__)

FEATURE_DESCRIPTOR = "feature.xml"
FEATURE_PROPERTIES = "feature.properties"


def parse_feature_descriptor(path: Path) -> FeatureDescriptor:
    """Parse a ``feature.xml`` file.

    Args:
        path: Path to the descriptor file

    Returns:
        FeatureDescriptor with plugin entries in document order

    Raises:
        InvalidDescriptorError: File missing, not XML, or lacking id/version
    """
    if not path.exists() or not path.is_file():
        raise InvalidDescriptorError(f"Feature descriptor not found: {path}")

    try:
        root = ET.parse(path).getroot()
    except (ET.ParseError, OSError) as e:
        raise InvalidDescriptorError(f"Unable to read feature descriptor {path}: {e}") from e

    if root.tag != "feature":
        raise InvalidDescriptorError(f"{path} is not a feature descriptor (root element <{root.tag}>)")

    feature_id = root.get("id")
    version = root.get("version")
    if not feature_id or not version:
        raise InvalidDescriptorError(f"Feature descriptor {path} is missing an id or version")

    properties = load_properties(path.parent / FEATURE_PROPERTIES)

    plugins = []
    for element in root.findall("plugin"):
        plugin_id = element.get("id")
        if not plugin_id:
            logger.warning(f"Skipping <plugin> without id in {path}")
            continue
        plugins.append(
            PluginEntry(
                id=plugin_id,
                version=element.get("version", "0.0.0"),
                arch=element.get("arch") or None,
                os=element.get("os") or None,
                ws=element.get("ws") or None,
                nl=element.get("nl") or None,
                fragment=_flag(element.get("fragment"), default=False),
                unpack=_flag(element.get("unpack"), default=True),
            )
        )

    return FeatureDescriptor(
        id=feature_id,
        version=version,
        label=_translate(root.get("label"), properties),
        provider=_translate(root.get("provider-name"), properties),
        plugins=plugins,
        path=path,
    )


def _flag(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() == "true"


def _translate(value: str | None, properties: dict[str, str]) -> str | None:
    if value and value.startswith("%"):
        return properties.get(value[1:], value)
    return value


def load_properties(path: Path) -> dict[str, str]:
    """Read a Java-style ``.properties`` file.

    Supports ``key=value`` and ``key: value`` lines, ``#``/``!`` comments and
    trailing-backslash continuations. A missing file yields an empty mapping.

    Raises:
        InvalidDescriptorError: The file exists but cannot be read
    """
    if not path.exists():
        return {}

    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise InvalidDescriptorError(f"Unable to read {path}: {e}") from e

    properties: dict[str, str] = {}
    pending = ""
    for raw in text.splitlines():
        line = pending + raw.strip() if pending else raw.strip()
        pending = ""
        if not line or line[0] in "#!":
            continue
        if line.endswith("\\"):
            pending = line[:-1]
            continue
        key, value = _split_property(line)
        properties[key] = value.replace("\\n", "\n")
    if pending:
        key, value = _split_property(pending)
        properties[key] = value
    return properties


def _split_property(line: str) -> tuple[str, str]:
    for index, char in enumerate(line):
        if char in "=:":
            return line[:index].strip(), line[index + 1 :].strip()
    return line, ""
