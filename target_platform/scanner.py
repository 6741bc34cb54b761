"""Directory bundle scanning.

Finds every bundle in a directory: jar files and expanded bundle directories
that carry an OSGi ``META-INF/MANIFEST.MF`` with a ``Bundle-SymbolicName``.
Entries that are not bundles are skipped.
"""

from __future__ import annotations

import logging
import re
import zipfile
from pathlib import Path
from typing import TYPE_CHECKING

from target_platform.cancellation import CancellationToken
from target_platform.errors import NotFoundError
from target_platform.models import BundleStatus
from target_platform.models import ResolvedBundle

if TYPE_CHECKING:
    from target_platform.containers.base import BundleContainer

logger = logging.getLogger(__name__)

MANIFEST_PATH = "META-INF/MANIFEST.MF"
DEFAULT_BUNDLE_VERSION = "0.0.0"

# "<symbolic name>_<version>": the version starts at the first "_" followed by a digit
_VERSION_SEPARATOR = re.compile(r"_(?=\d)")


def parse_manifest(text: str) -> dict[str, str]:
    """Parse the main section of a jar manifest.

    Headers are ``Name: value``; a line starting with a single space continues
    the previous header's value. Parsing stops at the first blank line.
    """
    headers: dict[str, str] = {}
    current: str | None = None
    for line in text.splitlines():
        if not line.strip():
            if headers:
                break
            continue
        if line.startswith(" ") and current is not None:
            headers[current] += line[1:]
            continue
        name, sep, value = line.partition(":")
        if not sep:
            continue
        current = name.strip()
        headers[current] = value.strip()
    return headers


def symbolic_name(header: str) -> str:
    """Strip directives such as ``;singleton:=true`` from a ``Bundle-SymbolicName``."""
    return header.split(";", 1)[0].strip()


class DirectoryBundleScanner:
    """Discover bundles in a single directory (not recursive)."""

    def discover(
        self,
        directory: Path,
        parent: BundleContainer | None = None,
        token: CancellationToken | None = None,
    ) -> list[ResolvedBundle]:
        """Return the bundles found directly in ``directory``.

        Args:
            directory: Directory to scan
            parent: Container that owns the discovered bundles
            token: Optional cancellation token, polled between entries

        Returns:
            Bundles in directory-entry name order; empty when cancelled

        Raises:
            NotFoundError: The directory cannot be listed
        """
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise NotFoundError(f"Unable to list bundles in {directory}: {e}") from e

        bundles = []
        for entry in entries:
            if token is not None and token.is_cancelled:
                return []
            bundle = self._read_entry(entry, parent)
            if bundle is not None:
                bundles.append(bundle)

        logger.debug(f"[bundle:scan] {len(bundles)} bundles in {directory}")
        return bundles

    def _read_entry(self, entry: Path, parent: BundleContainer | None) -> ResolvedBundle | None:
        if entry.is_dir():
            manifest = entry / MANIFEST_PATH
            if not manifest.is_file():
                return None
            try:
                text = manifest.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                return self._error_bundle(entry, parent, f"Unable to read {manifest}: {e}")
            return self._bundle_from_manifest(entry, parse_manifest(text), parent)

        if entry.is_file() and entry.suffix == ".jar":
            try:
                with zipfile.ZipFile(entry) as jar:
                    if MANIFEST_PATH not in jar.namelist():
                        return None
                    text = jar.read(MANIFEST_PATH).decode("utf-8", errors="replace")
            except (zipfile.BadZipFile, OSError) as e:
                return self._error_bundle(entry, parent, f"Unable to read {entry}: {e}")
            return self._bundle_from_manifest(entry, parse_manifest(text), parent)

        return None

    def _bundle_from_manifest(
        self, location: Path, headers: dict[str, str], parent: BundleContainer | None
    ) -> ResolvedBundle | None:
        name_header = headers.get("Bundle-SymbolicName")
        if not name_header:
            logger.debug(f"Skipping {location}: no Bundle-SymbolicName")
            return None

        version = headers.get("Bundle-Version", "").strip()
        status = BundleStatus.OK
        message = None
        if not version:
            version = DEFAULT_BUNDLE_VERSION
            status = BundleStatus.WARNING
            message = f"{location.name} declares no Bundle-Version"

        return ResolvedBundle(
            id=symbolic_name(name_header),
            version=version,
            location=location,
            parent=parent,
            status=status,
            message=message,
            fragment="Fragment-Host" in headers,
            source_bundle="Eclipse-SourceBundle" in headers,
        )

    def _error_bundle(self, location: Path, parent: BundleContainer | None, message: str) -> ResolvedBundle:
        logger.warning(message)
        base = location.stem if location.suffix == ".jar" else location.name
        match = _VERSION_SEPARATOR.search(base)
        name, version = (base[: match.start()], base[match.end() :]) if match else (base, "")
        return ResolvedBundle(
            id=name,
            version=version or DEFAULT_BUNDLE_VERSION,
            location=location,
            parent=parent,
            status=BundleStatus.ERROR,
            message=message,
        )
