"""Pytest configuration and install-home fixtures for target-platform tests."""

import zipfile
from pathlib import Path
from textwrap import dedent

import pytest

from target_platform.environment import RunningPlatform


class InstallHome:
    """Builds an install home (features/ and plugins/) on disk."""

    def __init__(self, root: Path):
        self.root = root
        self.features = root / "features"
        self.plugins = root / "plugins"
        self.features.mkdir(parents=True, exist_ok=True)
        self.plugins.mkdir(parents=True, exist_ok=True)

    def add_feature(self, feature_id: str, version: str, plugins: list[dict] | None = None, **attrs) -> Path:
        """Write features/<id>_<version>/feature.xml listing ``plugins``."""
        feature_dir = self.features / f"{feature_id}_{version}"
        feature_dir.mkdir(parents=True, exist_ok=True)
        extra = "".join(f' {name.replace("_", "-")}="{value}"' for name, value in attrs.items())
        entries = "\n".join(
            "  <plugin " + " ".join(f'{key}="{value}"' for key, value in plugin.items()) + "/>"
            for plugin in plugins or []
        )
        (feature_dir / "feature.xml").write_text(
            f'<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<feature id="{feature_id}" version="{version}"{extra}>\n{entries}\n</feature>\n'
        )
        return feature_dir

    def add_bundle_dir(self, bundle_id: str, version: str, headers: str = "") -> Path:
        """Write an expanded bundle plugins/<id>_<version>/META-INF/MANIFEST.MF."""
        bundle_dir = self.plugins / f"{bundle_id}_{version}"
        (bundle_dir / "META-INF").mkdir(parents=True, exist_ok=True)
        (bundle_dir / "META-INF" / "MANIFEST.MF").write_text(_manifest(bundle_id, version, headers))
        return bundle_dir

    def add_bundle_jar(self, bundle_id: str, version: str, headers: str = "") -> Path:
        """Write a jar bundle plugins/<id>_<version>.jar."""
        jar_path = self.plugins / f"{bundle_id}_{version}.jar"
        with zipfile.ZipFile(jar_path, "w") as jar:
            jar.writestr("META-INF/MANIFEST.MF", _manifest(bundle_id, version, headers))
        return jar_path


def _manifest(bundle_id: str, version: str, headers: str) -> str:
    return (
        "Manifest-Version: 1.0\n"
        "Bundle-ManifestVersion: 2\n"
        f"Bundle-SymbolicName: {bundle_id};singleton:=true\n"
        f"Bundle-Version: {version}\n" + dedent(headers)
    )


@pytest.fixture
def install_home(tmp_path: Path) -> InstallHome:
    return InstallHome(tmp_path / "home")


@pytest.fixture
def linux_platform() -> RunningPlatform:
    return RunningPlatform(arch="x86_64", os="linux", ws="gtk", nl="en_US")
