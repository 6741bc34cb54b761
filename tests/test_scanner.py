"""Tests for directory bundle scanning and manifest parsing."""

from unittest.mock import patch

import pytest

from target_platform.cancellation import CancellationToken
from target_platform.errors import NotFoundError
from target_platform.models import BundleStatus
from target_platform.scanner import DirectoryBundleScanner
from target_platform.scanner import parse_manifest
from target_platform.scanner import symbolic_name


def test_parse_manifest_continuation_lines():
    text = (
        "Manifest-Version: 1.0\n"
        "Bundle-SymbolicName: org.example.a.very.long.\n"
        " symbolic.name;singleton:=true\n"
        "Bundle-Version: 1.0.0\n"
        "\n"
        "Name: ignored/section\n"
    )

    headers = parse_manifest(text)

    assert headers["Bundle-SymbolicName"] == "org.example.a.very.long.symbolic.name;singleton:=true"
    assert "Name" not in headers


def test_symbolic_name_strips_directives():
    assert symbolic_name("org.example.core; singleton:=true") == "org.example.core"
    assert symbolic_name("org.example.core") == "org.example.core"


class TestDirectoryBundleScanner:
    def setup_method(self) -> None:
        self.scanner = DirectoryBundleScanner()

    def test_discovers_jar_and_directory_bundles(self, install_home):
        jar = install_home.add_bundle_jar("org.example.a", "1.0.0")
        directory = install_home.add_bundle_dir("org.example.b", "2.0.0.v2024")

        bundles = self.scanner.discover(install_home.plugins)

        assert [(b.id, b.version, b.location) for b in bundles] == [
            ("org.example.a", "1.0.0", jar),
            ("org.example.b", "2.0.0.v2024", directory),
        ]
        assert all(b.status is BundleStatus.OK for b in bundles)

    def test_assigns_parent(self, install_home):
        install_home.add_bundle_jar("org.example.a", "1.0.0")
        parent = object()

        bundles = self.scanner.discover(install_home.plugins, parent=parent)

        assert bundles[0].parent is parent

    def test_skips_non_bundles(self, install_home):
        (install_home.plugins / "notes.txt").write_text("hello")
        (install_home.plugins / "plain_dir").mkdir()
        no_name = install_home.plugins / "no_name_1.0.0" / "META-INF"
        no_name.mkdir(parents=True)
        (no_name / "MANIFEST.MF").write_text("Manifest-Version: 1.0\n")

        assert self.scanner.discover(install_home.plugins) == []

    def test_missing_version_is_a_warning(self, install_home):
        bundle_dir = install_home.plugins / "org.example.unversioned"
        (bundle_dir / "META-INF").mkdir(parents=True)
        (bundle_dir / "META-INF" / "MANIFEST.MF").write_text("Bundle-SymbolicName: org.example.unversioned\n")

        [bundle] = self.scanner.discover(install_home.plugins)

        assert bundle.version == "0.0.0"
        assert bundle.status is BundleStatus.WARNING
        assert "Bundle-Version" in bundle.message

    def test_fragment_and_source_flags(self, install_home):
        install_home.add_bundle_dir("org.example.frag", "1.0.0", headers="Fragment-Host: org.example.core\n")
        install_home.add_bundle_jar(
            "org.example.core.source", "1.0.0", headers='Eclipse-SourceBundle: org.example.core;version="1.0.0"\n'
        )

        source, frag = self.scanner.discover(install_home.plugins)

        assert frag.fragment and not frag.source_bundle
        assert source.source_bundle and not source.fragment

    def test_corrupt_jar_is_an_error_bundle(self, install_home):
        broken = install_home.plugins / "org.example.broken_1.0.0.jar"
        broken.write_bytes(b"not a zip file")

        [bundle] = self.scanner.discover(install_home.plugins)

        assert bundle.status is BundleStatus.ERROR
        assert (bundle.id, bundle.version) == ("org.example.broken", "1.0.0")
        assert bundle.location == broken

    def test_cancelled_scan_returns_nothing(self, install_home):
        install_home.add_bundle_jar("org.example.a", "1.0.0")
        token = CancellationToken()
        token.cancel()

        assert self.scanner.discover(install_home.plugins, token=token) == []

    def test_cancelled_between_entries_discards_earlier_bundles(self, install_home):
        install_home.add_bundle_jar("org.example.a", "1.0.0")
        install_home.add_bundle_jar("org.example.b", "1.0.0")
        token = CancellationToken()
        read_entry = self.scanner._read_entry

        def read_and_cancel(entry, parent):
            token.cancel()
            return read_entry(entry, parent)

        with patch.object(self.scanner, "_read_entry", side_effect=read_and_cancel) as reader:
            assert self.scanner.discover(install_home.plugins, token=token) == []

        assert reader.call_count == 1

    def test_unlistable_directory_is_not_found(self, install_home):
        not_a_directory = install_home.plugins / "notes.txt"
        not_a_directory.write_text("")

        with pytest.raises(NotFoundError, match="Unable to list"):
            self.scanner.discover(not_a_directory)

    @pytest.mark.parametrize(
        ("file_name", "expected"),
        [
            ("org.example_tools_1.0.0.jar", ("org.example_tools", "1.0.0")),
            ("org.example_1.0.0.v2024_01.jar", ("org.example", "1.0.0.v2024_01")),
            ("unversioned.jar", ("unversioned", "0.0.0")),
        ],
    )
    def test_error_bundle_name_splits_at_version(self, install_home, file_name, expected):
        (install_home.plugins / file_name).write_bytes(b"not a zip file")

        [bundle] = self.scanner.discover(install_home.plugins)

        assert bundle.status is BundleStatus.ERROR
        assert (bundle.id, bundle.version) == expected
