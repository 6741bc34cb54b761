"""Tests for feature directory discovery and version selection."""

from pathlib import Path

import pytest

from target_platform.discovery import find_feature_dirs
from target_platform.discovery import plugins_dir_for
from target_platform.errors import NotFoundError
from target_platform.versions import directory_name_order
from target_platform.versions import select_feature_directory

HOME = Path("/opt/eclipse")


def _dirs(*names: str) -> list[Path]:
    return [HOME / "features" / name for name in names]


class TestSelectFeatureDirectory:
    def test_no_candidates(self):
        with pytest.raises(NotFoundError, match="No features found"):
            select_feature_directory(HOME, [], "foo")

    def test_exact_version(self):
        candidates = _dirs("foo_1.0.0", "foo_2.0.0", "bar_1.0.0")

        assert select_feature_directory(HOME, candidates, "foo", "1.0.0").name == "foo_1.0.0"

    def test_exact_version_missing(self):
        with pytest.raises(NotFoundError, match="foo"):
            select_feature_directory(HOME, _dirs("foo_1.0.0"), "foo", "1.0")

    def test_most_recent_is_string_maximum(self):
        candidates = _dirs("foo_1.0.0", "foo_1.9.0", "foo_1.10.0")

        assert select_feature_directory(HOME, candidates, "foo").name == "foo_1.9.0"

    def test_most_recent_ignores_other_features(self):
        candidates = _dirs("foo_1.0.0", "foo.extra_9.0.0", "zzz_1.0.0")

        assert select_feature_directory(HOME, candidates, "foo").name == "foo_1.0.0"

    def test_most_recent_prefix_includes_underscore(self):
        # "foo_bar_2.0.0" starts with "foo_" and sorts after "foo_1.0.0"
        candidates = _dirs("foo_1.0.0", "foo_bar_2.0.0")

        assert select_feature_directory(HOME, candidates, "foo").name == "foo_bar_2.0.0"

    def test_no_matching_id(self):
        with pytest.raises(NotFoundError, match="Feature 'foo' not found"):
            select_feature_directory(HOME, _dirs("bar_1.0.0"), "foo")

    def test_custom_order(self):
        candidates = _dirs("foo_1.9.0", "foo_1.10.0")

        def numeric(path: Path):
            return tuple(int(part) for part in path.name.split("_", 1)[1].split("."))

        assert select_feature_directory(HOME, candidates, "foo", order=numeric).name == "foo_1.10.0"

    def test_default_order_is_name(self):
        assert directory_name_order(HOME / "features" / "foo_1.0.0") == "foo_1.0.0"


class TestFindFeatureDirs:
    def test_missing_features_dir(self, tmp_path):
        assert find_feature_dirs(tmp_path) == []

    def test_lists_directories_only(self, tmp_path):
        features = tmp_path / "features"
        (features / "b_1.0.0").mkdir(parents=True)
        (features / "a_1.0.0").mkdir()
        (features / "readme.txt").write_text("not a feature")

        assert [p.name for p in find_feature_dirs(tmp_path)] == ["a_1.0.0", "b_1.0.0"]

    def test_includes_dropins_after_home_features(self, tmp_path):
        (tmp_path / "features" / "core_1.0.0").mkdir(parents=True)
        (tmp_path / "dropins" / "tools" / "features" / "tools_2.0.0").mkdir(parents=True)
        (tmp_path / "dropins" / "legacy" / "eclipse" / "features" / "legacy_0.1.0").mkdir(parents=True)
        (tmp_path / "dropins" / "empty").mkdir(parents=True)

        names = [p.name for p in find_feature_dirs(tmp_path)]

        assert names == ["core_1.0.0", "legacy_0.1.0", "tools_2.0.0"]

    def test_plugins_dir_is_next_to_features(self, tmp_path):
        descriptor = tmp_path / "dropins" / "tools" / "features" / "tools_2.0.0" / "feature.xml"

        assert plugins_dir_for(descriptor) == tmp_path / "dropins" / "tools" / "plugins"
