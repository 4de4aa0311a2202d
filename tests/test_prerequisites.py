"""Tests for the prerequisites module."""

import os
import subprocess
import time
from unittest.mock import patch

import pytest

from monorepo_engine.errors import InvalidModeError
from monorepo_engine.prerequisites.files import FilePrerequisite, diff, meta
from monorepo_engine.prerequisites.git import collect


def _touch(path, ms):
    path.write_text(path.name)
    os.utime(path, ns=(ms * 1_000_000, ms * 1_000_000))


@pytest.fixture
def component(tmp_path):
    """A component directory with two files of known mtimes."""
    _touch(tmp_path / "Dockerfile", 1_000_000)
    _touch(tmp_path / "package.json", 2_000_000)
    return tmp_path


PREREQS = [FilePrerequisite("Dockerfile"), FilePrerequisite("package.json")]


class TestMeta:
    def test_pre_is_max_mtime(self, component):
        assert meta(PREREQS, "pre", component) == "2000000"

    def test_pre_empty_is_zero(self):
        assert meta([], "pre") == "0"

    def test_post_is_wall_clock(self):
        with patch("monorepo_engine.prerequisites.files.time.time_ns", return_value=5_000_000_000_000):
            assert meta(PREREQS, "post") == "5000000"

    def test_post_is_recent(self):
        before = int(time.time() * 1000) - 1
        assert int(meta([], "post")) >= before

    def test_invalid_mode(self):
        with pytest.raises(InvalidModeError) as exc_info:
            meta(PREREQS, "during")
        assert "valid: pre, post" in str(exc_info.value)

    def test_absolute_paths_ignore_root(self, component, tmp_path_factory):
        other = tmp_path_factory.mktemp("elsewhere")
        prereq = FilePrerequisite(str(component / "Dockerfile"))
        assert meta([prereq], "pre", other) == "1000000"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            meta([FilePrerequisite("nope")], "pre", tmp_path)


class TestDiff:
    def test_nothing_changed(self, component):
        assert diff(PREREQS, "2000000", root=component) is None

    def test_equal_mtime_is_not_a_change(self, component):
        assert diff([FilePrerequisite("Dockerfile")], "1000000", root=component) is None

    def test_lists_changed_files(self, component):
        changed = diff(PREREQS, "1500000", "2000000", component)
        assert changed == [FilePrerequisite("package.json")]

    def test_everything_changed(self, component):
        assert diff(PREREQS, "0", root=component) == PREREQS

    def test_empty_prerequisites(self):
        assert diff([], "0") is None


class TestGitCollect:
    def test_lists_tracked_files(self, tmp_path):
        subprocess.run(["git", "init"], cwd=tmp_path, capture_output=True)
        (tmp_path / "Dockerfile").write_text("FROM scratch\n")
        (tmp_path / "untracked.txt").write_text("x\n")
        subprocess.run(["git", "add", "Dockerfile"], cwd=tmp_path, capture_output=True)

        prereqs = collect(tmp_path)
        assert prereqs == [FilePrerequisite("Dockerfile")]

    def test_not_a_repository(self, tmp_path):
        with patch.dict(os.environ, {"GIT_CEILING_DIRECTORIES": str(tmp_path.parent)}):
            with pytest.raises(RuntimeError):
                collect(tmp_path)
