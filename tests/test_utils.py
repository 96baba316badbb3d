"""Unit tests for utility functions."""

from datetime import datetime
from pathlib import Path

import pytest

from pyssync.exceptions import SsyncRootError
from pyssync.utils import check_directory, format_mtime, resolve_relative


class TestCheckDirectory:
    """Tests for check_directory."""

    def test_directory(self, tmp_path):
        """An existing directory is accepted."""
        assert check_directory(tmp_path) == tmp_path

    def test_string_path(self, tmp_path):
        """String paths are converted."""
        assert check_directory(str(tmp_path)) == tmp_path

    def test_file_rejected(self, tmp_path):
        """A regular file is not a directory."""
        file_path = tmp_path / "file.txt"
        file_path.write_text("x")

        with pytest.raises(SsyncRootError, match="is not a directory"):
            check_directory(file_path)

    def test_missing_rejected(self, tmp_path):
        """A missing path is not a directory."""
        with pytest.raises(SsyncRootError, match="is not a directory"):
            check_directory(tmp_path / "missing")


class TestResolveRelative:
    """Tests for resolve_relative."""

    def test_nested(self):
        """Forward slashes become path components."""
        assert resolve_relative(Path("/root"), "a/b/c") == Path("/root/a/b/c")

    def test_single(self):
        """A single component is joined directly."""
        assert resolve_relative(Path("/root"), "file") == Path("/root/file")


class TestFormatMtime:
    """Tests for format_mtime."""

    def test_format(self):
        """Timestamps are shown in local time."""
        ts = datetime(2024, 1, 15, 10, 30, 0).timestamp()

        assert format_mtime(ts) == "2024-01-15 10:30:00"
