"""Tests for the FreshnessResolver class."""

import os
import tempfile
from pathlib import Path

import pytest

from pyssync.sync.comparator import FreshnessResolver
from pyssync.sync.modes import ForceDirection

OLD = 1_500_000_000
NEW = 1_600_000_000


def _write(path: Path, content: str, mtime: int) -> None:
    """Write a file and set its modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    os.utime(path, (mtime, mtime))


class TestFreshnessResolver:
    """Tests for resolving which root holds the newer copy."""

    @pytest.fixture
    def roots(self):
        """Create two empty roots."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root1 = Path(tmpdir) / "root1"
            root2 = Path(tmpdir) / "root2"
            root1.mkdir()
            root2.mkdir()
            yield root1, root2

    def test_root1_newer(self, roots):
        """The later modification time is the source."""
        root1, root2 = roots
        _write(root1 / "f", "new", NEW)
        _write(root2 / "f", "old", OLD)

        result = FreshnessResolver().resolve("f", root1, root2)

        assert result.source == root1
        assert result.destination == root2
        assert result.comparable is True
        assert result.decided is True

    def test_root2_newer(self, roots):
        """Works the same in the other direction."""
        root1, root2 = roots
        _write(root1 / "dir/f", "old", OLD)
        _write(root2 / "dir/f", "new", NEW)

        result = FreshnessResolver().resolve("dir/f", root1, root2)

        assert result.source == root2
        assert result.destination == root1

    def test_equal_times_no_decision(self, roots):
        """Equal times give no direction."""
        root1, root2 = roots
        _write(root1 / "f", "a", OLD)
        _write(root2 / "f", "bbb", OLD)

        result = FreshnessResolver().resolve("f", root1, root2)

        assert result.source is None
        assert result.destination is None
        assert result.comparable is True
        assert result.decided is False

    def test_sub_second_difference_is_equal(self, roots):
        """Times are compared at one second resolution."""
        root1, root2 = roots
        _write(root1 / "f", "a", OLD)
        _write(root2 / "f", "a", OLD)
        os.utime(root2 / "f", (OLD + 0.4, OLD + 0.4))

        assert FreshnessResolver().resolve("f", root1, root2).decided is False

    def test_directory_not_compared(self, roots):
        """A directory on either side is never compared."""
        root1, root2 = roots
        (root1 / "d").mkdir()
        _write(root2 / "d", "file", NEW)

        result = FreshnessResolver().resolve("d", root1, root2)

        assert result.source is None
        assert result.comparable is False

    def test_directory_on_both_sides(self, roots):
        """Two directories are not compared regardless of times."""
        root1, root2 = roots
        (root1 / "d").mkdir()
        (root2 / "d").mkdir()
        os.utime(root1 / "d", (NEW, NEW))
        os.utime(root2 / "d", (OLD, OLD))

        assert FreshnessResolver().resolve("d", root1, root2).decided is False

    def test_missing_side_not_comparable(self, roots):
        """A path that cannot be stat'ed on one side is not comparable."""
        root1, root2 = roots
        _write(root1 / "f", "a", NEW)

        result = FreshnessResolver().resolve("f", root1, root2)

        assert result.source is None
        assert result.comparable is False

    def test_force_root1_wins_when_older(self, roots):
        """The forced root is the source even if its copy is older."""
        root1, root2 = roots
        _write(root1 / "f", "old", OLD)
        _write(root2 / "f", "new", NEW)

        result = FreshnessResolver(ForceDirection.ROOT1).resolve("f", root1, root2)

        assert result.source == root1
        assert result.destination == root2

    def test_force_root2_wins_when_older(self, roots):
        """Forcing root2 works the same way."""
        root1, root2 = roots
        _write(root1 / "f", "new", NEW)
        _write(root2 / "f", "old", OLD)

        result = FreshnessResolver(ForceDirection.ROOT2).resolve("f", root1, root2)

        assert result.source == root2
        assert result.destination == root1

    def test_force_with_equal_times_no_decision(self, roots):
        """The override only applies when the copies differ in time."""
        root1, root2 = roots
        _write(root1 / "f", "a", OLD)
        _write(root2 / "f", "a", OLD)

        result = FreshnessResolver(ForceDirection.ROOT1).resolve("f", root1, root2)

        assert result.decided is False

    def test_force_bound_to_roots_ignores_argument_order(self, roots):
        """With bound roots the forced root wins in either call order."""
        root1, root2 = roots
        _write(root1 / "f", "new", NEW)
        _write(root2 / "f", "old", OLD)

        resolver = FreshnessResolver(ForceDirection.ROOT2, roots=(root1, root2))

        assert resolver.resolve("f", root1, root2).source == root2
        assert resolver.resolve("f", root2, root1).source == root2

    def test_override_is_per_instance(self, roots):
        """A forced resolver does not affect another resolver."""
        root1, root2 = roots
        _write(root1 / "f", "old", OLD)
        _write(root2 / "f", "new", NEW)

        forced = FreshnessResolver(ForceDirection.ROOT1)
        default = FreshnessResolver()

        assert forced.resolve("f", root1, root2).source == root1
        assert default.resolve("f", root1, root2).source == root2


class TestForceDirection:
    """Tests for parsing force directions."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("none", ForceDirection.NONE),
            ("0", ForceDirection.NONE),
            ("root1", ForceDirection.ROOT1),
            ("1", ForceDirection.ROOT1),
            ("ROOT2", ForceDirection.ROOT2),
            ("2", ForceDirection.ROOT2),
        ],
    )
    def test_from_string(self, value, expected):
        """Names and numeric aliases are accepted."""
        assert ForceDirection.from_string(value) == expected

    def test_from_string_invalid(self):
        """Unknown values are rejected."""
        with pytest.raises(ValueError, match="Invalid force direction"):
            ForceDirection.from_string("3")
