"""Tests for sorted path list set operations."""

from pyssync.sync.diff import not_in, union_sorted


class TestNotIn:
    """Tests for not_in."""

    def test_returns_elements_missing_from_haystack(self):
        """Elements of needle absent from haystack are returned."""
        assert not_in(["a", "c", "e"], ["a", "b", "c", "d"]) == ["b", "d"]

    def test_preserves_needle_order(self):
        """Result follows needle order, not sorted order."""
        assert not_in(["b"], ["z", "b", "a"]) == ["z", "a"]

    def test_empty_when_subset(self):
        """A needle contained in haystack yields nothing."""
        assert not_in(["a", "b", "c"], ["c", "a"]) == []

    def test_empty_haystack(self):
        """Everything is missing from an empty haystack."""
        assert not_in([], ["x", "y"]) == ["x", "y"]

    def test_empty_needle(self):
        """Nothing is missing from an empty needle."""
        assert not_in(["x"], []) == []

    def test_nested_paths(self):
        """Prefixes are not treated as matches."""
        haystack = ["dir1", "dir1/file2"]
        needle = ["dir1", "dir1/dir2", "dir1/file2", "dir10"]
        assert not_in(haystack, needle) == ["dir1/dir2", "dir10"]


class TestUnionSorted:
    """Tests for union_sorted."""

    def test_merges_and_sorts(self):
        """Lists are merged, deduplicated and sorted."""
        assert union_sorted(["b", "a"], ["c", "a"], []) == ["a", "b", "c"]

    def test_no_lists(self):
        """Union of nothing is empty."""
        assert union_sorted() == []
