"""
Tests for the sorted path-to-reference index.

Tests focus on:
- Key ordering after inserts, deletes and loads
- Single path and glob lookups
- Override stacks and missing files
- Prefix-pruned scans and subtree removal
"""

import re

import pytest

from vresource.index import ReferenceIndex, STOP_ON_FIRST


@pytest.fixture
def files(tmp_path):
    """A few files on disk to reference."""
    for name in ["a.css", "b.css", "c.css", "app.js", "theme.css"]:
        (tmp_path / name).write_text(name)
    return tmp_path


@pytest.fixture
def index(files):
    """Index with a small tree of relative references.

    Structure:
        /
        ├── css/
        │   ├── a.css
        │   ├── b.css
        │   └── sub/
        │       └── c.css
        ├── css-extra   (file)
        └── js/
            └── app.js
    """
    return ReferenceIndex(str(files), {
        "/": None,
        "/js": None,
        "/js/app.js": "app.js",
        "/css": None,
        "/css/b.css": "b.css",
        "/css/a.css": "a.css",
        "/css/sub": None,
        "/css/sub/c.css": "c.css",
        "/css-extra": "theme.css",
    })


class TestOrdering:
    """Test that keys stay in ascending order."""

    def test_loaded_keys_are_sorted(self, index):
        keys = index.keys()
        assert keys == sorted(keys)

    def test_inserted_keys_are_sorted(self, index):
        index.insert("/css/aa.css", "a.css")
        index.insert("/b", None)

        keys = index.keys()
        assert keys == sorted(keys)
        assert "/css/aa.css" in index

    def test_overwriting_does_not_duplicate_keys(self, index):
        before = len(index)
        index.insert("/css/a.css", "b.css")

        assert len(index) == before
        assert index.raw("/css/a.css") == "b.css"

    def test_delete_keeps_order(self, index):
        index.delete("/css/b.css")

        assert "/css/b.css" not in index
        assert index.keys() == sorted(index.keys())

    def test_invalid_reference_is_rejected(self, index):
        with pytest.raises(ValueError):
            index.insert("/bad", 42)


class TestPathLookup:
    """Test single path resolution."""

    def test_unknown_path_is_empty(self, index):
        assert index.get_references_for_path("/nope") == {}

    def test_relative_reference_is_made_absolute(self, index, files):
        result = index.get_references_for_path("/css/a.css")

        assert result == {"/css/a.css": str(files / "a.css")}

    def test_virtual_directory_resolves_to_none(self, index):
        assert index.get_references_for_path("/css") == {"/css": None}

    def test_link_reference_is_passed_through(self, index):
        index.insert("/latest", "@/css/a.css")

        assert index.get_references_for_path("/latest") == {"/latest": "@/css/a.css"}

    def test_missing_file_is_a_miss(self, index, files):
        """
        Given: An entry whose file was deleted from disk
        When: Looking up its path
        Then: The entry behaves as if it did not exist, but stays indexed
        """
        (files / "a.css").unlink()

        assert index.get_references_for_path("/css/a.css") == {}
        assert "/css/a.css" in index

    def test_first_override_wins(self, index, files):
        index.insert("/style.css", ["theme.css", "a.css"])

        assert index.get_references_for_path("/style.css") == {
            "/style.css": str(files / "theme.css")
        }

    def test_only_first_override_is_considered(self, index, files):
        """
        Given: An override stack whose first file is missing
        When: Looking up the path
        Then: Later entries are not used as a fallback
        """
        index.insert("/style.css", ["missing.css", "a.css"])

        assert index.get_references_for_path("/style.css") == {}


class TestGlobLookup:
    """Test glob resolution and prefix pruning."""

    def test_static_glob_is_a_path_lookup(self, index):
        assert list(index.get_references_for_glob("/css/a.css")) == ["/css/a.css"]

    def test_glob_matches_direct_children(self, index):
        result = index.get_references_for_glob("/css/*.css")

        assert list(result) == ["/css/a.css", "/css/b.css"]

    def test_double_star_matches_whole_subtree(self, index):
        result = index.get_references_for_glob("/css/**/*.css")

        assert list(result) == ["/css/a.css", "/css/b.css", "/css/sub/c.css"]

    def test_stop_on_first(self, index):
        result = index.get_references_for_glob("/css/**/*.css", STOP_ON_FIRST)

        assert list(result) == ["/css/a.css"]

    def test_missing_files_are_skipped(self, index, files):
        (files / "b.css").unlink()

        result = index.get_references_for_glob("/css/*.css")

        assert list(result) == ["/css/a.css"]

    def test_scan_stops_after_prefix_run(self, index):
        """
        Given: A regex that matches every path
        When: Scanning with the prefix "/css/"
        Then: Only paths inside the prefix run are visited
        """
        result = index.get_references_for_regex("/css/", re.compile(".*"))

        assert list(result) == ["/css/a.css", "/css/b.css", "/css/sub", "/css/sub/c.css"]

    def test_scan_does_not_visit_keys_after_prefix_run(self, index):
        """
        Given: Keys "/js" and "/js/app.js" sorted after the "/css/" run
        When: Scanning with the prefix "/css/"
        Then: The scan ends at "/js" and never reads "/js/app.js"
        """
        visited = []

        class RecordingKeys(list):
            def __getitem__(self, i):
                item = super().__getitem__(i)
                visited.append(item)
                return item

        index._keys = RecordingKeys(index._keys)

        result = index.get_references_for_regex("/css/", re.compile(".*"))

        assert list(result) == ["/css/a.css", "/css/b.css", "/css/sub", "/css/sub/c.css"]
        assert "/js" in visited
        assert "/js/app.js" not in visited

    def test_scan_with_unknown_prefix_is_empty(self, index):
        assert index.get_references_for_regex("/img/", re.compile(".*")) == {}

    def test_directory_listing_returns_direct_children(self, index):
        result = index.get_references_in_directory("/css")

        assert list(result) == ["/css/a.css", "/css/b.css", "/css/sub"]

    def test_root_listing(self, index):
        result = index.get_references_in_directory("/")

        assert list(result) == ["/css", "/css-extra", "/js"]


class TestRemoval:
    """Test subtree removal."""

    def test_remove_deletes_entry_and_descendants(self, index):
        removed = index.remove_references("/css")

        assert removed == 5
        assert index.keys() == ["/", "/css-extra", "/js", "/js/app.js"]

    def test_remove_leaves_siblings_sharing_the_prefix(self, index):
        index.remove_references("/css")

        assert "/css-extra" in index

    def test_remove_by_glob(self, index):
        removed = index.remove_references("/css/*.css")

        assert removed == 2
        assert "/css/sub/c.css" in index

    def test_remove_deletes_entries_with_missing_files(self, index, files):
        (files / "a.css").unlink()

        assert index.remove_references("/css/a.css") == 1
        assert "/css/a.css" not in index

    def test_remove_unknown_path_removes_nothing(self, index):
        assert index.remove_references("/nope") == 0


class TestRoundTrip:
    """Test exporting and reloading the mapping."""

    def test_to_dict_is_in_key_order(self, index):
        data = index.to_dict()

        assert list(data) == sorted(data)

    def test_reload_answers_queries_identically(self, index, files):
        index.insert("/style.css", ["theme.css", "a.css"])
        reloaded = ReferenceIndex(str(files), index.to_dict())

        for glob in ["/css/*.css", "/css/**/*", "/style.css", "/js/app.js", "/*"]:
            assert reloaded.get_references_for_glob(glob) == index.get_references_for_glob(glob)

    def test_exported_override_stack_is_a_copy(self, index):
        index.insert("/style.css", ["theme.css"])

        index.to_dict()["/style.css"].append("a.css")

        assert index.raw("/style.css") == ["theme.css"]
