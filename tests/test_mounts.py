"""Tests for the mount table of composite repositories."""

from unittest.mock import MagicMock

import pytest

from vresource import (
    InMemoryRepository,
    InvalidMountArgumentError,
    MountPoint,
    MountTable,
    RepositoryFactoryError,
)


@pytest.fixture
def table():
    return MountTable()


class TestSplit:
    """Test splitting paths at the most specific mount point."""

    def test_split_below_mount_point(self, table):
        table.mount("/app", InMemoryRepository())

        assert table.split("/app/css/style.css") == ("/app", "/css/style.css")

    def test_split_mount_point_itself(self, table):
        table.mount("/app", InMemoryRepository())

        assert table.split("/app") == ("/app", "/")
        assert table.split("/app/") == ("/app", "/")

    def test_split_root_mount_keeps_full_path(self, table):
        table.mount("/", InMemoryRepository())

        assert table.split("/css/style.css") == ("/", "/css/style.css")
        assert table.split("/") == ("/", "/")

    def test_split_prefers_longest_mount_point(self, table):
        table.mount("/", InMemoryRepository())
        table.mount("/app", InMemoryRepository())
        table.mount("/app/vendor", InMemoryRepository())

        assert table.split("/app/vendor/lib.js") == ("/app/vendor", "/lib.js")
        assert table.split("/app/main.js") == ("/app", "/main.js")
        assert table.split("/other") == ("/", "/other")

    def test_split_respects_segment_boundaries(self, table):
        """
        Given: A repository mounted at "/app"
        When: Splitting a path that only shares a string prefix
        Then: The mount point does not match
        """
        table.mount("/app", InMemoryRepository())

        assert table.split("/application/x") == (None, None)

    def test_split_without_match(self, table):
        assert table.split("/anything") == (None, None)

    def test_split_canonicalizes_path(self, table):
        table.mount("/app", InMemoryRepository())

        assert table.split("/app/css/../js/./app.js") == ("/app", "/js/app.js")


class TestMountTable:
    """Test mounting, ordering and factory resolution."""

    def test_paths_are_most_specific_first(self, table):
        for path in ["/", "/b", "/a", "/a/b"]:
            table.mount(path, InMemoryRepository())

        assert table.paths() == ["/b", "/a/b", "/a", "/"]
        assert list(table) == table.paths()
        assert len(table) == 4

    def test_remount_replaces_repository(self, table):
        first = InMemoryRepository()
        second = InMemoryRepository()

        table.mount("/app", first)
        table.mount("/app/", second)

        assert len(table) == 1
        assert table.resolve("/app") is second

    def test_contains(self, table):
        table.mount("/app", InMemoryRepository())

        assert "/app" in table
        assert "/app/" in table
        assert "/other" not in table
        assert 123 not in table

    def test_unmount_unknown_path_leaves_table_unchanged(self, table):
        table.mount("/app", InMemoryRepository())

        table.unmount("/nothing")

        assert table.paths() == ["/app"]

    def test_unmount(self, table):
        table.mount("/app", InMemoryRepository())
        table.mount("/lib", InMemoryRepository())

        table.unmount("/app")

        assert table.paths() == ["/lib"]
        assert table.split("/app/x") == (None, None)

    def test_mount_rejects_non_callables(self, table):
        with pytest.raises(InvalidMountArgumentError):
            table.mount("/app", "repository")

    def test_mount_point_records_factory(self, table):
        factory = MagicMock(return_value=InMemoryRepository())

        table.mount("/app", factory)
        mount_point = table.get_mount_point("/app")

        assert isinstance(mount_point, MountPoint)
        assert not mount_point.is_resolved
        assert mount_point.factory is factory

    def test_resolve_memoizes_factory_result(self, table):
        repository = InMemoryRepository()
        factory = MagicMock(return_value=repository)
        table.mount("/app", factory)

        assert table.resolve("/app") is repository
        assert table.resolve("/app") is repository

        factory.assert_called_once_with("/app")
        mount_point = table.get_mount_point("/app")
        assert mount_point.is_resolved
        assert mount_point.factory is None

    def test_resolve_supports_zero_argument_factories(self, table):
        repository = InMemoryRepository()
        table.mount("/app", lambda: repository)

        assert table.resolve("/app") is repository

    def test_resolve_passes_mount_point(self, table):
        seen = []

        def factory(mount_point):
            seen.append(mount_point)
            return InMemoryRepository()

        table.mount("/app/", factory)
        table.resolve("/app")

        assert seen == ["/app"]

    def test_resolve_rejects_invalid_factory_result(self, table):
        table.mount("/app", lambda: None)

        with pytest.raises(RepositoryFactoryError):
            table.resolve("/app")

        assert not table.get_mount_point("/app").is_resolved

    def test_resolve_unknown_mount_point(self, table):
        with pytest.raises(KeyError):
            table.resolve("/app")
