"""
Tests for InMemoryRepository and FilesystemRepository.

Both implement the same read interface as the JSON repository, so the
tests mirror the lookups of test_json_repository.py.
"""

import pytest

from vresource import (
    DirectoryResource,
    FileResource,
    FilesystemRepository,
    GenericResource,
    InMemoryRepository,
    InvalidPathError,
    LinkResource,
    NoDirectoryError,
    ResourceCollection,
    ResourceNotFoundError,
    UnsupportedLanguageError,
    UnsupportedOperationError,
    UnsupportedResourceError,
)


@pytest.fixture
def memory(project_dir):
    repo = InMemoryRepository()
    repo.add("/css", DirectoryResource(str(project_dir / "res" / "css")))
    return repo


@pytest.fixture
def filesystem(project_dir):
    return FilesystemRepository(str(project_dir / "res"))


class TestInMemoryRepository:
    """Test the in-memory repository."""

    def test_new_repository_contains_root(self):
        repo = InMemoryRepository()

        root = repo.get("/")

        assert isinstance(root, GenericResource)
        assert root.repository is repo
        assert not repo.has_children("/")

    def test_add_directory_brings_subtree(self, memory):
        assert memory.find("/css/**").get_paths() == [
            "/css/a.css",
            "/css/b.css",
            "/css/sub",
            "/css/sub/c.css",
        ]

    def test_add_creates_parent_directories(self, memory, project_dir):
        memory.add("/a/b/app.js", FileResource(str(project_dir / "res" / "js" / "app.js")))

        assert isinstance(memory.get("/a"), GenericResource)
        assert memory.list_children("/a").get_paths() == ["/a/b"]
        assert memory.get("/a/b/app.js").read() == "console.log('app');\n"

    def test_added_resource_is_copied(self, project_dir):
        repo = InMemoryRepository()
        resource = FileResource(str(project_dir / "res" / "js" / "app.js"))

        repo.add("/app.js", resource)

        assert resource.path is None
        assert not resource.is_attached()
        stored = repo.get("/app.js")
        assert stored.path == "/app.js"
        assert stored.repository is repo

    def test_add_collection(self, project_dir):
        repo = InMemoryRepository()
        css = project_dir / "res" / "css"

        repo.add("/styles", ResourceCollection([
            FileResource(str(css / "a.css")),
            FileResource(str(css / "b.css")),
        ]))

        assert repo.list_children("/styles").get_paths() == ["/styles/a.css", "/styles/b.css"]

    def test_add_link(self, memory):
        memory.add("/latest", LinkResource("/css/b.css"))

        link = memory.get("/latest")

        assert link.get_target().read() == "b { color: blue; }\n"

    def test_add_rejects_non_resources(self, memory):
        with pytest.raises(UnsupportedResourceError):
            memory.add("/foo/bar", "foo")

        assert not memory.contains("/foo")

    def test_get_missing_path(self, memory):
        with pytest.raises(ResourceNotFoundError):
            memory.get("/css/missing.css")

    def test_find_and_contains(self, memory):
        assert memory.find("/css/*.css").get_paths() == ["/css/a.css", "/css/b.css"]
        assert memory.contains("/css/sub/c.css")
        assert memory.contains("/css/{x,sub}")
        assert not memory.contains("/js/*")

    def test_find_rejects_unknown_language(self, memory):
        with pytest.raises(UnsupportedLanguageError):
            memory.find("/css/*", "xpath")

    def test_children(self, memory):
        assert memory.has_children("/css")
        assert not memory.has_children("/css/a.css")
        assert memory.list_children("/css").get_paths() == [
            "/css/a.css",
            "/css/b.css",
            "/css/sub",
        ]

    def test_children_of_missing_path(self, memory):
        with pytest.raises(ResourceNotFoundError):
            memory.list_children("/js")
        with pytest.raises(ResourceNotFoundError):
            memory.has_children("/js")

    def test_stored_directory_lists_through_repository(self, memory):
        memory.remove("/css/sub")

        assert memory.get("/css").list_children().get_paths() == ["/css/a.css", "/css/b.css"]

    def test_remove_subtree(self, memory):
        assert memory.remove("/css") == 5
        assert memory.list_children("/").is_empty()

    def test_remove_glob(self, memory):
        assert memory.remove("/css/*.css") == 2
        assert memory.contains("/css/sub/c.css")

    def test_remove_root_is_not_allowed(self, memory):
        with pytest.raises(UnsupportedOperationError):
            memory.remove("/")

    def test_clear(self, memory):
        assert memory.clear() == 5
        assert memory.list_children("/").is_empty()
        assert memory.get("/").path == "/"


class TestFilesystemRepository:
    """Test the repository exposing a directory on disk."""

    def test_missing_base_directory(self, tmp_path):
        with pytest.raises(InvalidPathError):
            FilesystemRepository(str(tmp_path / "missing"))

    def test_get_file(self, filesystem, project_dir):
        resource = filesystem.get("/css/a.css")

        assert isinstance(resource, FileResource)
        assert resource.path == "/css/a.css"
        assert resource.filesystem_path == str(project_dir / "res" / "css" / "a.css")
        assert resource.repository is filesystem

    def test_get_root(self, filesystem):
        root = filesystem.get("/")

        assert isinstance(root, DirectoryResource)
        assert root.path == "/"

    def test_get_missing(self, filesystem):
        with pytest.raises(ResourceNotFoundError):
            filesystem.get("/css/missing.css")

    def test_find(self, filesystem):
        assert filesystem.find("/css/*.css").get_paths() == ["/css/a.css", "/css/b.css"]
        assert filesystem.find("/**/*.css").get_paths() == [
            "/css/a.css",
            "/css/b.css",
            "/css/sub/c.css",
        ]

    def test_find_static_path(self, filesystem):
        assert filesystem.find("/js/app.js").get_paths() == ["/js/app.js"]
        assert filesystem.find("/js/missing.js").is_empty()

    def test_find_below_missing_directory(self, filesystem):
        assert filesystem.find("/fonts/*").is_empty()

    def test_contains(self, filesystem):
        assert filesystem.contains("/js/*.js")
        assert not filesystem.contains("/js/*.css")

    def test_children(self, filesystem):
        assert filesystem.has_children("/css")
        assert not filesystem.has_children("/css/a.css")
        assert filesystem.list_children("/").get_paths() == ["/css", "/js"]
        assert filesystem.get("/css").list_children().get_paths() == [
            "/css/a.css",
            "/css/b.css",
            "/css/sub",
        ]

    def test_list_children_of_file(self, filesystem):
        with pytest.raises(NoDirectoryError):
            filesystem.list_children("/css/a.css")

    def test_list_children_of_missing_path(self, filesystem):
        with pytest.raises(ResourceNotFoundError):
            filesystem.list_children("/fonts")

    def test_reflects_disk_changes(self, filesystem, project_dir):
        (project_dir / "res" / "js" / "new.js").write_text("")

        assert filesystem.contains("/js/new.js")
