"""A read-only repository exposing a directory on disk."""

import os
from typing import List

from vresource import globs
from vresource.exceptions import InvalidPathError, NoDirectoryError, ResourceNotFoundError
from vresource.paths import assert_path, canonicalize, join
from vresource.repository.base import ResourceRepository
from vresource.resources import DirectoryResource, FileResource, Resource, ResourceCollection


class FilesystemRepository(ResourceRepository):
    """Maps repository paths onto a base directory.

    "/css/style.css" is the file "<base_directory>/css/style.css". Nothing
    is cached, every call reads from the disk.

    Attributes:
        base_directory: Absolute path of the exposed directory
    """

    def __init__(self, base_directory: str):
        """Initialize the repository.

        Raises:
            InvalidPathError: If the base directory does not exist or is
                not a directory
        """
        if not os.path.isdir(base_directory):
            raise InvalidPathError(f'The directory "{base_directory}" does not exist.')

        self.base_directory = canonicalize(os.path.abspath(base_directory))

    def get(self, path: str) -> Resource:
        assert_path(path)
        path = canonicalize(path)

        filesystem_path = self._filesystem_path(path)
        if not os.path.exists(filesystem_path):
            raise ResourceNotFoundError.for_path(path)

        return self._create_resource(filesystem_path, path)

    def find(self, query: str, language: str = globs.GLOB_LANGUAGE) -> ResourceCollection:
        globs.assert_glob(query)
        globs.assert_language(language)

        return ResourceCollection(
            self._create_resource(self._filesystem_path(path), path)
            for path in self._match(canonicalize(query))
        )

    def contains(self, query: str, language: str = globs.GLOB_LANGUAGE) -> bool:
        globs.assert_glob(query)
        globs.assert_language(language)

        return bool(self._match(canonicalize(query)))

    def has_children(self, path: str) -> bool:
        directory = self._directory(path)
        if directory is None:
            return False

        with os.scandir(directory) as entries:
            return any(True for _ in entries)

    def list_children(self, path: str) -> ResourceCollection:
        directory = self._directory(path)
        if directory is None:
            raise NoDirectoryError(f'The resource "{path}" is not a directory.')

        path = canonicalize(path)
        return ResourceCollection(
            self._create_resource(os.path.join(directory, name), join(path, name))
            for name in sorted(os.listdir(directory))
        )

    def _directory(self, path: str):
        """Return the disk directory of a path, or None for files."""
        assert_path(path)
        filesystem_path = self._filesystem_path(canonicalize(path))

        if not os.path.exists(filesystem_path):
            raise ResourceNotFoundError.for_path(path)
        if not os.path.isdir(filesystem_path):
            return None
        return filesystem_path

    def _match(self, glob: str) -> List[str]:
        if not globs.is_dynamic(glob):
            path = globs.unescape(glob)
            return [path] if os.path.exists(self._filesystem_path(path)) else []

        regex = globs.compile_glob(glob)

        # Only walk the directory the static prefix points into
        prefix = globs.get_static_prefix(glob)
        start = canonicalize(prefix[:prefix.rfind("/") + 1] or "/")
        start_directory = self._filesystem_path(start)

        if not os.path.isdir(start_directory):
            return []

        matches = []
        if regex.match(start):
            matches.append(start)

        for directory, subdirectories, files in os.walk(start_directory):
            subdirectories.sort()
            relative = os.path.relpath(directory, self.base_directory)
            repository_directory = "/" if relative == "." else canonicalize("/" + relative)
            for name in sorted(subdirectories + files):
                path = join(repository_directory, name)
                if regex.match(path):
                    matches.append(path)

        return sorted(matches)

    def _filesystem_path(self, path: str) -> str:
        if path == "/":
            return self.base_directory
        return self.base_directory + path

    def _create_resource(self, filesystem_path: str, path: str) -> Resource:
        if os.path.isdir(filesystem_path):
            resource: Resource = DirectoryResource(filesystem_path, path)
        else:
            resource = FileResource(filesystem_path, path)

        resource.attach_to(self, path)
        return resource
