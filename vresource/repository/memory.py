"""A repository keeping resource objects in memory."""

import copy
import logging
from typing import Any, Dict, List, Union

from vresource import globs
from vresource.exceptions import (
    ResourceNotFoundError,
    UnsupportedOperationError,
    UnsupportedResourceError,
)
from vresource.paths import assert_path, canonicalize, get_directory, join
from vresource.repository.base import EditableRepository
from vresource.resources import (
    DirectoryResource,
    GenericResource,
    Resource,
    ResourceCollection,
)

logger = logging.getLogger(__name__)


class InMemoryRepository(EditableRepository):
    """Stores copies of added resources by path.

    Unlike the JSON repositories, lookups test every stored path against
    the query. This is fine for the small repositories it is meant for.

    Usage:
        >>> repo = InMemoryRepository()
        >>> repo.add("/config", GenericResource())
        >>> repo.add("/config/app.yml", FileResource("/etc/app.yml"))
        >>> repo.list_children("/config").get_paths()
        ['/config/app.yml']
    """

    def __init__(self):
        self._resources: Dict[str, Resource] = {}
        self.clear()

    def get(self, path: str) -> Resource:
        assert_path(path)
        path = canonicalize(path)

        if path not in self._resources:
            raise ResourceNotFoundError.for_path(path)

        return self._resources[path]

    def find(self, query: str, language: str = globs.GLOB_LANGUAGE) -> ResourceCollection:
        globs.assert_glob(query)
        globs.assert_language(language)

        return ResourceCollection(
            self._resources[path] for path in self._match(canonicalize(query))
        )

    def contains(self, query: str, language: str = globs.GLOB_LANGUAGE) -> bool:
        globs.assert_glob(query)
        globs.assert_language(language)

        return bool(self._match(canonicalize(query)))

    def has_children(self, path: str) -> bool:
        return bool(self._children_of(path))

    def list_children(self, path: str) -> ResourceCollection:
        return ResourceCollection(self._resources[child] for child in self._children_of(path))

    def add(self, path: str, resource: Union[Resource, ResourceCollection]) -> None:
        assert_path(path)
        path = canonicalize(path)

        for member in resource if isinstance(resource, ResourceCollection) else [resource]:
            self._check_resource(member)

        if isinstance(resource, ResourceCollection):
            self._ensure_directory_exists(path)
            for child in resource:
                self._add_resource(join(path, child.name), child)
        else:
            self._ensure_directory_exists(get_directory(path))
            self._add_resource(path, resource)

    def remove(self, query: str, language: str = globs.GLOB_LANGUAGE) -> int:
        globs.assert_glob(query)
        globs.assert_language(language)

        glob = canonicalize(query)
        if glob == "/":
            raise UnsupportedOperationError("The root directory cannot be removed.")

        removed = self._match(glob + "{,/**/*}")
        for path in removed:
            del self._resources[path]

        logger.debug(f"Removed {len(removed)} resources matching {glob}")
        return len(removed)

    def clear(self) -> int:
        removed = max(len(self._resources) - 1, 0)

        root = GenericResource("/")
        root.attach_to(self)
        self._resources = {"/": root}

        return removed

    def _match(self, glob: str) -> List[str]:
        if not globs.is_dynamic(glob):
            path = globs.unescape(glob)
            return [path] if path in self._resources else []

        regex = globs.compile_glob(glob)
        return [path for path in sorted(self._resources) if regex.match(path)]

    def _children_of(self, path: str) -> List[str]:
        assert_path(path)
        path = canonicalize(path)

        if path not in self._resources:
            raise ResourceNotFoundError.for_path(path)

        return [
            child for child in sorted(self._resources)
            if child != "/" and get_directory(child) == path
        ]

    def _ensure_directory_exists(self, path: str) -> None:
        if path in self._resources:
            return

        self._ensure_directory_exists(get_directory(path))

        directory = GenericResource(path)
        directory.attach_to(self)
        self._resources[path] = directory

    def _check_resource(self, resource: Any) -> None:
        if not isinstance(resource, Resource):
            raise UnsupportedResourceError(
                f"Expected a Resource. Got: {type(resource).__name__}"
            )

    def _add_resource(self, path: str, resource: Resource) -> None:

        # Directories from disk bring their whole subtree
        if isinstance(resource, DirectoryResource) and not resource.is_attached():
            children = resource.list_children()
        else:
            children = ResourceCollection()

        stored = copy.copy(resource)
        stored.attach_to(self, path)
        self._resources[path] = stored

        for child in children:
            self._add_resource(join(path, child.name), child)
