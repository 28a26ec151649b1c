"""Resource repositories persisted as a JSON path mapping.

Resources are added with :meth:`add`:

    ```python
    from vresource import OptimizedJsonRepository, DirectoryResource

    repo = OptimizedJsonRepository("/path/to/project/resources.json")
    repo.add("/css", DirectoryResource("/path/to/project/res/css"))

    repo.get("/css/style.css")
    repo.find("/css/*.css")
    ```

The JSON file holds one object mapping repository paths to references
(see :mod:`vresource.index`). It is rewritten after every modification.
Filesystem references below the base directory are stored relative to
it, so the file can be moved together with the project.
"""

import json
import logging
import os
from abc import abstractmethod
from typing import Any, Dict, Optional, Union

from vresource import globs
from vresource.exceptions import (
    RepositoryError,
    ResourceNotFoundError,
    UnsupportedOperationError,
    UnsupportedResourceError,
)
from vresource.index import (
    LINK_PREFIX,
    STOP_ON_FIRST,
    Reference,
    ReferenceIndex,
    is_link_reference,
)
from vresource.paths import (
    assert_path,
    canonicalize,
    get_directory,
    is_base_path,
    join,
    make_relative,
)
from vresource.repository.base import EditableRepository
from vresource.resources import (
    DirectoryResource,
    FileResource,
    FilesystemResource,
    GenericResource,
    LinkResource,
    Resource,
    ResourceCollection,
)

logger = logging.getLogger(__name__)


class AbstractJsonRepository(EditableRepository):
    """Base class for repositories backed by a JSON path mapping.

    Subclasses decide how references are stored and looked up. This class
    takes care of validation, persistence and turning references into
    resources.

    Attributes:
        path: JSON file the mapping is persisted to (None: not persisted)
        base_directory: Directory relative references are resolved against
    """

    def __init__(self, path: Optional[str] = None, base_directory: Optional[str] = None):
        """Initialize the repository.

        The JSON file is read lazily on first access.

        Args:
            path: Path of the JSON file. Does not need to exist yet.
            base_directory: Base directory for relative references.
                Defaults to the directory of the JSON file, or the current
                working directory if the repository is not persisted.
        """
        self.path = os.path.abspath(path) if path else None

        if base_directory is None:
            base_directory = os.path.dirname(self.path) if self.path else os.getcwd()

        self.base_directory = canonicalize(os.path.abspath(base_directory))
        self._index: Optional[ReferenceIndex] = None

    @property
    def index(self) -> ReferenceIndex:
        if self._index is None:
            self._index = self._load()
        return self._index

    def get(self, path: str) -> Resource:
        assert_path(path)
        path = canonicalize(path)

        references = self._get_references_for_path(path)

        if path not in references:
            raise ResourceNotFoundError.for_path(path)

        return self._create_resource(path, references[path])

    def find(self, query: str, language: str = globs.GLOB_LANGUAGE) -> ResourceCollection:
        globs.assert_glob(query)
        globs.assert_language(language)

        references = self._get_references_for_glob(canonicalize(query))

        return self._create_resources(references)

    def contains(self, query: str, language: str = globs.GLOB_LANGUAGE) -> bool:
        globs.assert_glob(query)
        globs.assert_language(language)

        references = self._get_references_for_glob(canonicalize(query), STOP_ON_FIRST)

        return bool(references)

    def has_children(self, path: str) -> bool:
        assert_path(path)
        path = canonicalize(path)

        if not self._get_references_for_path(path):
            raise ResourceNotFoundError.for_path(path)

        return bool(self._get_references_in_directory(path, STOP_ON_FIRST))

    def list_children(self, path: str) -> ResourceCollection:
        assert_path(path)
        path = canonicalize(path)

        if not self._get_references_for_path(path):
            raise ResourceNotFoundError.for_path(path)

        return self._create_resources(self._get_references_in_directory(path))

    def add(self, path: str, resource: Union[Resource, ResourceCollection]) -> None:
        """Add a resource or a collection of resources.

        Members of a collection are added below ``path`` using their names.
        Missing parent directories are created as virtual directories.

        Raises:
            InvalidPathError: If the path is invalid
            UnsupportedResourceError: If a resource is neither a filesystem
                resource nor a link
        """
        assert_path(path)
        path = canonicalize(path)

        # Reject the whole request before any parent directory is registered
        for member in resource if isinstance(resource, ResourceCollection) else [resource]:
            self._check_resource(member)

        if isinstance(resource, ResourceCollection):
            self._ensure_directory_exists(path)
            for child in resource:
                self._add_resource(join(path, child.name), child)
        else:
            self._ensure_directory_exists(get_directory(path))
            self._add_resource(path, resource)

        self.flush()

    def remove(self, query: str, language: str = globs.GLOB_LANGUAGE) -> int:
        globs.assert_glob(query)
        globs.assert_language(language)

        glob = canonicalize(query)
        if glob == "/":
            raise UnsupportedOperationError("The root directory cannot be removed.")

        removed = self._remove_references(glob)
        self.flush()

        return removed

    def clear(self) -> int:
        removed = len(self.index) - 1 if "/" in self.index else len(self.index)

        self.index.clear()
        self.index.insert("/", None)
        self.flush()

        logger.debug(f"Cleared {removed} entries")
        return removed

    def flush(self) -> None:
        """Write the mapping to the JSON file."""
        if self.path is None:
            return

        os.makedirs(os.path.dirname(self.path), exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.index.to_dict(), f, indent=2)
            f.write("\n")

        logger.debug(f"Wrote {len(self.index)} entries to {self.path}")

    def _load(self) -> ReferenceIndex:
        data: Dict[str, Reference] = {}

        if self.path is not None and os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise RepositoryError(f"Cannot read {self.path}: {e}") from e

            if not isinstance(data, dict):
                raise RepositoryError(f"{self.path} must contain a JSON object")

            logger.debug(f"Loaded {len(data)} entries from {self.path}")

        try:
            index = ReferenceIndex(self.base_directory, data)
        except ValueError as e:
            raise RepositoryError(f"Invalid mapping in {self.path}: {e}") from e

        if "/" not in index:
            index.insert("/", None)

        return index

    def _ensure_directory_exists(self, path: str) -> None:
        if path in self.index:
            return

        # Register missing parents first
        if path != "/":
            self._ensure_directory_exists(get_directory(path))

        self._insert_reference(path, None)

    def _check_resource(self, resource: Any) -> None:
        if not isinstance(resource, (LinkResource, FilesystemResource)):
            raise UnsupportedResourceError(
                f"The passed resource must be a FilesystemResource or a "
                f"LinkResource. Got: {type(resource).__name__}"
            )

    def _add_resource(self, path: str, resource: Resource) -> None:
        self._check_resource(resource)

        if isinstance(resource, LinkResource):
            self._insert_reference(path, LINK_PREFIX + resource.target_path)
        else:
            self._add_filesystem_resource(path, resource)

    def _add_filesystem_resource(self, path: str, resource: FilesystemResource) -> None:
        self._insert_reference(path, self._to_reference(resource.filesystem_path))

    def _to_reference(self, filesystem_path: str) -> str:
        if is_base_path(self.base_directory, filesystem_path):
            return make_relative(filesystem_path, self.base_directory)
        return filesystem_path

    def _create_resource(self, path: str, reference: Optional[str]) -> Resource:
        if reference is None:
            resource: Resource = GenericResource(path)
        elif is_link_reference(reference):
            resource = LinkResource(reference[len(LINK_PREFIX):], path)
        elif os.path.isdir(reference):
            resource = DirectoryResource(reference, path)
        else:
            resource = FileResource(reference, path)

        resource.attach_to(self, path)
        return resource

    def _create_resources(self, references: Dict[str, Optional[str]]) -> ResourceCollection:
        return ResourceCollection(
            self._create_resource(path, reference) for path, reference in references.items()
        )

    @abstractmethod
    def _insert_reference(self, path: str, reference: Reference) -> None:
        pass

    @abstractmethod
    def _remove_references(self, glob: str) -> int:
        pass

    @abstractmethod
    def _get_references_for_path(self, path: str) -> Dict[str, Optional[str]]:
        pass

    @abstractmethod
    def _get_references_for_glob(self, glob: str, flags: int = 0) -> Dict[str, Optional[str]]:
        pass

    @abstractmethod
    def _get_references_in_directory(self, path: str, flags: int = 0) -> Dict[str, Optional[str]]:
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(path='{self.path}')"


class OptimizedJsonRepository(AbstractJsonRepository):
    """JSON repository that indexes every descendant of added directories.

    Adding a directory walks its whole subtree once and stores one entry
    per file and directory. Lookups then never touch the filesystem except
    to check that a referenced file still exists.
    """

    def _insert_reference(self, path: str, reference: Reference) -> None:
        self.index.insert(path, reference)

    def _remove_references(self, glob: str) -> int:
        return self.index.remove_references(glob)

    def _get_references_for_path(self, path: str) -> Dict[str, Optional[str]]:
        return self.index.get_references_for_path(path)

    def _get_references_for_glob(self, glob: str, flags: int = 0) -> Dict[str, Optional[str]]:
        return self.index.get_references_for_glob(glob, flags)

    def _get_references_in_directory(self, path: str, flags: int = 0) -> Dict[str, Optional[str]]:
        return self.index.get_references_in_directory(path, flags)

    def _add_filesystem_resource(self, path: str, resource: FilesystemResource) -> None:
        # Read the children before the directory is registered
        if isinstance(resource, DirectoryResource):
            children = resource.list_children()
        else:
            children = ResourceCollection()

        super()._add_filesystem_resource(path, resource)

        for child in children:
            self._add_resource(join(path, child.name), child)

        if children:
            logger.debug(f"Registered {len(children)} children of {path}")
