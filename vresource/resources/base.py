"""Base classes for repository resources.

A resource is an entry in a repository. It knows two paths:

    - ``repository_path``: where the resource lives inside the repository
      that owns it
    - ``path``: where the caller sees it. This differs from the repository
      path for references, e.g. a resource "/css/style.css" of a
      repository mounted at "/app" is seen as "/app/css/style.css".

Resources are plain value objects. Everything that requires a lookup
(children, link targets) is delegated to the attached repository.
"""

import copy
from abc import ABC
from enum import Enum
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

from vresource.exceptions import UnsupportedOperationError
from vresource.paths import assert_path, canonicalize, get_filename, join

if TYPE_CHECKING:
    from vresource.repository.base import ResourceRepository
    from vresource.resources.collection import ResourceCollection


class ResourceType(Enum):
    """Type of a resource."""
    GENERIC = "generic"
    FILE = "file"
    DIRECTORY = "directory"
    LINK = "link"


class Resource(ABC):
    """Base class for all resources.

    Attributes:
        path: Path under which the resource is seen (None if unknown)
        repository_path: Path of the resource inside its repository
        repository: Repository the resource is attached to (None if detached)
        resource_type: Type of resource
    """

    resource_type = ResourceType.GENERIC

    def __init__(self, path: Optional[str] = None):
        """Initialize a resource.

        Args:
            path: Repository path of the resource, if known
        """
        if path is not None:
            assert_path(path)
            path = canonicalize(path)

        self._path = path
        self._repository_path = path
        self._repository: Optional['ResourceRepository'] = None

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def repository_path(self) -> Optional[str]:
        return self._repository_path

    @property
    def repository(self) -> Optional['ResourceRepository']:
        return self._repository

    @property
    def name(self) -> Optional[str]:
        """Basename of the repository path ("" for the root)."""
        path = self._repository_path or self._path
        if path is None:
            return None
        return get_filename(path)

    def is_attached(self) -> bool:
        return self._repository is not None

    def attach_to(self, repository: 'ResourceRepository', path: Optional[str] = None) -> None:
        """Attach the resource to a repository.

        Args:
            repository: Owning repository
            path: New repository path. Keeps the current path if omitted.
        """
        self._repository = repository
        if path is not None:
            self._path = path
            self._repository_path = path

    def detach(self) -> None:
        self._repository = None

    def create_reference(self, path: str) -> 'Resource':
        """Create a reference to this resource under a different path.

        The reference keeps the repository path and the repository of
        the original. The original resource is not modified.

        Args:
            path: Path under which the reference is seen

        Returns:
            New resource instance
        """
        reference = copy.copy(self)
        reference._path = path
        return reference

    def is_reference(self) -> bool:
        return self._path != self._repository_path

    def get_child(self, relative_path: str) -> 'Resource':
        """Get a child resource through the attached repository.

        Raises:
            UnsupportedOperationError: If the resource is detached
            ResourceNotFoundError: If the child does not exist
        """
        repository = self._require_repository()
        child = repository.get(join(self._repository_path, relative_path))
        if self.is_reference():
            return child.create_reference(join(self._path, relative_path))
        return child

    def has_child(self, relative_path: str) -> bool:
        repository = self._require_repository()
        return repository.contains(join(self._repository_path, relative_path))

    def has_children(self) -> bool:
        return self._require_repository().has_children(self._repository_path)

    def list_children(self) -> 'ResourceCollection':
        """List the children of this resource.

        For references, the children are returned as references below
        the reference path.
        """
        repository = self._require_repository()
        children = repository.list_children(self._repository_path)

        if not self.is_reference():
            return children

        return children.__class__(
            child.create_reference(join(self._path, child.name)) for child in children
        )

    def get_info(self) -> Dict[str, Any]:
        """Get metadata about this resource for display.

        Returns:
            Dict with keys like: type, name, path, repository_path
        """
        return {
            "type": self.resource_type.value,
            "name": self.name,
            "path": self._path,
            "repository_path": self._repository_path,
        }

    def _require_repository(self) -> 'ResourceRepository':
        if self._repository is None:
            raise UnsupportedOperationError(
                f'The resource "{self._path}" is not attached to a repository.'
            )
        return self._repository

    def _payload(self) -> Tuple:
        """Data that distinguishes resources of the same class."""
        return ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource) or other.__class__ is not self.__class__:
            return NotImplemented
        return (
            self._path == other._path
            and self._repository_path == other._repository_path
            and self._repository is other._repository
            and self._payload() == other._payload()
        )

    __hash__ = None

    def __repr__(self) -> str:
        if self.is_reference():
            return (
                f"{self.__class__.__name__}(path='{self._path}', "
                f"repository_path='{self._repository_path}')"
            )
        return f"{self.__class__.__name__}(path='{self._path}')"


class GenericResource(Resource):
    """A resource without content.

    Used for virtual directories, e.g. intermediate paths of a repository
    or the root of a composite repository.
    """
    pass
