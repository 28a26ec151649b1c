"""Repository interfaces.

A resource repository works like a read-only filesystem. Resources are
addressed by absolute paths and can be searched with glob selectors:

    ```python
    resource = repo.get("/css/style.css")
    stylesheets = repo.find("/css/*.css")
    ```

Editable repositories additionally support adding and removing resources.
"""

from abc import ABC, abstractmethod
from typing import Any

from vresource.globs import GLOB_LANGUAGE
from vresource.resources import Resource, ResourceCollection


class ResourceRepository(ABC):
    """Read access to a set of resources."""

    @abstractmethod
    def get(self, path: str) -> Resource:
        """Get the resource at a path.

        Args:
            path: Absolute path. "." and ".." segments are supported.

        Returns:
            The resource

        Raises:
            ResourceNotFoundError: If the resource does not exist
            InvalidPathError: If the path is invalid
        """
        pass

    @abstractmethod
    def find(self, query: str, language: str = GLOB_LANGUAGE) -> ResourceCollection:
        """Find the resources matching a query.

        Args:
            query: Path or glob selector starting with "/"
            language: Query language. Only "glob" is supported.

        Returns:
            Matching resources (possibly empty)
        """
        pass

    @abstractmethod
    def contains(self, query: str, language: str = GLOB_LANGUAGE) -> bool:
        """Check whether any resource matches a query."""
        pass

    @abstractmethod
    def has_children(self, path: str) -> bool:
        """Check whether the resource at a path has children.

        Raises:
            ResourceNotFoundError: If the resource does not exist
        """
        pass

    @abstractmethod
    def list_children(self, path: str) -> ResourceCollection:
        """List the direct children of the resource at a path.

        Raises:
            ResourceNotFoundError: If the resource does not exist
        """
        pass


class EditableRepository(ResourceRepository):
    """A repository that supports adding and removing resources."""

    @abstractmethod
    def add(self, path: str, resource: Any) -> None:
        """Add a resource or a collection of resources at a path."""
        pass

    @abstractmethod
    def remove(self, query: str, language: str = GLOB_LANGUAGE) -> int:
        """Remove all resources matching a query and their descendants.

        Returns:
            Number of removed resources
        """
        pass

    @abstractmethod
    def clear(self) -> int:
        """Remove all resources except the root.

        Returns:
            Number of removed resources
        """
        pass


def is_repository(obj: Any) -> bool:
    """Check whether an object fulfills the repository contract."""
    return isinstance(obj, ResourceRepository)
