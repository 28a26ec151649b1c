"""A repository combining other repositories.

Repositories are mounted at paths of the composite repository. Requests
below a mount point are routed to the mounted repository:

    ```python
    from vresource import CompositeRepository, InMemoryRepository

    app_repo = InMemoryRepository()
    vendor_repo = InMemoryRepository()

    repo = CompositeRepository()
    repo.mount("/app", app_repo)
    repo.mount("/vendor", vendor_repo)

    repo.get("/app/css/style.css")
    # => app_repo.get("/css/style.css"), seen as "/app/css/style.css"
    ```

Repositories that are not needed in every request can be mounted as
factories. The factory is called with the mount point the first time the
mount point is used:

    ```python
    repo.mount("/vendor", lambda mount_point: build_vendor_repo())
    ```

Paths outside of all mount points behave as if they did not exist.
"""

import logging
from typing import Any, Optional

from vresource import globs
from vresource.exceptions import ResourceNotFoundError
from vresource.mounts import MountTable
from vresource.paths import assert_path, canonicalize, get_directory
from vresource.repository.base import ResourceRepository
from vresource.resources import GenericResource, Resource, ResourceCollection

logger = logging.getLogger(__name__)


class CompositeRepository(ResourceRepository):
    """Routes requests to the most specific mounted repository.

    Resources returned from a mounted repository are references: their
    ``path`` includes the mount point, while ``repository_path`` stays the
    path inside the mounted repository.
    """

    def __init__(self):
        self.mounts = MountTable()

    def mount(self, path: str, repository: Any) -> None:
        """Mount a repository or a callable returning a repository.

        Raises:
            InvalidMountArgumentError: If ``repository`` is neither
            InvalidPathError: If the path is invalid
        """
        self.mounts.mount(path, repository)

    def unmount(self, path: str) -> None:
        """Unmount the repository at a path. Does nothing if none is mounted."""
        self.mounts.unmount(path)

    def get(self, path: str) -> Resource:
        assert_path(path)
        path = canonicalize(path)

        if path == "/":
            root = GenericResource("/")
            root.attach_to(self)
            return root

        mount_point, sub_path = self._split_or_fail(path)
        resource = self.mounts.resolve(mount_point).get(sub_path)

        if mount_point == "/":
            return resource
        return resource.create_reference(path)

    def find(self, query: str, language: str = globs.GLOB_LANGUAGE) -> ResourceCollection:
        mount_point, glob = self.mounts.split(query)

        if mount_point is None:
            return ResourceCollection()

        resources = self.mounts.resolve(mount_point).find(glob, language)
        return self._replace_by_references(resources, mount_point)

    def contains(self, query: str, language: str = globs.GLOB_LANGUAGE) -> bool:
        mount_point, glob = self.mounts.split(query)

        if mount_point is None:
            return False

        return self.mounts.resolve(mount_point).contains(glob, language)

    def has_children(self, path: str) -> bool:
        assert_path(path)
        path = canonicalize(path)

        if path == "/":
            return len(self.mounts) > 0

        mount_point, sub_path = self._split_or_fail(path)
        return self.mounts.resolve(mount_point).has_children(sub_path)

    def list_children(self, path: str) -> ResourceCollection:
        """List the children of a path.

        Mount points directly below ``path`` are listed as references to
        the roots of their repositories, followed by the children that
        the repository mounted at ``path`` reports.
        """
        assert_path(path)
        path = canonicalize(path)

        children = ResourceCollection()

        for mount_point in reversed(self.mounts.paths()):
            if mount_point == path or get_directory(mount_point) != path:
                continue

            root = self.mounts.resolve(mount_point).get("/")
            children.append(root.create_reference(mount_point))

        mount_point, sub_path = self.mounts.split(path)

        if mount_point is None and path == "/":
            return children

        if mount_point is None:
            raise self._not_found(path)

        resources = self.mounts.resolve(mount_point).list_children(sub_path)
        children.extend(self._replace_by_references(resources, mount_point))

        return children

    def _split_or_fail(self, path: str):
        mount_point, sub_path = self.mounts.split(path)

        if mount_point is None:
            raise self._not_found(path)

        return mount_point, sub_path

    def _not_found(self, path: str) -> ResourceNotFoundError:
        return ResourceNotFoundError(
            f'Could not find a matching mount point for the path "{path}".'
        )

    def _replace_by_references(
        self,
        resources: ResourceCollection,
        mount_point: Optional[str],
    ) -> ResourceCollection:
        """Re-path resources loaded from a mount point.

        A resource "/css/style.css" loaded from the mount point "/app"
        becomes a reference with the path "/app/css/style.css".
        """
        if mount_point == "/":
            return ResourceCollection(resources)

        return ResourceCollection(
            resource.create_reference(
                mount_point if resource.path == "/" else mount_point + resource.path
            )
            for resource in resources
        )

    def __repr__(self) -> str:
        return f"CompositeRepository(mounts={self.mounts.paths()})"
