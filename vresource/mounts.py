"""Mount points of a composite repository.

A mount point binds an absolute path either to a repository or to a
factory creating the repository on first use:

    ```python
    table = MountTable()
    table.mount("/app", app_repo)
    table.mount("/vendor", lambda mount_point: load_vendor_repo())

    table.split("/app/css/style.css")   # ("/app", "/css/style.css")
    table.resolve("/vendor")            # calls the factory once
    ```
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from vresource.exceptions import InvalidMountArgumentError, RepositoryFactoryError
from vresource.paths import assert_path, canonicalize, is_base_path
from vresource.repository.base import ResourceRepository, is_repository

logger = logging.getLogger(__name__)

RepositoryFactory = Callable[..., ResourceRepository]


@dataclass
class MountPoint:
    """A path bound to a repository or to a not yet invoked factory."""
    path: str
    repository: Optional[ResourceRepository] = None
    factory: Optional[RepositoryFactory] = None

    @property
    def is_resolved(self) -> bool:
        return self.repository is not None


class MountTable:
    """Mount points ordered from most to least specific.

    Mount points are kept in descending order, so "/app/css" is tested
    before "/app", and "/app" before "/".
    """

    def __init__(self):
        self._mount_points: Dict[str, MountPoint] = {}
        self._order: List[str] = []

    def mount(self, path: str, repository: Any) -> None:
        """Mount a repository or a repository factory.

        Args:
            path: Absolute mount point
            repository: Repository instance, or a callable returning one.
                The callable receives the mount point.

        Raises:
            InvalidMountArgumentError: If ``repository`` is neither
            InvalidPathError: If the path is invalid
        """
        if is_repository(repository):
            mount_point = MountPoint(path, repository=repository)
        elif callable(repository):
            mount_point = MountPoint(path, factory=repository)
        else:
            raise InvalidMountArgumentError(
                "The repository factory should be a callable or a "
                f"ResourceRepository. Got: {type(repository).__name__}"
            )

        assert_path(path)
        path = canonicalize(path)
        mount_point.path = path

        self._mount_points[path] = mount_point
        self._order = sorted(self._mount_points, reverse=True)

        logger.debug(f"Mounted {'factory' if mount_point.factory else repository!r} at {path}")

    def unmount(self, path: str) -> None:
        """Remove a mount point. Unknown mount points are ignored."""
        assert_path(path)
        path = canonicalize(path)

        if self._mount_points.pop(path, None) is not None:
            self._order.remove(path)
            logger.debug(f"Unmounted {path}")

    def split(self, path: str) -> Tuple[Optional[str], Optional[str]]:
        """Split a path into its mount point and the path below it.

        Returns:
            ``(mount_point, sub_path)``, or ``(None, None)`` if no mount
            point matches. The sub path of the root mount point is the
            complete path.
        """
        assert_path(path)
        path = canonicalize(path)

        for mount_point in self._order:
            if is_base_path(mount_point, path):
                if mount_point == "/":
                    return mount_point, path

                return mount_point, path[len(mount_point):] or "/"

        return None, None

    def resolve(self, path: str) -> ResourceRepository:
        """Return the repository of a mount point, creating it if needed.

        A factory is invoked at most once. Its result replaces it.

        Raises:
            KeyError: If nothing is mounted at ``path``
            RepositoryFactoryError: If the factory returns no repository
        """
        mount_point = self._mount_points[path]

        if not mount_point.is_resolved:
            repository = _invoke(mount_point.factory, path)

            if not is_repository(repository):
                raise RepositoryFactoryError(
                    f'The value of type "{type(repository).__name__}" returned by the '
                    f'factory registered for the mount point "{path}" does not '
                    "implement ResourceRepository."
                )

            mount_point.repository = repository
            mount_point.factory = None
            logger.debug(f"Created repository {repository!r} for {path}")

        return mount_point.repository

    def get_mount_point(self, path: str) -> MountPoint:
        return self._mount_points[canonicalize(path)]

    def paths(self) -> List[str]:
        """Mount point paths, most specific first."""
        return list(self._order)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and canonicalize(path) in self._mount_points

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths())

    def __len__(self) -> int:
        return len(self._mount_points)


def _invoke(factory: RepositoryFactory, mount_point: str) -> Any:
    # Factories may ignore the mount point, e.g. "lambda: repo"
    try:
        parameters = inspect.signature(factory).parameters.values()
    except (TypeError, ValueError):
        return factory(mount_point)

    accepts_argument = any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
        for p in parameters
    )
    return factory(mount_point) if accepts_argument else factory()
