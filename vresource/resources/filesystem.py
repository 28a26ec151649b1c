"""Resources backed by files and directories on disk."""

import os
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from vresource.exceptions import InvalidPathError
from vresource.paths import canonicalize, get_filename, join
from vresource.resources.base import Resource, ResourceType
from vresource.resources.collection import ResourceCollection


class FilesystemResource(Resource):
    """A resource with a location on the local filesystem.

    Attributes:
        filesystem_path: Absolute path of the backing file or directory
    """

    def __init__(self, filesystem_path: str, path: Optional[str] = None):
        """Initialize a filesystem resource.

        Args:
            filesystem_path: Path of the backing file or directory
            path: Repository path of the resource, if known

        Raises:
            InvalidPathError: If the filesystem path does not exist
        """
        if not os.path.exists(filesystem_path):
            raise InvalidPathError(f'The path "{filesystem_path}" does not exist.')

        super().__init__(path)
        self.filesystem_path = canonicalize(os.path.abspath(filesystem_path))

    @property
    def name(self) -> Optional[str]:
        name = super().name
        if name is None:
            return get_filename(self.filesystem_path)
        return name

    @property
    def modified_at(self) -> datetime:
        return datetime.fromtimestamp(os.path.getmtime(self.filesystem_path))

    def get_info(self) -> Dict[str, Any]:
        info = super().get_info()
        info["filesystem_path"] = self.filesystem_path
        return info

    def _payload(self) -> Tuple:
        return (self.filesystem_path,)


class FileResource(FilesystemResource):
    """A file on disk."""

    resource_type = ResourceType.FILE

    def __init__(self, filesystem_path: str, path: Optional[str] = None):
        super().__init__(filesystem_path, path)
        if os.path.isdir(self.filesystem_path):
            raise InvalidPathError(f'The path "{filesystem_path}" is a directory.')

    @property
    def size(self) -> int:
        return os.path.getsize(self.filesystem_path)

    def read(self, encoding: str = "utf-8") -> str:
        with open(self.filesystem_path, "r", encoding=encoding) as f:
            return f.read()

    def read_bytes(self) -> bytes:
        with open(self.filesystem_path, "rb") as f:
            return f.read()

    def get_info(self) -> Dict[str, Any]:
        info = super().get_info()
        info["size"] = self.size
        return info


class DirectoryResource(FilesystemResource):
    """A directory on disk.

    When attached to a repository, children are looked up through the
    repository. A detached directory reads its children straight from
    the disk.
    """

    resource_type = ResourceType.DIRECTORY

    def __init__(self, filesystem_path: str, path: Optional[str] = None):
        super().__init__(filesystem_path, path)
        if not os.path.isdir(self.filesystem_path):
            raise InvalidPathError(f'The path "{filesystem_path}" is not a directory.')

    def get_child(self, relative_path: str) -> Resource:
        if self.is_attached():
            return super().get_child(relative_path)

        child_path = os.path.join(self.filesystem_path, relative_path)
        repository_path = join(self._path, relative_path) if self._path else None
        if os.path.isdir(child_path):
            return DirectoryResource(child_path, repository_path)
        return FileResource(child_path, repository_path)

    def has_child(self, relative_path: str) -> bool:
        if self.is_attached():
            return super().has_child(relative_path)
        return os.path.exists(os.path.join(self.filesystem_path, relative_path))

    def has_children(self) -> bool:
        if self.is_attached():
            return super().has_children()
        with os.scandir(self.filesystem_path) as entries:
            return any(True for _ in entries)

    def list_children(self) -> ResourceCollection:
        """List the children of this directory.

        Returns:
            Children ordered by name
        """
        if self.is_attached():
            return super().list_children()

        children = ResourceCollection()
        for name in sorted(os.listdir(self.filesystem_path)):
            children.append(self.get_child(name))
        return children
