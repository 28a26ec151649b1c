"""
vresource - uniform path-based access to files, directories and nested repositories.

Main API:
    from vresource import (
        CompositeRepository,
        DirectoryResource,
        FilesystemRepository,
        OptimizedJsonRepository,
    )

    # Index a directory tree into a JSON file
    repo = OptimizedJsonRepository("/path/to/project/resources.json")
    repo.add("/css", DirectoryResource("/path/to/project/res/css"))

    # Query it
    style = repo.get("/css/style.css")
    stylesheets = repo.find("/css/*.css")
    repo.remove("/css")

    # Combine repositories
    composite = CompositeRepository()
    composite.mount("/app", repo)
    composite.mount("/assets", lambda mount_point: FilesystemRepository("/srv/assets"))

    composite.get("/app/css/style.css").path             # "/app/css/style.css"
    composite.get("/app/css/style.css").repository_path  # "/css/style.css"
"""

from vresource.exceptions import (
    RepositoryError,
    InvalidPathError,
    InvalidMountArgumentError,
    ResourceNotFoundError,
    RepositoryFactoryError,
    UnsupportedLanguageError,
    UnsupportedResourceError,
    UnsupportedOperationError,
    NoDirectoryError,
    ManifestError,
)
from vresource.repository import (
    ResourceRepository,
    EditableRepository,
    CompositeRepository,
    FilesystemRepository,
    OptimizedJsonRepository,
    InMemoryRepository,
)
from vresource.index import ReferenceIndex
from vresource.mounts import MountTable, MountPoint
from vresource.resources import (
    Resource,
    GenericResource,
    ResourceType,
    ResourceCollection,
    FilesystemResource,
    FileResource,
    DirectoryResource,
    LinkResource,
)

__version__ = "0.1.0"
__all__ = [
    "ReferenceIndex",
    "MountTable",
    "MountPoint",
    "ResourceRepository",
    "EditableRepository",
    "CompositeRepository",
    "FilesystemRepository",
    "OptimizedJsonRepository",
    "InMemoryRepository",
    "Resource",
    "GenericResource",
    "ResourceType",
    "ResourceCollection",
    "FilesystemResource",
    "FileResource",
    "DirectoryResource",
    "LinkResource",
    "RepositoryError",
    "InvalidPathError",
    "InvalidMountArgumentError",
    "ResourceNotFoundError",
    "RepositoryFactoryError",
    "UnsupportedLanguageError",
    "UnsupportedResourceError",
    "UnsupportedOperationError",
    "NoDirectoryError",
    "ManifestError",
]
