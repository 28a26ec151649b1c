"""Resource implementations."""

from vresource.resources.base import Resource, GenericResource, ResourceType
from vresource.resources.collection import ResourceCollection
from vresource.resources.filesystem import (
    FilesystemResource,
    FileResource,
    DirectoryResource,
)
from vresource.resources.link import LinkResource

__all__ = [
    "Resource",
    "GenericResource",
    "ResourceType",
    "ResourceCollection",
    "FilesystemResource",
    "FileResource",
    "DirectoryResource",
    "LinkResource",
]
