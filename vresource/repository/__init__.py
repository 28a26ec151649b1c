"""Repository implementations."""

from vresource.repository.base import ResourceRepository, EditableRepository, is_repository
from vresource.repository.composite import CompositeRepository
from vresource.repository.filesystem import FilesystemRepository
from vresource.repository.json_repository import AbstractJsonRepository, OptimizedJsonRepository
from vresource.repository.memory import InMemoryRepository

__all__ = [
    "ResourceRepository",
    "EditableRepository",
    "is_repository",
    "CompositeRepository",
    "FilesystemRepository",
    "AbstractJsonRepository",
    "OptimizedJsonRepository",
    "InMemoryRepository",
]
