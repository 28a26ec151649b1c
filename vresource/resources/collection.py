"""Ordered collections of resources."""

from typing import List, Optional

from vresource.resources.base import Resource


class ResourceCollection(list):
    """A list of resources with a few convenience accessors."""

    def get_paths(self) -> List[Optional[str]]:
        return [resource.path for resource in self]

    def get_names(self) -> List[Optional[str]]:
        return [resource.name for resource in self]

    def is_empty(self) -> bool:
        return len(self) == 0

    def to_list(self) -> List[dict]:
        """Resource info dicts, e.g. for JSON output."""
        return [resource.get_info() for resource in self]

    def __repr__(self) -> str:
        return f"ResourceCollection({list.__repr__(self)})"
