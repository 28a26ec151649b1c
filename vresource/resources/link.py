"""Links between resources of the same repository."""

from typing import Any, Dict, Optional, Tuple

from vresource.paths import assert_path, canonicalize
from vresource.resources.base import Resource, ResourceType


class LinkResource(Resource):
    """A resource pointing to another path of its repository.

    Attributes:
        target_path: Repository path of the linked resource
    """

    resource_type = ResourceType.LINK

    def __init__(self, target_path: str, path: Optional[str] = None):
        assert_path(target_path)
        super().__init__(path)
        self.target_path = canonicalize(target_path)

    def get_target(self) -> Resource:
        """Resolve the link through the attached repository.

        Raises:
            ResourceNotFoundError: If the target does not exist
        """
        return self._require_repository().get(self.target_path)

    def get_info(self) -> Dict[str, Any]:
        info = super().get_info()
        info["target"] = self.target_path
        return info

    def _payload(self) -> Tuple:
        return (self.target_path,)
