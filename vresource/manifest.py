"""Mount manifests: composite repositories described in YAML.

Example manifest:

    ```yaml
    mounts:
      /app:
        type: json
        path: build/resources.json
      /assets:
        type: filesystem
        path: ./public
      /scratch:
        type: memory
    ```

Relative paths are resolved against the directory of the manifest. Every
entry is mounted as a factory, so a repository is only built once a
request reaches its mount point.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Union

import yaml

from vresource.exceptions import ManifestError
from vresource.repository.base import ResourceRepository
from vresource.repository.composite import CompositeRepository
from vresource.repository.filesystem import FilesystemRepository
from vresource.repository.json_repository import OptimizedJsonRepository
from vresource.repository.memory import InMemoryRepository

logger = logging.getLogger(__name__)

REPOSITORY_TYPES = ("json", "filesystem", "memory")


def load_manifest(path: Union[str, Path]) -> CompositeRepository:
    """Build a composite repository from a manifest file.

    Raises:
        ManifestError: If the file cannot be read or is malformed
    """
    path = Path(path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ManifestError(f"Cannot read manifest {path}: {e}") from e

    return build_composite(data, path.parent.resolve())


def build_composite(data: Any, root: Path) -> CompositeRepository:
    """Build a composite repository from a parsed manifest."""
    if not isinstance(data, dict) or not isinstance(data.get("mounts"), dict):
        raise ManifestError('A manifest must be a mapping with a "mounts" mapping.')

    composite = CompositeRepository()

    for mount_point, entry in data["mounts"].items():
        if entry is None:
            entry = {}
        if not isinstance(entry, dict):
            raise ManifestError(f'The mount "{mount_point}" must be a mapping.')

        composite.mount(str(mount_point), _factory(str(mount_point), entry, root))

    logger.debug(f"Loaded {len(data['mounts'])} mounts")
    return composite


def dump_manifest(mounts: Dict[str, Dict[str, Any]]) -> str:
    """Serialize mount entries into manifest YAML."""
    return yaml.dump({"mounts": mounts}, default_flow_style=False, sort_keys=True)


def _factory(mount_point: str, entry: Dict[str, Any], root: Path) -> Callable[[str], ResourceRepository]:
    repository_type = entry.get("type", "memory")

    if repository_type not in REPOSITORY_TYPES:
        raise ManifestError(
            f'Unknown repository type "{repository_type}" for "{mount_point}". '
            f"Expected one of: {', '.join(REPOSITORY_TYPES)}"
        )

    if repository_type == "memory":
        return lambda _: InMemoryRepository()

    if "path" not in entry:
        raise ManifestError(f'The mount "{mount_point}" needs a "path".')

    location = str((root / entry["path"]).resolve())

    if repository_type == "json":
        base_directory = entry.get("base_directory")
        if base_directory is not None:
            base_directory = str((root / base_directory).resolve())
        return lambda _: OptimizedJsonRepository(location, base_directory)

    return lambda _: FilesystemRepository(location)
