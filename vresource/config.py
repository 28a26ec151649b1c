"""
Configuration management for vresource.

Handles loading and saving user configuration from:
- XDG config directory: ~/.config/vresource/config.json
- Fallback: ~/.vresource/config.json
"""

import json
import logging
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)


@dataclass
class IndexConfig:
    """Defaults for JSON index files."""
    filename: str = "vresource.json"
    base_directory: Optional[str] = None


@dataclass
class ManifestConfig:
    """Defaults for mount manifests."""
    filename: str = "mounts.yaml"


@dataclass
class CLIConfig:
    """CLI default options."""
    verbose: bool = False
    color: bool = True


@dataclass
class VResConfig:
    """Main vresource configuration."""
    index: IndexConfig = field(default_factory=IndexConfig)
    manifest: ManifestConfig = field(default_factory=ManifestConfig)
    cli: CLIConfig = field(default_factory=CLIConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "index": asdict(self.index),
            "manifest": asdict(self.manifest),
            "cli": asdict(self.cli),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'VResConfig':
        """Create from dictionary."""
        return cls(
            index=IndexConfig(**data.get("index", {})),
            manifest=ManifestConfig(**data.get("manifest", {})),
            cli=CLIConfig(**data.get("cli", {})),
        )


def get_config_path() -> Path:
    """
    Get configuration file path.

    Follows XDG Base Directory specification:
    1. ~/.config/vresource/config.json
    2. Fallback: ~/.vresource/config.json

    Returns:
        Path to config file
    """
    xdg_config_home = Path.home() / ".config"
    if xdg_config_home.exists():
        config_dir = xdg_config_home / "vresource"
    else:
        config_dir = Path.home() / ".vresource"

    return config_dir / "config.json"


def load_config() -> VResConfig:
    """
    Load configuration from file.

    Returns:
        VResConfig instance with loaded values or defaults
    """
    config_path = get_config_path()

    if not config_path.exists():
        return VResConfig()

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        return VResConfig.from_dict(data)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError, TypeError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}. Using defaults.")
        return VResConfig()


def save_config(config: VResConfig) -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration to save
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)

    logger.info(f"Configuration saved to {config_path}")


def update_config(
    index_filename: Optional[str] = None,
    index_base_directory: Optional[str] = None,
    manifest_filename: Optional[str] = None,
    cli_verbose: Optional[bool] = None,
    cli_color: Optional[bool] = None,
) -> None:
    """
    Update configuration.

    Only updates provided values, leaving others unchanged.
    """
    config = load_config()

    if index_filename is not None:
        config.index.filename = index_filename
    if index_base_directory is not None:
        config.index.base_directory = index_base_directory
    if manifest_filename is not None:
        config.manifest.filename = manifest_filename
    if cli_verbose is not None:
        config.cli.verbose = cli_verbose
    if cli_color is not None:
        config.cli.color = cli_color

    save_config(config)
