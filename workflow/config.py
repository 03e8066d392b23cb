"""Configuration management for the project workflow.

Loads configuration from:
1. rig.toml (defaults)
2. Environment variables (overrides)
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


@dataclass
class RigApiConfig:
    """Rig backend connection settings."""

    base_url: str = "http://localhost:3000"
    timeout: int = 60
    examples_path: str = "/examples"
    project_path: str = "/project"
    manifest_path: str = "/extension/manifest"


@dataclass
class ExtensionDefaults:
    """Values pre-filled in a new workflow."""

    client_id: str = ""
    secret: str = ""
    version: str = ""


@dataclass
class WorkflowConfig:
    """Workflow behaviour."""

    log_level: str = "INFO"
    examples_file: str = ""  # Offline example catalog (YAML); empty = use the rig API
    in_progress_message: str = "Creating your project..."


@dataclass
class Config:
    """Main configuration container."""

    api: RigApiConfig = field(default_factory=RigApiConfig)
    extension: ExtensionDefaults = field(default_factory=ExtensionDefaults)
    workflow: WorkflowConfig = field(default_factory=WorkflowConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        return cls(
            api=RigApiConfig(**data.get("api", {})),
            extension=ExtensionDefaults(**data.get("extension", {})),
            workflow=WorkflowConfig(**data.get("workflow", {})),
        )


def find_config_file(start: Path | None = None) -> Path | None:
    """Return the nearest rig.toml at or above ``start`` (default: cwd)."""
    start = start or Path.cwd()
    return next(
        (directory / "rig.toml" for directory in (start, *start.parents) if (directory / "rig.toml").exists()),
        None,
    )


def _env_overrides() -> dict[str, dict[str, Any]]:
    sections = {
        "api": {
            "base_url": os.getenv("RIG_API_URL"),
            "timeout": _int_or_none(os.getenv("RIG_API_TIMEOUT")),
        },
        "extension": {
            "client_id": os.getenv("EXT_CLIENT_ID"),
            "secret": os.getenv("EXT_SECRET"),
            "version": os.getenv("EXT_VERSION"),
        },
        "workflow": {"log_level": os.getenv("LOG_LEVEL")},
    }
    return {
        section: {key: value for key, value in values.items() if value is not None}
        for section, values in sections.items()
    }


def load_config(config_path: Path | str | None = None) -> Config:
    """Load rig.toml, then apply environment overrides.

    Args:
        config_path: Explicit rig.toml; searched for when omitted
    """
    path = Path(config_path) if config_path is not None else find_config_file()
    data: dict[str, Any] = {}
    if path is not None and path.exists():
        data = tomllib.loads(path.read_text())

    for section, values in _env_overrides().items():
        data.setdefault(section, {}).update(values)

    return Config.from_dict(data)


def _int_or_none(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


_config: Config | None = None


def get_config() -> Config:
    """Configuration loaded on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> Config:
    global _config
    _config = load_config()
    return _config
