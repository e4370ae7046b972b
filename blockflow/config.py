"""Configuration management for blockflow."""

import json
from pathlib import Path

from pydantic import BaseModel


class SettingsConfig(BaseModel):
    log_level: str = "INFO"
    notebooks_dir: str | None = None


class BlockflowConfig(BaseModel):
    settings: SettingsConfig = SettingsConfig()


def _config_dir() -> Path:
    return Path.home() / ".blockflow"


def _config_path() -> Path:
    return _config_dir() / "config.json"


def notebooks_dir(config: BlockflowConfig | None = None) -> Path:
    """Return the notebooks directory path, honouring the configured override."""
    if config is not None and config.settings.notebooks_dir:
        return Path(config.settings.notebooks_dir).expanduser()
    return _config_dir() / "notebooks"


def ensure_dirs(config: BlockflowConfig | None = None) -> None:
    """Create required blockflow directories."""
    _config_dir().mkdir(parents=True, exist_ok=True)
    notebooks_dir(config).mkdir(parents=True, exist_ok=True)


def load_config() -> BlockflowConfig:
    """Load config from ~/.blockflow/config.json, returning defaults if missing."""
    path = _config_path()
    if not path.exists():
        return BlockflowConfig()
    text = path.read_text()
    return BlockflowConfig.model_validate_json(text)


def save_config(config: BlockflowConfig) -> None:
    """Save config to ~/.blockflow/config.json."""
    _config_dir().mkdir(parents=True, exist_ok=True)
    path = _config_path()
    path.write_text(json.dumps(config.model_dump(), indent=2) + "\n")
