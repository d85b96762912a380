"""
Settings for GuardFS.

Settings are read from a YAML file (``config.yaml`` by default). Values may be
nested under a top-level ``guardfs:`` key. Anything missing falls back to the
built-in defaults.
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict

import yaml

from .errors import ConfigError


@dataclass
class Settings:
    """Ambient settings for the CLI and the audit log."""
    audit_log: str = "data/audit_log.jsonl"
    encoding: str = "utf-8"
    dry_run: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _default_config() -> Dict[str, Any]:
    """Return default configuration."""
    return Settings().to_dict()


def load_settings(config_path: str = "config.yaml") -> Settings:
    """
    Load settings from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Settings with file values merged over the defaults

    Raises:
        ConfigError: If the file is not valid YAML or a value has the wrong type
    """
    path = Path(config_path)
    config = _default_config()

    if not path.exists():
        return Settings(**config)

    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(loaded, dict):
        raise ConfigError(f"Expected a mapping in {config_path}")

    loaded = loaded.get("guardfs", loaded)
    if not isinstance(loaded, dict):
        raise ConfigError(f"Expected a mapping under 'guardfs' in {config_path}")

    for key in ("audit_log", "encoding"):
        if key in loaded:
            if not isinstance(loaded[key], str) or not loaded[key]:
                raise ConfigError(f"'{key}' must be a non-empty string")
            config[key] = loaded[key]

    if "dry_run" in loaded:
        if not isinstance(loaded["dry_run"], bool):
            raise ConfigError("'dry_run' must be true or false")
        config["dry_run"] = loaded["dry_run"]

    return Settings(**config)


def save_settings(settings: Settings, config_path: str = "config.yaml") -> None:
    """Write settings to a YAML file under the ``guardfs`` key."""
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump({"guardfs": settings.to_dict()}, f, default_flow_style=False)
