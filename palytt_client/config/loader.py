"""Configuration loading utilities."""

import json
from pathlib import Path
from typing import Any

from pydantic.alias_generators import to_camel, to_snake

from palytt_client.config.schema import ClientConfig


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".palytt" / "config.json"


def load_config(config_path: Path | None = None) -> ClientConfig:
    """
    Load configuration from file or fall back to defaults.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object. ``PALYTT_*`` environment variables fill
        any field the file does not set.
    """
    path = config_path or get_config_path()

    if path.exists():
        try:
            with open(path) as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("config file must contain a JSON object")
            return ClientConfig(**convert_keys(data))
        except (json.JSONDecodeError, ValueError) as e:
            raise ValueError(
                f"Failed to load config from {path}: {e}. "
                "Fix the file or remove it to use defaults."
            ) from e

    return ClientConfig()


def save_config(config: ClientConfig, config_path: Path | None = None) -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Optional path to save to. Uses default if not provided.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = convert_to_camel(config.model_dump())

    with open(path, "w") as f:
        json.dump(data, f, indent=2)

    from palytt_client.config.access import clear_config_cache

    clear_config_cache(config_path=path)


def convert_keys(data: Any) -> Any:
    """Rewrite the camelCase keys of a config file as snake_case field names."""
    if isinstance(data, dict):
        return {to_snake(k): convert_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def convert_to_camel(data: Any) -> Any:
    """Rewrite snake_case field names as the camelCase keys written to disk."""
    if isinstance(data, dict):
        return {to_camel(k): convert_to_camel(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_to_camel(item) for item in data]
    return data
