"""
CLI Configuration

Configuration management for the merkletree CLI.
Supports a JSON configuration file, environment variables and a .env file.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

from merkletree.crypto.hashing import get_hash_function
from merkletree.schemas.errors import ConfigurationException


# Environment variable prefix
ENV_PREFIX = "MERKLETREE_"

DEFAULT_CONFIG_FILENAME = "merkletree.json"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Hashing
    hash_algorithm: str = "sha256"
    leaf_hash_algorithm: str = "sha3_256"
    bitcoin_mode: bool = False

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    def validate(self) -> None:
        """
        Check that configured values are usable.

        Raises:
            ConfigurationException: On an unknown algorithm or output format
        """
        get_hash_function(self.hash_algorithm)
        get_hash_function(self.leaf_hash_algorithm)
        if self.default_output_format not in ("human", "json"):
            raise ConfigurationException(
                f"default_output_format must be 'human' or 'json', "
                f"got {self.default_output_format!r}",
            )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def apply_env_overrides(config: CLIConfig) -> CLIConfig:
    """
    Override configuration from environment variables.

    Supported variables:
    - MERKLETREE_HASH_ALGORITHM: hash for internal nodes
    - MERKLETREE_LEAF_HASH_ALGORITHM: hash for raw leaf data
    - MERKLETREE_BITCOIN_MODE: build Bitcoin-style trees (true/false)
    - MERKLETREE_LOG_LEVEL: log level
    - MERKLETREE_LOG_FILE: also log to this file
    - MERKLETREE_OUTPUT_FORMAT: "human" or "json"
    """
    if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
        config.hash_algorithm = os.environ[f"{ENV_PREFIX}HASH_ALGORITHM"]
    if os.getenv(f"{ENV_PREFIX}LEAF_HASH_ALGORITHM"):
        config.leaf_hash_algorithm = os.environ[f"{ENV_PREFIX}LEAF_HASH_ALGORITHM"]
    config.bitcoin_mode = _env_bool(f"{ENV_PREFIX}BITCOIN_MODE", config.bitcoin_mode)

    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.environ[f"{ENV_PREFIX}LOG_LEVEL"]
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.environ[f"{ENV_PREFIX}LOG_FILE"]

    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = os.environ[f"{ENV_PREFIX}OUTPUT_FORMAT"]

    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """
    Load configuration from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationException: If the file is not a JSON object
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationException(
            f"Config file is not valid JSON: {path}: {e}",
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationException(f"Config file must contain a JSON object: {path}")

    config = CLIConfig()

    config.hash_algorithm = data.get("hash_algorithm", config.hash_algorithm)
    config.leaf_hash_algorithm = data.get("leaf_hash_algorithm", config.leaf_hash_algorithm)
    config.bitcoin_mode = bool(data.get("bitcoin_mode", config.bitcoin_mode))

    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)

    config.default_output_format = data.get(
        "default_output_format", config.default_output_format
    )

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables (including those from a .env file in the
    working directory) override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged, validated configuration
    """
    load_dotenv(find_dotenv(usecwd=True))

    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / DEFAULT_CONFIG_FILENAME,
            Path.cwd() / f".{DEFAULT_CONFIG_FILENAME}",
            Path.home() / ".config" / "merkletree" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    config = apply_env_overrides(config)
    config.validate()
    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(CLIConfig().to_dict(), indent=2) + "\n"


__all__ = [
    "ENV_PREFIX",
    "DEFAULT_CONFIG_FILENAME",
    "CLIConfig",
    "apply_env_overrides",
    "load_config_from_file",
    "load_config",
    "get_default_config_template",
]
