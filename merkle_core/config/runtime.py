"""
Runtime Configuration

Central configuration for hash selection and logging.
"""

from __future__ import annotations

import copy
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from merkle_core.crypto.hashing import (
    DEFAULT_HASH_ALGORITHM,
    HashFunction,
    get_hash_function,
)
from merkle_core.schemas.errors import ConfigurationException

load_dotenv()

# Environment variable prefix
ENV_PREFIX = "MERKLE_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class MerkleConfig:
    """
    Runtime configuration for the Merkle core.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.log_level, str):
            raise ConfigurationException(
                message=f"Log level must be a string, got {type(self.log_level).__name__}",
                field_path="log_level",
                details={"allowed": list(_LOG_LEVELS)},
            )
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ConfigurationException(
                message=f"Invalid log level: {self.log_level}",
                field_path="log_level",
                details={"allowed": list(_LOG_LEVELS)},
            )

    def hash_function(self) -> HashFunction:
        """Resolve the configured hash algorithm."""
        return get_hash_function(self.hash_algorithm)

    def apply_logging(self) -> None:
        setup_logging(self.log_level, self.log_file)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLE_HASH_ALGORITHM: hashlib algorithm name
        - MERKLE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
        - MERKLE_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides["hash_algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "MerkleConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "MerkleConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationException(
                message=f"Config file must contain a mapping: {path}",
                details={"type": type(data).__name__},
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MerkleConfig":
        """Load configuration from a dictionary (supports partial data)."""
        return cls(
            hash_algorithm=data.get("hash_algorithm", DEFAULT_HASH_ALGORITHM),
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "MerkleConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        new_config.__post_init__()
        return new_config

    def to_dict(self) -> dict[str, Any]:
        return {
            "hash_algorithm": self.hash_algorithm,
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for applications embedding the Merkle core."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
    )
