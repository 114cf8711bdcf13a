"""Configuration loading utilities."""

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from mx3.exceptions import ConfigError, UnknownRevisionError
from mx3.revisions import normalize_revision
from mx3.tail import MASK64

logger = logging.getLogger(__name__)

MODES = ("oneshot", "aligned", "chunked")

# Streaming modes are tied to the revision whose primitives they use.
_MODE_REVISION = {"aligned": 2, "chunked": 3}


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Dictionary containing configuration parameters

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    logger.debug("Loaded config from %s", config_path)

    if config is None:
        return {}

    return config


@dataclass(frozen=True)
class DigestConfig:
    """Settings for digesting files and streams.

    Attributes:
        revision: Algorithm revision (1, 2 or 3)
        seed: Seed word (uint64)
        mode: "oneshot" (read everything, one hash call), "aligned"
            (AlignedStreamHasher, revision 2) or "chunked"
            (ChunkedStreamHasher, revision 3)
        read_size: Bytes requested per read from the source
    """

    revision: int = 3
    seed: int = 1
    mode: str = "chunked"
    read_size: int = 65536

    def __post_init__(self) -> None:
        """Validate parameters."""
        try:
            revision = normalize_revision(self.revision)
        except UnknownRevisionError as exc:
            raise ConfigError(str(exc)) from exc
        # Use object.__setattr__ because dataclass is frozen
        object.__setattr__(self, "revision", revision)

        if isinstance(self.seed, bool) or not isinstance(self.seed, int):
            raise ConfigError(f"seed must be an integer, got {self.seed!r}")
        if not (0 <= self.seed <= MASK64):
            raise ConfigError(f"seed must be uint64, got {self.seed}")
        if self.mode not in MODES:
            raise ConfigError(f"mode must be one of {MODES}, got {self.mode!r}")
        required = _MODE_REVISION.get(self.mode)
        if required is not None and self.revision != required:
            raise ConfigError(
                f"mode {self.mode!r} requires revision {required}, got {self.revision}"
            )
        if isinstance(self.read_size, bool) or not isinstance(self.read_size, int):
            raise ConfigError(f"read_size must be an integer, got {self.read_size!r}")
        if self.read_size <= 0:
            raise ConfigError(f"read_size must be positive, got {self.read_size}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DigestConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"unknown config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, config_path: Union[str, Path]) -> "DigestConfig":
        """Load a config from YAML; a "digest" section is used when present."""
        data = load_config(config_path)
        if not isinstance(data, dict):
            raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")
        return cls.from_dict(data.get("digest", data))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
