import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from secretsharing.errors import ConfigurationError

MIN_SHARES = 2
MAX_SHARES = 512
DEFAULT_SECRET_BITLENGTH = 256
MAX_BITLENGTH = 4096
DEFAULT_PRIME_ROUNDS = 1000
LEGACY_PRIME_ROUNDS = 20
DEFAULT_PRIME_SEARCH_ATTEMPTS = 100_000


def coerce_int(value: Any, name: str) -> int:
    """Accept ints and integer strings (``"5"``); reject everything else."""
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError as exc:
            raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc
    raise ConfigurationError(f"{name} must be an integer, got {type(value).__name__}")


def validate_threshold(n: int, k: int) -> None:
    if k > n:
        raise ConfigurationError(f"k must be <= n (k={k}, n={n})")
    if k < MIN_SHARES:
        raise ConfigurationError(f"k must be >= {MIN_SHARES}")
    if n > MAX_SHARES:
        raise ConfigurationError(f"n must be <= {MAX_SHARES}")


@dataclass(frozen=True)
class SharingConfig:
    """Threshold and search parameters for a split/combine container."""

    n: int
    k: int
    secret_bit_length: int = DEFAULT_SECRET_BITLENGTH
    prime_rounds: int = DEFAULT_PRIME_ROUNDS
    prime_search_attempts: int = DEFAULT_PRIME_SEARCH_ATTEMPTS

    def __post_init__(self) -> None:
        validate_threshold(self.n, self.k)
        if not 1 <= self.secret_bit_length <= MAX_BITLENGTH:
            raise ConfigurationError(f"secret_bit_length must be within 1-{MAX_BITLENGTH}")
        if self.prime_rounds < 1:
            raise ConfigurationError("prime_rounds must be positive")
        if self.prime_search_attempts < 1:
            raise ConfigurationError("prime_search_attempts must be positive")

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "SharingConfig":
        if not data:
            raise ConfigurationError("Sharing config missing required field 'n'")
        allowed = {f.name for f in fields(cls)}
        for key in data:
            if key not in allowed:
                raise ConfigurationError(f"Unknown config key '{key}'")
        if "n" not in data:
            raise ConfigurationError("Sharing config missing required field 'n'")
        kwargs: Dict[str, int] = {}
        for key, value in data.items():
            kwargs[key] = coerce_int(value, key)
        kwargs.setdefault("k", kwargs["n"])
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: Path) -> "SharingConfig":
        return cls.from_mapping(read_config_file(Path(path)))

    def to_dict(self) -> Dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def read_config_file(path: Path) -> Dict[str, Any]:
    """Parse a JSON or YAML config file into a dict."""
    text = path.read_text()
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Invalid config file at {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file at {path} must contain a mapping")
    return data
