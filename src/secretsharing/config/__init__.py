from .models import (
    DEFAULT_PRIME_ROUNDS,
    DEFAULT_PRIME_SEARCH_ATTEMPTS,
    DEFAULT_SECRET_BITLENGTH,
    LEGACY_PRIME_ROUNDS,
    MAX_BITLENGTH,
    MAX_SHARES,
    MIN_SHARES,
    SharingConfig,
    coerce_int,
    validate_threshold,
)
from .system import CONFIG_ENV_VAR, load_config, load_sharing_config, resolve_config_path

__all__ = [
    "DEFAULT_PRIME_ROUNDS",
    "DEFAULT_PRIME_SEARCH_ATTEMPTS",
    "DEFAULT_SECRET_BITLENGTH",
    "LEGACY_PRIME_ROUNDS",
    "MAX_BITLENGTH",
    "MAX_SHARES",
    "MIN_SHARES",
    "SharingConfig",
    "coerce_int",
    "validate_threshold",
    "CONFIG_ENV_VAR",
    "load_config",
    "load_sharing_config",
    "resolve_config_path",
]
