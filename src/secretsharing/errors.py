"""Exception hierarchy for secret sharing operations."""


class SecretSharingError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(SecretSharingError, ValueError):
    """Raised for invalid n/k, bit lengths, rounds or unknown option keys."""


class SecretBitLengthError(ConfigurationError):
    """Raised when a secret exceeds the supported bit length."""


class PrimeSearchError(SecretSharingError, RuntimeError):
    """Raised when prime search exhausts its attempt budget."""


class NotInvertibleError(SecretSharingError, ArithmeticError):
    """Raised when a field element has no modular inverse."""


class ContainerStateError(SecretSharingError, RuntimeError):
    """Raised when an operation is not allowed in the container's current state."""


class SecretAlreadySetError(ContainerStateError):
    """Raised when a container already holds a secret."""


class ShareQuotaError(ContainerStateError):
    """Raised when adding more shares than the container's n."""


class DuplicateShareError(ContainerStateError):
    """Raised when an identical share was already added."""


class AlreadyRecoveredError(ContainerStateError):
    """Raised when shares are added after the secret was recovered."""


class ShareFormatError(SecretSharingError, ValueError):
    """Raised when a share cannot be parsed or constructed."""


class ShareFieldError(ShareFormatError):
    """Raised when required share fields are missing or invalid."""


class UnsupportedVersionError(ShareFormatError):
    """Raised when a share carries an unknown format version."""


class ChecksumMismatchError(ShareFormatError):
    """Raised when a legacy share checksum does not match its y value."""


class SecretFormatError(SecretSharingError, ValueError):
    """Raised when a secret string cannot be decoded."""


class IntegrityError(SecretSharingError):
    """Base class for integrity tag failures."""


class ShareMismatchError(IntegrityError):
    """Raised when shares do not belong to the same split."""


class RecoveryIntegrityError(IntegrityError):
    """Raised when a reconstructed secret does not match the shares' tag."""
