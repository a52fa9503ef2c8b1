"""
The secret half of the Shamir data model.

A ``Secret`` wraps a non-negative integer of at most ``MAX_BITLENGTH`` bits
and keeps an HMAC integrity tag in step with it. Shares copy that tag so a
container can tell whether interpolation produced the value that was split.

Secrets travel as URL-safe base64 of the value's base-36 digits::

    >>> Secret(1234567890123456789012345678901234567890).to_string()
    'MWl6aWJqZjR6dmRibXZxNjZkNndtOGcxY2k='
"""

from typing import Optional

from secretsharing.config.models import DEFAULT_SECRET_BITLENGTH, MAX_BITLENGTH
from secretsharing.crypto.encoding import base36_to_int, int_to_base36, urlsafe_decode, urlsafe_encode
from secretsharing.crypto.integrity import compute_integrity_tag, tags_match, values_equal
from secretsharing.crypto.random_source import random_int
from secretsharing.errors import ConfigurationError, SecretBitLengthError, SecretFormatError


class Secret:
    """A secret integer plus its integrity tag."""

    def __init__(self, value: Optional[int] = None) -> None:
        self._value: Optional[int] = None
        self.integrity_tag: str = ""
        if value is None:
            value = random_int(DEFAULT_SECRET_BITLENGTH)
        self.value = value

    @classmethod
    def random(cls, bit_length: int = DEFAULT_SECRET_BITLENGTH) -> "Secret":
        if not 1 <= bit_length <= MAX_BITLENGTH:
            raise ConfigurationError(f"bit_length must be within 1-{MAX_BITLENGTH}")
        return cls(random_int(bit_length))

    @classmethod
    def from_string(cls, text: str) -> "Secret":
        """Re-hydrate a secret from the output of ``to_string``."""
        if not isinstance(text, str):
            raise SecretFormatError("Secret string expected")
        try:
            decoded = urlsafe_decode(text).decode("ascii")
        except (ValueError, UnicodeDecodeError) as exc:
            raise SecretFormatError(f"invalid secret encoding: {exc}") from exc
        if not decoded:
            raise SecretFormatError("invalid base64 (decoded to an empty string)")
        try:
            return cls(base36_to_int(decoded))
        except ValueError as exc:
            raise SecretFormatError(str(exc)) from exc

    @property
    def value(self) -> Optional[int]:
        return self._value

    @value.setter
    def value(self, value: Optional[int]) -> None:
        if value is None:
            self._value = None
            self.integrity_tag = ""
            return
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError("Secret value must be an integer")
        if value < 0:
            raise ConfigurationError("Secret value must be non-negative")
        if value.bit_length() > MAX_BITLENGTH:
            raise SecretBitLengthError(f"Secret must have a bit length less than or equal to {MAX_BITLENGTH}")
        self._value = value
        self.integrity_tag = compute_integrity_tag(value)

    @property
    def bit_length(self) -> int:
        return self._value.bit_length() if self._value is not None else 0

    def has_value(self) -> bool:
        return self._value is not None

    def compute_integrity_tag(self) -> str:
        if self._value is None:
            return ""
        return compute_integrity_tag(self._value)

    def has_valid_integrity_tag(self, tag: Optional[str] = None) -> bool:
        """Check ``tag`` (or the stored tag) against the current value; never raises."""
        if self._value is None:
            return False
        candidate = self.integrity_tag if tag is None else tag
        return tags_match(self.compute_integrity_tag(), candidate)

    def to_string(self) -> str:
        if self._value is None:
            raise SecretFormatError("Secret has no value to encode")
        return urlsafe_encode(int_to_base36(self._value).encode("ascii"))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Secret(bit_length={self.bit_length})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Secret):
            return NotImplemented
        if self._value is None or other._value is None:
            return self._value is other._value
        return values_equal(self._value, other._value)

    # value is mutable, so secrets are not hashable
    __hash__ = None  # type: ignore[assignment]
