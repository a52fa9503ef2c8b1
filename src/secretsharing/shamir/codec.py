"""
Share wire formats.

Version 0 (legacy) is an uppercase hex string::

    V XX YYYY...Y CCCC PP

* ``V``    format version, always ``0``
* ``XX``   x coordinate, one byte
* ``Y..``  y coordinate, variable length, no leading zeros
* ``CCCC`` first four hex digits of SHA-1 over the ``Y`` text, guards against typos
* ``PP``   prime bit length in nibbles; the prime is ``4 * PP + 1`` bits and
           is re-derived with ``smallest_prime_of_bit_length``, not carried

Version 1 (structured) is compact JSON wrapped in URL-safe base64 and always
carries the prime explicitly.
"""

import json
import re
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from secretsharing.config.models import MAX_SHARES, MIN_SHARES
from secretsharing.crypto.encoding import urlsafe_decode, urlsafe_encode
from secretsharing.crypto.integrity import sha1_hex
from secretsharing.crypto.primes import smallest_prime_of_bit_length
from secretsharing.errors import ChecksumMismatchError, ShareFieldError, ShareFormatError, UnsupportedVersionError

LEGACY_VERSION = 0
STRUCTURED_VERSION = 1

_LEGACY_PATTERN = re.compile(r"^[0-9A-F]+$")
_LEGACY_MIN_LENGTH = 1 + 2 + 1 + 4 + 2


class ShareRecord(BaseModel):
    """Allow-list of fields in a structured share; unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid", strict=True, populate_by_name=True)

    version: int = STRUCTURED_VERSION
    integrity_tag: str = Field(alias="hmac", min_length=1)
    k: int = Field(ge=MIN_SHARES, le=MAX_SHARES)
    n: int = Field(ge=MIN_SHARES, le=MAX_SHARES)
    x: int = Field(ge=1)
    y: int = Field(ge=0)
    prime: int = Field(ge=3)
    prime_bit_length: int = Field(alias="prime_bitlength", ge=2)

    @model_validator(mode="after")
    def _check_ranges(self) -> "ShareRecord":
        if self.k > self.n:
            raise ValueError("k must be <= n")
        if self.x > self.n:
            raise ValueError("x must be within 1..n")
        if self.y >= self.prime:
            raise ValueError("y must be smaller than prime")
        return self


def looks_legacy(text: str) -> bool:
    return bool(_LEGACY_PATTERN.match(text))


def record_from_mapping(data: Mapping[str, Any]) -> ShareRecord:
    version = data.get("version", STRUCTURED_VERSION)
    if version != STRUCTURED_VERSION:
        raise UnsupportedVersionError(f"Invalid share format version {version!r}, expected {STRUCTURED_VERSION}")
    try:
        return ShareRecord.model_validate(dict(data))
    except ValidationError as exc:
        raise ShareFieldError(f"Invalid share fields: {exc}") from exc


def encode_structured(fields: Mapping[str, Any]) -> str:
    record = ShareRecord.model_validate(dict(fields))
    payload = record.model_dump(by_alias=True)
    return urlsafe_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))


def decode_structured(text: str) -> Dict[str, Any]:
    try:
        decoded = urlsafe_decode(text)
    except ValueError as exc:
        raise ShareFormatError(f"Share string is not valid base64: {exc}") from exc
    try:
        data = json.loads(decoded)
    except ValueError as exc:
        # also covers UnicodeDecodeError and the int-string digit limit
        raise ShareFormatError(f"Share payload is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ShareFormatError("Share payload must be a JSON object")
    return record_from_mapping(data).model_dump()


def encode_legacy(x: int, y: int, prime_bit_length: int) -> str:
    if not 0 <= x <= 0xFF:
        raise ShareFormatError("Legacy shares only support x within 0..255")
    prime_nibbles = (prime_bit_length - 1) // 4
    if not 0 <= prime_nibbles <= 0xFF:
        raise ShareFormatError("Prime bit length does not fit the legacy format")
    y_hex = f"{y:X}"
    checksum = sha1_hex(y_hex.encode("ascii"))[:4].upper()
    return f"{LEGACY_VERSION}{x:02X}{y_hex}{checksum}{prime_nibbles:02X}"


def decode_legacy(text: str) -> Dict[str, Any]:
    if len(text) < _LEGACY_MIN_LENGTH or not looks_legacy(text):
        raise ShareFormatError("Legacy share must be uppercase hex of at least 10 characters")
    version = text[0]
    if version != str(LEGACY_VERSION):
        raise UnsupportedVersionError(f"Invalid share format version '{version}', expected '{LEGACY_VERSION}'")
    x = int(text[1:3], 16)
    y_hex = text[3:-6]
    checksum = text[-6:-2]
    prime_nibbles = int(text[-2:], 16)

    expected = sha1_hex(y_hex.encode("ascii"))[:4].upper()
    if checksum != expected:
        raise ChecksumMismatchError(f"Invalid checksum. Expected {expected}, got {checksum}")

    prime_bit_length = 4 * prime_nibbles + 1
    return {
        "version": LEGACY_VERSION,
        "x": x,
        "y": int(y_hex, 16),
        "prime": smallest_prime_of_bit_length(prime_bit_length),
        "prime_bit_length": prime_bit_length,
    }
