from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from secretsharing.errors import ShareFieldError, ShareFormatError
from secretsharing.shamir.codec import (
    LEGACY_VERSION,
    STRUCTURED_VERSION,
    decode_legacy,
    decode_structured,
    encode_legacy,
    encode_structured,
    looks_legacy,
    record_from_mapping,
)

_REQUIRED = ("x", "y", "prime", "prime_bit_length", "k", "n", "integrity_tag")
_LEGACY_REQUIRED = ("x", "y", "prime", "prime_bit_length")


@dataclass(frozen=True, eq=False)
class Share:
    """
    A point (x, y) on the splitting polynomial over Z/pZ plus batch metadata.

    Shares from one split carry the same prime, k, n and integrity tag. The
    tag is a copy of the secret's; a share never references the secret itself.
    Legacy (version 0) shares have no k, n or tag.
    """

    x: int
    y: int
    prime: int
    prime_bit_length: int
    k: Optional[int]
    n: Optional[int]
    integrity_tag: Optional[str]
    version: int = STRUCTURED_VERSION

    def __post_init__(self) -> None:
        if self.version == STRUCTURED_VERSION:
            required = _REQUIRED
        elif self.version == LEGACY_VERSION:
            required = _LEGACY_REQUIRED
        else:
            raise ShareFieldError(f"Unknown share version {self.version!r}")
        missing = [name for name in required if getattr(self, name) is None]
        if missing:
            raise ShareFieldError(f"{', '.join(missing)} expected.")
        if self.version == STRUCTURED_VERSION:
            # Runs the same allow-list/range checks as the wire format.
            record_from_mapping(self.to_dict())

    @classmethod
    def from_string(cls, text: str) -> "Share":
        """Parse either wire format; legacy shares are detected as uppercase hex."""
        if not isinstance(text, str):
            raise ShareFormatError(f"Expected a share string, got {type(text).__name__}")
        text = text.strip()
        if not text:
            raise ShareFormatError("Share string is empty")
        if looks_legacy(text):
            fields = decode_legacy(text)
            return cls(k=None, n=None, integrity_tag=None, **fields)
        return cls(**decode_structured(text))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Share":
        """Build a structured share from an untyped mapping (wire or attribute key names)."""
        return cls(**record_from_mapping(data).model_dump())

    @property
    def is_legacy(self) -> bool:
        return self.version == LEGACY_VERSION

    @property
    def point(self) -> tuple:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "integrity_tag": self.integrity_tag,
            "k": self.k,
            "n": self.n,
            "x": self.x,
            "y": self.y,
            "prime": self.prime,
            "prime_bit_length": self.prime_bit_length,
        }

    def to_string(self) -> str:
        if self.is_legacy:
            return encode_legacy(self.x, self.y, self.prime_bit_length)
        return encode_structured(self.to_dict())

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Share(x={self.x}, k={self.k}, n={self.n}, version={self.version})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Share):
            return NotImplemented
        return self.to_string() == other.to_string()

    def __hash__(self) -> int:
        return hash(self.to_string())
