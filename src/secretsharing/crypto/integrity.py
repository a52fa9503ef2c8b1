from typing import Optional

from cryptography.hazmat.primitives import constant_time, hashes, hmac

TAG_HEX_LENGTH = 64


def _sha512(data: bytes) -> bytes:
    digest = hashes.Hash(hashes.SHA512())
    digest.update(data)
    return digest.finalize()


def sha1_hex(data: bytes) -> str:
    digest = hashes.Hash(hashes.SHA1())
    digest.update(data)
    return digest.finalize().hex()


def compute_integrity_tag(value: int) -> str:
    """
    HMAC-SHA256 tag for a secret value.

    SHA-512 over the decimal form of ``value`` yields 64 bytes: the first 32
    key the HMAC, the last 32 are the message.
    """
    material = _sha512(str(value).encode("ascii"))
    mac = hmac.HMAC(material[:32], hashes.SHA256())
    mac.update(material[32:])
    return mac.finalize().hex()


def _tag_bytes(tag: Optional[str]) -> Optional[bytes]:
    if not isinstance(tag, str) or len(tag) != TAG_HEX_LENGTH:
        return None
    try:
        raw = bytes.fromhex(tag)
    except ValueError:
        return None
    return raw if len(raw) == TAG_HEX_LENGTH // 2 else None


def tags_match(expected: Optional[str], candidate: Optional[str]) -> bool:
    """Constant-time tag comparison; malformed tags on either side return False."""
    expected_bytes = _tag_bytes(expected)
    candidate_bytes = _tag_bytes(candidate)
    if expected_bytes is None or candidate_bytes is None:
        return False
    return constant_time.bytes_eq(expected_bytes, candidate_bytes)


def values_equal(a: int, b: int) -> bool:
    """Constant-time comparison of two non-negative integers."""
    width = max(a.bit_length(), b.bit_length(), 1)
    size = (width + 7) // 8
    return constant_time.bytes_eq(a.to_bytes(size, "big"), b.to_bytes(size, "big"))
