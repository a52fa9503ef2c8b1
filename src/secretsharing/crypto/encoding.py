import base64
import binascii
import string

BASE36_ALPHABET = string.digits + string.ascii_lowercase


def int_to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 encoding requires a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(BASE36_ALPHABET[rem])
    return "".join(reversed(digits))


def base36_to_int(text: str) -> int:
    if not text or text[0] in "+-" or not all(ch in BASE36_ALPHABET for ch in text.lower()):
        raise ValueError(f"invalid base36 string {text!r}")
    return int(text, 36)


def urlsafe_encode(data: bytes) -> str:
    """URL-safe base64 without embedded newlines."""
    return base64.urlsafe_b64encode(data).decode("ascii")


def urlsafe_decode(text: str) -> bytes:
    """Strict URL-safe base64 decode; raises ``ValueError`` on bad input."""
    if "\n" in text or "\r" in text:
        raise ValueError("invalid base64: embedded newline")
    try:
        raw = text.encode("ascii")
    except UnicodeEncodeError as exc:
        raise ValueError("invalid base64: non-ascii characters") from exc
    if not raw or len(raw) % 4:
        raise ValueError("invalid base64: bad length")
    try:
        return base64.b64decode(raw, altchars=b"-_", validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64: {exc}") from exc
