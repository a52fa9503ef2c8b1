import secrets

from secretsharing.errors import ConfigurationError


def random_bytes(length: int) -> bytes:
    """Read ``length`` bytes from the OS CSPRNG."""
    if length < 0:
        raise ConfigurationError("length must be non-negative")
    return secrets.token_bytes(length)


def random_int(bit_length: int) -> int:
    """
    Return a random integer with exactly ``bit_length`` bits.

    Bytes are read big-endian, masked down to ``bit_length`` bits and the top
    bit is forced so the result never comes out shorter than requested.
    """
    if bit_length < 1:
        raise ConfigurationError("bit_length must be positive")
    byte_length = (bit_length + 7) // 8
    value = int.from_bytes(random_bytes(byte_length), byteorder="big")
    value &= (1 << bit_length) - 1
    return value | (1 << (bit_length - 1))


def random_below(upper: int) -> int:
    """Uniform integer in ``[0, upper)``."""
    if upper < 1:
        raise ConfigurationError("upper bound must be positive")
    return secrets.randbelow(upper)
