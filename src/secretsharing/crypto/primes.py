"""
Primality testing and field prime search.

``find_prime_at_least`` picks a random starting point and is what new splits
use. ``smallest_prime_of_bit_length`` is deterministic and only exists so that
legacy hex shares, which carry the prime's bit length instead of the prime,
can be re-hydrated.
"""

from functools import lru_cache
from typing import List

from secretsharing.config.models import (
    DEFAULT_PRIME_ROUNDS,
    DEFAULT_PRIME_SEARCH_ATTEMPTS,
    LEGACY_PRIME_ROUNDS,
)
from secretsharing.crypto.random_source import random_below, random_int
from secretsharing.errors import ConfigurationError, PrimeSearchError
from secretsharing.utils import get_logger

logger = get_logger("primes")


def _small_primes(limit: int) -> List[int]:
    sieve = bytearray([1]) * (limit + 1)
    sieve[0:2] = b"\x00\x00"
    for i in range(2, int(limit**0.5) + 1):
        if sieve[i]:
            sieve[i * i :: i] = bytearray(len(sieve[i * i :: i]))
    return [i for i, flag in enumerate(sieve) if flag]


SMALL_PRIMES = _small_primes(2000)


def is_probably_prime(n: int, rounds: int = DEFAULT_PRIME_ROUNDS) -> bool:
    """
    Miller-Rabin probabilistic primality test.

    ``rounds`` independent random witnesses are tried. The default of 1000 is
    far above what is needed for primes of a few thousand bits and can be
    lowered by callers that care about speed.
    """
    if rounds < 1:
        raise ConfigurationError("rounds must be positive")
    if n < 2:
        return False
    for p in SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False

    # n - 1 = 2^s * d with d odd
    d = n - 1
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1

    for _ in range(rounds):
        a = 2 + random_below(n - 3)
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def find_prime_at_least(
    bit_length: int,
    rounds: int = DEFAULT_PRIME_ROUNDS,
    max_attempts: int = DEFAULT_PRIME_SEARCH_ATTEMPTS,
) -> int:
    """
    Search upward from a random odd ``bit_length``-bit number for a prime.

    Raises:
        ConfigurationError: if ``bit_length`` < 2 or ``max_attempts`` < 1.
        PrimeSearchError: if no prime is found within ``max_attempts`` candidates.
    """
    if bit_length < 2:
        raise ConfigurationError("bit_length must be at least 2")
    if max_attempts < 1:
        raise ConfigurationError("max_attempts must be positive")
    candidate = random_int(bit_length) | 1
    for attempt in range(1, max_attempts + 1):
        if is_probably_prime(candidate, rounds):
            logger.debug(
                "Found %d-bit prime after %d candidates",
                candidate.bit_length(),
                attempt,
                extra={"attempts": attempt},
            )
            return candidate
        candidate += 2
    raise PrimeSearchError(f"No {bit_length}-bit prime found within {max_attempts} candidates")


@lru_cache(maxsize=64)
def smallest_prime_of_bit_length(bit_length: int, rounds: int = LEGACY_PRIME_ROUNDS) -> int:
    """Smallest prime above ``2**bit_length``; deterministic for a given bit length."""
    if bit_length < 1:
        raise ConfigurationError("bit_length must be positive")
    candidate = 2**bit_length + 1
    while not is_probably_prime(candidate, rounds):
        candidate += 2
    return candidate
