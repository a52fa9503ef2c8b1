"""Polynomial arithmetic over the prime field Z/pZ."""

from typing import Iterable, List, Optional, Sequence, Tuple, Union

from secretsharing.crypto.random_source import random_below, random_int
from secretsharing.errors import ConfigurationError, NotInvertibleError

Point = Tuple[int, int]


def mod_inverse(value: int, prime: int) -> int:
    """Inverse of ``value`` mod ``prime`` via the extended Euclidean algorithm."""
    a = value % prime
    old_r, r = a, prime
    old_s, s = 1, 0
    while r:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_s, s = s, old_s - q * s
    if old_r != 1:
        raise NotInvertibleError(f"{value} has no inverse modulo the field prime (gcd={old_r})")
    return old_s % prime


def random_coefficients(k: int, secret_value: int, bit_length: int, prime: Optional[int] = None) -> List[int]:
    """
    Coefficients for a degree ``k-1`` polynomial whose constant term is the secret.

    Without ``prime`` the higher coefficients are random ``bit_length``-bit
    integers left unreduced; with it they are uniform over ``[0, prime)``.
    """
    if k < 1:
        raise ConfigurationError("k must be positive")
    coeffs = [secret_value]
    for _ in range(k - 1):
        if prime is not None:
            coeffs.append(random_below(prime))
        else:
            coeffs.append(random_int(bit_length))
    return coeffs


def evaluate(x: int, coefficients: Sequence[int], prime: int) -> int:
    """Evaluate the polynomial at ``x`` mod ``prime`` (Horner's rule)."""
    acc = 0
    for coeff in reversed(coefficients):
        acc = (acc * x + coeff) % prime
    return acc


def _x_values(points: Iterable[Union[int, Point]]) -> List[int]:
    return [p[0] if isinstance(p, tuple) else int(p) for p in points]


def lagrange_coefficient(x_target: int, points: Iterable[Union[int, Point]], prime: int, at: int = 0) -> int:
    """
    Lagrange basis polynomial for ``x_target`` evaluated at ``at`` (default 0).

    Computes prod_{x_j != x_target} (at - x_j) / (x_target - x_j) mod prime.
    """
    result = 1
    for x_j in _x_values(points):
        if x_j == x_target:
            continue
        numerator = (at - x_j) % prime
        result = (result * numerator * mod_inverse(x_target - x_j, prime)) % prime
    return result


def interpolate_at_zero(points: Sequence[Point], prime: int) -> int:
    """Recover the constant term of the polynomial through ``points``."""
    if not points:
        raise ConfigurationError("At least one point is required to interpolate")
    xs = [x for x, _ in points]
    if len(set(x % prime for x in xs)) != len(xs):
        raise NotInvertibleError("Duplicate x coordinates cannot be interpolated")
    secret = 0
    for x_j, y_j in points:
        summand = (y_j * lagrange_coefficient(x_j, xs, prime)) % prime
        secret = (secret + summand) % prime
    return secret
