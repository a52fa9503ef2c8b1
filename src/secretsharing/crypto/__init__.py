from .encoding import base36_to_int, int_to_base36, urlsafe_decode, urlsafe_encode
from .integrity import compute_integrity_tag, sha1_hex, tags_match, values_equal
from .polynomial import evaluate, interpolate_at_zero, lagrange_coefficient, mod_inverse, random_coefficients
from .primes import find_prime_at_least, is_probably_prime, smallest_prime_of_bit_length
from .random_source import random_below, random_bytes, random_int

__all__ = [
    "base36_to_int",
    "int_to_base36",
    "urlsafe_decode",
    "urlsafe_encode",
    "compute_integrity_tag",
    "sha1_hex",
    "tags_match",
    "values_equal",
    "evaluate",
    "interpolate_at_zero",
    "lagrange_coefficient",
    "mod_inverse",
    "random_coefficients",
    "find_prime_at_least",
    "is_probably_prime",
    "smallest_prime_of_bit_length",
    "random_below",
    "random_bytes",
    "random_int",
]
