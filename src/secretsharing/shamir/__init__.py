from .codec import LEGACY_VERSION, STRUCTURED_VERSION, ShareRecord
from .container import Container, ContainerState, field_prime_bit_length
from .secret import Secret
from .share import Share

__all__ = [
    "LEGACY_VERSION",
    "STRUCTURED_VERSION",
    "ShareRecord",
    "Container",
    "ContainerState",
    "field_prime_bit_length",
    "Secret",
    "Share",
]
