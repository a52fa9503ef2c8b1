"""
Shamir threshold secret sharing over prime fields.

Packages:
- config: thresholds, bit-length limits and config-file loading
- crypto: primes, polynomial arithmetic, integrity tags, encodings
- shamir: Secret, Share and the split/combine Container
- utils: logging helpers
"""

from .errors import SecretSharingError
from .shamir import Container, ContainerState, Secret, Share

__version__ = "0.1.0"

__all__ = ["Container", "ContainerState", "Secret", "Share", "SecretSharingError", "__version__"]
