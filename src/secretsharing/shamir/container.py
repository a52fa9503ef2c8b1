"""
Split/combine state machine for Shamir's threshold scheme.

A container is built with ``n`` (total shares) and ``k`` (threshold) and then
used for exactly one role:

* splitting: ``assign_secret`` (or ``generate_secret``) derives ``n`` shares;
* combining: ``add_share`` accumulates shares until ``k`` are present, then
  interpolates the secret and checks it against the shares' integrity tag.

Any ``k`` shares recover the secret; ``k - 1`` shares learn nothing about it.
"""

from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from secretsharing.config.models import (
    DEFAULT_PRIME_ROUNDS,
    DEFAULT_PRIME_SEARCH_ATTEMPTS,
    DEFAULT_SECRET_BITLENGTH,
    MAX_BITLENGTH,
    SharingConfig,
    coerce_int,
    validate_threshold,
)
from secretsharing.crypto.integrity import tags_match
from secretsharing.crypto.polynomial import evaluate, interpolate_at_zero, random_coefficients
from secretsharing.crypto.primes import find_prime_at_least
from secretsharing.errors import (
    AlreadyRecoveredError,
    ConfigurationError,
    ContainerStateError,
    DuplicateShareError,
    RecoveryIntegrityError,
    SecretAlreadySetError,
    SecretBitLengthError,
    ShareFormatError,
    ShareMismatchError,
    ShareQuotaError,
)
from secretsharing.shamir.secret import Secret
from secretsharing.shamir.share import Share
from secretsharing.utils import get_logger

logger = get_logger("container")


class ContainerState(str, Enum):
    EMPTY = "empty"
    SECRET_SET = "secret_set"
    ACCUMULATING = "accumulating"
    RECOVERED = "recovered"


def field_prime_bit_length(secret_bit_length: int) -> int:
    """Next nibble boundary strictly above the secret's bit length, plus one."""
    return secret_bit_length + (4 - secret_bit_length % 4) + 1


class Container:
    """
    Holds one split or one reconstruction.

    Not thread-safe: concurrent ``add_share`` calls on the same instance must
    be serialized by the caller.
    """

    def __init__(
        self,
        n: Union[int, str],
        k: Union[int, str, None] = None,
        prime_rounds: int = DEFAULT_PRIME_ROUNDS,
        prime_search_attempts: int = DEFAULT_PRIME_SEARCH_ATTEMPTS,
        secret_bit_length: int = DEFAULT_SECRET_BITLENGTH,
    ) -> None:
        """
        Args:
            n: Total number of shares to create (or accept).
            k: Shares needed to recover the secret; defaults to ``n``.
            prime_rounds: Miller-Rabin rounds used for the field prime.
            prime_search_attempts: Upper bound on prime candidates tried.
            secret_bit_length: Size of secrets made by ``generate_secret``.
        """
        self._n = coerce_int(n, "n")
        self._k = self._n if k is None else coerce_int(k, "k")
        validate_threshold(self._n, self._k)
        if prime_rounds < 1:
            raise ConfigurationError("prime_rounds must be positive")
        if prime_search_attempts < 1:
            raise ConfigurationError("prime_search_attempts must be positive")
        if not 1 <= secret_bit_length <= MAX_BITLENGTH:
            raise ConfigurationError(f"secret_bit_length must be within 1-{MAX_BITLENGTH}")
        self._prime_rounds = prime_rounds
        self._prime_search_attempts = prime_search_attempts
        self._secret_bit_length = secret_bit_length
        self._secret: Optional[Secret] = None
        self._shares: List[Share] = []
        self._state = ContainerState.EMPTY

    @classmethod
    def from_config(cls, config: SharingConfig) -> "Container":
        return cls(
            config.n,
            config.k,
            prime_rounds=config.prime_rounds,
            prime_search_attempts=config.prime_search_attempts,
            secret_bit_length=config.secret_bit_length,
        )

    @property
    def n(self) -> int:
        return self._n

    @property
    def k(self) -> int:
        return self._k

    @property
    def secret_bit_length(self) -> int:
        return self._secret_bit_length

    @property
    def state(self) -> ContainerState:
        return self._state

    @property
    def secret(self) -> Optional[Secret]:
        """The split or recovered secret; ``None`` until one is available."""
        return self._secret

    @property
    def has_secret(self) -> bool:
        return self._secret is not None

    @property
    def shares(self) -> Tuple[Share, ...]:
        return tuple(self._shares)

    def __len__(self) -> int:
        return len(self._shares)

    # Splitting

    def assign_secret(self, secret: Secret) -> Tuple[Share, ...]:
        """Set the secret once and derive ``n`` shares from it."""
        if self._secret is not None:
            raise SecretAlreadySetError("secret has already been set")
        if self._state is not ContainerState.EMPTY:
            raise ContainerStateError(f"Cannot assign a secret while {self._state.value}")
        if not isinstance(secret, Secret) or not secret.has_value():
            raise ConfigurationError("secret must be a Secret instance with a value")
        shares = self._create_shares(secret)
        self._secret = secret
        self._shares = shares
        self._state = ContainerState.SECRET_SET
        logger.info(
            "Split secret into %d shares (threshold %d)",
            self._n,
            self._k,
            extra={"n": self._n, "k": self._k, "state": self._state.value},
        )
        return tuple(shares)

    def generate_secret(self, bit_length: Optional[int] = None) -> Secret:
        """Create a random secret of ``bit_length`` bits (the configured size by default) and split it."""
        secret = Secret.random(self._secret_bit_length if bit_length is None else bit_length)
        self.assign_secret(secret)
        return secret

    def _create_shares(self, secret: Secret) -> List[Share]:
        # x runs up to n, so the field must also exceed n
        prime_bit_length = max(field_prime_bit_length(secret.bit_length), self._n.bit_length() + 1)
        prime = find_prime_at_least(
            prime_bit_length,
            rounds=self._prime_rounds,
            max_attempts=self._prime_search_attempts,
        )
        coefficients = random_coefficients(self._k, secret.value, secret.bit_length, prime=prime)
        return [
            Share(
                x=x,
                y=evaluate(x, coefficients, prime),
                prime=prime,
                prime_bit_length=prime_bit_length,
                k=self._k,
                n=self._n,
                integrity_tag=secret.integrity_tag,
            )
            for x in range(1, self._n + 1)
        ]

    # Combining

    def add_share(self, share: Union[Share, str]) -> Optional[Secret]:
        """
        Add one share toward reconstruction.

        Returns the recovered ``Secret`` once ``k`` consistent shares are
        present, otherwise ``None``. A rejected share leaves the container
        unchanged.
        """
        if self._state is ContainerState.SECRET_SET:
            raise ContainerStateError("Container holds a split secret and cannot accept shares")
        if isinstance(share, str):
            share = Share.from_string(share)
        elif not isinstance(share, Share):
            raise ShareFormatError(f"Expected a Share or share string, got {type(share).__name__}")
        if share.is_legacy:
            raise ShareFormatError("Legacy shares carry no integrity tag and cannot be combined")
        if len(self._shares) >= self._n:
            raise ShareQuotaError(f"Cannot add more than n={self._n} shares")
        if self._state is ContainerState.RECOVERED:
            raise AlreadyRecoveredError("Secret already recovered; no further shares are accepted")
        if share in self._shares:
            raise DuplicateShareError(f"Share x={share.x} was already added")
        self._check_batch(share)

        candidate = self._shares + [share]
        if len(candidate) < self._k:
            self._shares = candidate
            self._state = ContainerState.ACCUMULATING
            logger.debug(
                "Accepted share %d of %d",
                len(candidate),
                self._k,
                extra={"x": share.x, "k": self._k, "state": self._state.value},
            )
            return None

        secret = self._recover(candidate)
        self._shares = candidate
        self._secret = secret
        self._state = ContainerState.RECOVERED
        logger.info(
            "Recovered secret from %d shares",
            len(candidate),
            extra={"k": self._k, "n": self._n, "state": self._state.value},
        )
        return secret

    def _check_batch(self, share: Share) -> None:
        if not self._shares:
            return
        reference = self._shares[0]
        if any(existing.x == share.x for existing in self._shares):
            logger.warning("Rejected share x=%d: x coordinate already present", share.x, extra={"x": share.x})
            raise ShareMismatchError(f"A different share with x={share.x} was already added")
        if not tags_match(reference.integrity_tag, share.integrity_tag):
            logger.warning("Rejected share x=%d: integrity tag differs from batch", share.x, extra={"x": share.x})
            raise ShareMismatchError("Share mismatch. Not all Shares have a common integrity tag.")
        if share.prime != reference.prime:
            logger.warning("Rejected share x=%d: field prime differs from batch", share.x, extra={"x": share.x})
            raise ShareMismatchError("Share mismatch. Not all Shares use the same field prime.")

    def _recover(self, shares: Sequence[Share]) -> Secret:
        tags = {s.integrity_tag for s in shares}
        if len(tags) != 1:
            raise ShareMismatchError("Share mismatch. Not all Shares have a common integrity tag.")
        prime = shares[0].prime
        value = interpolate_at_zero([s.point for s in shares], prime)
        try:
            secret = Secret(value)
        except SecretBitLengthError as exc:
            raise RecoveryIntegrityError("Secret recovery failure. Reconstructed value is out of range.") from exc
        if not secret.has_valid_integrity_tag(shares[0].integrity_tag):
            logger.warning(
                "Reconstruction from %d shares failed the integrity check",
                len(shares),
                extra={"k": self._k},
            )
            raise RecoveryIntegrityError(
                "Secret recovery failure. The generated Secret does not match the integrity tag in the Shares provided."
            )
        return secret
