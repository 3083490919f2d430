"""
random_source.py - Uniform random integers for password generation

The secure source draws a 32-bit value from the operating system CSPRNG and
reduces it modulo the bound. For bounds that do not divide 2**32 this has a
modulo bias of at most bound / 2**32, which is below 2.1e-8 for the pool
sizes used here (90 characters or fewer). It is accepted rather than removed
with rejection sampling.
"""
import logging
import random
import secrets
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)


class RandomSource(ABC):
    """Supplies uniformly distributed integers in [0, bound)"""

    is_secure = False

    @abstractmethod
    def next_int(self, bound: int) -> int:
        """Return an integer in [0, bound)"""

    @staticmethod
    def _check_bound(bound: int) -> None:
        if bound < 1:
            raise ValueError(f"bound must be a positive integer, got {bound}")


class SecureRandomSource(RandomSource):
    """Cryptographically secure source backed by the OS (via secrets)"""

    is_secure = True

    def next_int(self, bound: int) -> int:
        self._check_bound(bound)
        return secrets.randbits(32) % bound


class FallbackRandomSource(RandomSource):
    """
    Non-cryptographic source scaling random() into [0, bound).

    Only used when the system offers no secure generator. Passwords produced
    with it are predictable to anyone who can recover the generator state.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def next_int(self, bound: int) -> int:
        self._check_bound(bound)
        return int(self._rng.random() * bound)


class SeededRandomSource(FallbackRandomSource):
    """Deterministic source for tests and reproducible output"""

    def __init__(self, seed: int = 0):
        super().__init__(random.Random(seed))


_default: Optional[RandomSource] = None


def secure_generator_available() -> bool:
    """Check whether the OS entropy source can be read"""
    try:
        secrets.randbits(32)
    except NotImplementedError:
        return False
    return True


def default_source() -> RandomSource:
    """
    Get the process-wide random source.

    Prefers SecureRandomSource. If the OS has no entropy source, returns a
    FallbackRandomSource and logs a warning the first time.
    """
    global _default
    if _default is None:
        if secure_generator_available():
            _default = SecureRandomSource()
        else:
            logger.warning(
                "No secure random generator available; falling back to a "
                "non-cryptographic generator. Generated passwords are weaker."
            )
            _default = FallbackRandomSource()
    return _default


def reset_default_source() -> None:
    """Forget the cached source so the next call probes again"""
    global _default
    _default = None
