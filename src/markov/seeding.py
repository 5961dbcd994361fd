"""
Shared Random Source

Every chain draws from a single pseudo-random generator and asks it to seed
itself lazily, at most once, unless a reseed is forced. The generator and
its "seeded" flag live together in a SeedState object. Chains that are not
handed one explicitly share DEFAULT_SEED_STATE, which makes the state
process-wide; tests pass their own instance to control the sequence.

Warning:
    Nothing here is synchronized. Callers that generate text from several
    threads must serialize access themselves, e.g. one SeedState per
    thread or a lock around generation calls.
"""

import logging
import time
from typing import Optional

import numpy as np

from .config import DEFAULT_RANDOM_DEVICE

logger = logging.getLogger(__name__)

_SEED_BYTES = 8


def read_entropy(random_device: str = DEFAULT_RANDOM_DEVICE) -> int:
    """
    Get seed material from the system randomness device.

    Falls back to the current time, in whole seconds, when the device
    is missing or unreadable.

    Args:
        random_device: Path of the device (or any file) to read from

    Returns:
        A non-negative integer suitable for seeding numpy
    """
    try:
        with open(random_device, 'rb') as f:
            data = f.read(_SEED_BYTES)
    except OSError as e:
        logger.debug(f"Cannot read {random_device} ({e}), seeding from the clock")
        return int(time.time())

    if not data:
        logger.debug(f"{random_device} returned no data, seeding from the clock")
        return int(time.time())

    return int.from_bytes(data, 'little')


class SeedState:
    """
    A pseudo-random generator plus the flag recording whether it was seeded.

    Usage:
        state = SeedState()
        state.seed()            # seeds once
        state.seed()            # no-op
        state.seed(force=True)  # always reseeds
        index = state.randbelow(10)
    """

    def __init__(self, random_device: str = DEFAULT_RANDOM_DEVICE):
        self.random_device = random_device
        self._generator: Optional[np.random.Generator] = None
        self._seeded = False

    def is_seeded(self) -> bool:
        """Return True once the generator has been seeded."""
        return self._seeded

    def seed(self, force: bool = False, value: Optional[int] = None) -> None:
        """
        Seed the generator unless it was already seeded.

        Args:
            force: Reseed even if the generator has been seeded before
            value: Explicit seed; read from the random device when omitted
        """
        if self._seeded and not force:
            return

        if value is None:
            value = read_entropy(self.random_device)
        self._generator = np.random.default_rng(value)
        self._seeded = True
        logger.debug("Random generator seeded")

    def reset(self) -> None:
        """Forget the generator so the next draw seeds again."""
        self._generator = None
        self._seeded = False

    def randbelow(self, n: int) -> int:
        """Draw an integer uniformly from [0, n), seeding first if needed."""
        if n <= 0:
            raise ValueError(f"n must be >= 1, got {n}")
        self.seed()
        return int(self._generator.integers(n))


DEFAULT_SEED_STATE = SeedState()
