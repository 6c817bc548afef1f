from typing import Optional

import numpy as np

from .errors import RandomSourceUnavailable

class DRNG:
    """Deterministic Random Number Generator wrapper."""

    def __init__(self, seed: Optional[int] = None):
        try:
            self.g = np.random.Generator(np.random.PCG64(seed))
        except (TypeError, ValueError) as e:
            raise RandomSourceUnavailable(f"Cannot seed random source with {seed!r}") from e

    def randint(self, low: int, high: int) -> int:
        """Return an integer in [low, high)."""
        return int(self.g.integers(low, high))
