"""
Seeded random stream for board generation.

Uses the mulberry32 generator with every intermediate value masked to
32 bits, so a seed produces the same sequence on any platform and in
any language that implements the same steps.
"""

# ============================================================================
# Constants
# ============================================================================

MASK_32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_FLOAT_SCALE = 4294967296.0  # 2 ** 32


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply."""
    return (a * b) & MASK_32


# ============================================================================
# Generator
# ============================================================================

class SeededRandom:
    """
    Deterministic pseudo-random stream.

    Attributes:
        seed: The seed the stream was created with.
    """

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._state = seed & MASK_32

    def next(self) -> int:
        """Advance one step and return an unsigned 32-bit integer."""
        self._state = (self._state + _INCREMENT) & MASK_32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK_32
        return (t ^ (t >> 14)) & MASK_32

    def next_float(self) -> float:
        """Return a float in [0, 1)."""
        return self.next() / _FLOAT_SCALE

    def next_in_range(self, lo: int, hi: int) -> int:
        """
        Return an integer in the half-open range [lo, hi).

        Raises:
            ValueError: If the range is empty.
        """
        if hi <= lo:
            raise ValueError(f"Empty range [{lo}, {hi})")
        return lo + int(self.next_float() * (hi - lo))
