"""Park-Miller minimal standard pseudo-random number generator."""

from __future__ import annotations

_UINT64 = (1 << 64) - 1


def do_rand(ctx: int) -> int:
    """Return the value that follows state ``ctx``; it is also the next state.

    Computes ``(7**5 * x) mod (2**31 - 1)`` with Schrage's method, giving
    a result in ``[0, 0x7ffffffd]``.
    """
    x = ((ctx & _UINT64) % 0x7FFFFFFE) + 1
    hi, lo = divmod(x, 127773)
    x = 16807 * lo - 2836 * hi
    if x < 0:
        x += 0x7FFFFFFF
    return x - 1


class ParkMiller:
    """Stateful generator built on :func:`do_rand`."""

    def __init__(self, seed: int = 1) -> None:
        self.state = seed & _UINT64

    def next(self) -> int:
        """Advance the generator and return the new value."""
        self.state = do_rand(self.state)
        return self.state