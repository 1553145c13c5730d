"""
Closed numeric ranges used to bound ray parameters and colour values.
"""

from __future__ import annotations
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Interval:
    """A range ``[min, max]`` of real numbers.

    The default interval is empty (``min > max``).
    """
    min: float = math.inf
    max: float = -math.inf

    def size(self) -> float:
        return self.max - self.min

    def contains(self, x: float) -> bool:
        """Inclusive containment: min <= x <= max."""
        return self.min <= x <= self.max

    def surrounds(self, x: float) -> bool:
        """Strict containment: min < x < max."""
        return self.min < x < self.max

    def clamp(self, x: float) -> float:
        """Pin ``x`` to the interval bounds."""
        if x < self.min:
            return self.min
        if x > self.max:
            return self.max
        return x


EMPTY = Interval(math.inf, -math.inf)
UNIVERSE = Interval(-math.inf, math.inf)
