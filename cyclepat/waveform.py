"""Continuous waveform and pseudo-random patterns.

Every generator here is continuous: a query returns a single event spanning
the whole queried arc, valued at the arc's start. Waveforms have a period of
one cycle. The ``*1`` variants range over [0, 1], the others over [-1, 1],
and the ``*_rat`` variants carry the same values as exact fractions so they
can be used as time offsets.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from math import floor
from typing import List, Optional, override

import numpy as np

from cyclepat.arc import Arc, cycle_pos, mid_point
from cyclepat.common import CycleTime
from cyclepat.config import DEFAULT_RAND_SCALE, Config, get_config
from cyclepat.ev import Ev
from cyclepat.pattern import Pattern
from cyclepat.sequence import append

__all__ = [
    "RandPattern",
    "configured_rand",
    "rand",
    "ratsine",
    "saw",
    "saw1",
    "saw_rat",
    "saw_rat1",
    "sine",
    "sine1",
    "sine_amp1",
    "sine_rat",
    "sine_rat1",
    "square",
    "square1",
    "tri",
    "tri1",
    "tri_rat",
    "tri_rat1",
]

TAU = np.float64(2 * np.pi)

_SEED_MODULUS = 2**64


def _bipolar(x: float) -> float:
    return x * 2 - 1


def _unipolar(x: float) -> float:
    return (x + 1) / 2


def _sine_at(t: CycleTime) -> float:
    return float(np.sin(TAU * np.float64(t)))


def _saw_at(t: CycleTime) -> float:
    return float(cycle_pos(t))


def _square_at(t: CycleTime) -> float:
    return float(floor(cycle_pos(t) * 2))


def rand_seed(arc: Arc, scale: int) -> int:
    """Derive a generator seed from the midpoint of an arc.

    Negative seeds wrap into the unsigned 64-bit range.

    Args:
        arc: The queried arc
        scale: Multiplier applied to the midpoint before truncation

    Returns:
        A non-negative integer seed
    """
    return floor(mid_point(arc) * scale) % _SEED_MODULUS


def rand_value(seed: int) -> float:
    """Draw the first double from a Mersenne Twister seeded with ``seed``."""
    gen = np.random.Generator(np.random.MT19937(seed))
    return float(gen.random())


@dataclass(frozen=True)
class RandPattern(Pattern[float]):
    """Continuous pseudo-random values in [0, 1).

    The value depends only on the queried arc, so the same arc always yields
    the same value and no shared random state is advanced.

    Args:
        scale: Seed multiplier applied to the arc midpoint
    """

    scale: int = DEFAULT_RAND_SCALE

    @override
    def query(self, arc: Arc) -> List[Ev[float]]:
        if arc.start > arc.end:
            return []
        return [Ev(arc, rand_value(rand_seed(arc, self.scale)))]


sine: Pattern[float] = Pattern.sig(_sine_at)
sine1: Pattern[float] = sine.map(_unipolar)
sine_rat: Pattern[Fraction] = sine.map(Fraction)
sine_rat1: Pattern[Fraction] = sine1.map(Fraction)
ratsine = sine_rat


def sine_amp1(offset: float) -> Pattern[float]:
    """``sine1`` with ``offset`` added to every value."""
    return sine1.map(lambda x: x + offset)


saw1: Pattern[float] = Pattern.sig(_saw_at)
saw: Pattern[float] = saw1.map(_bipolar)
saw_rat: Pattern[Fraction] = saw.map(Fraction)
saw_rat1: Pattern[Fraction] = saw1.map(Fraction)

tri1: Pattern[float] = append(saw1, saw1.rev())
tri: Pattern[float] = tri1.map(_bipolar)
tri_rat: Pattern[Fraction] = tri.map(Fraction)
tri_rat1: Pattern[Fraction] = tri1.map(Fraction)

square1: Pattern[float] = Pattern.sig(_square_at)
square: Pattern[float] = square1.map(_bipolar)

rand: Pattern[float] = RandPattern()


def configured_rand(config: Optional[Config] = None) -> RandPattern:
    """Build ``rand`` with the seed multiplier from the configuration.

    Args:
        config: Configuration to read, defaults to ``get_config()``

    Returns:
        A random pattern using ``config.rand_scale``
    """
    config = config or get_config()
    return RandPattern(config.rand_scale)
