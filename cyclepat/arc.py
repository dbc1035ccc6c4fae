"""Cyclic time arithmetic and the Arc interval type."""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from math import floor
from typing import Callable, Iterator, List, Optional, Tuple, Union

from cyclepat.common import (
    CycleDelta,
    CycleTime,
    CycleTimeLike,
    Numeric,
    mk_cycle_time,
    numeric_frac,
)


def sam(t: CycleTime) -> CycleTime:
    """The start of the cycle containing ``t`` (its floor)."""
    return CycleTime(Fraction(floor(t)))


def next_sam(t: CycleTime) -> CycleTime:
    """The start of the cycle after the one containing ``t``."""
    return CycleTime(sam(t) + 1)


def cycle_pos(t: CycleTime) -> CycleTime:
    """The position of ``t`` relative to the start of its cycle, in [0, 1)."""
    return CycleTime(t - sam(t))


@dataclass(frozen=True, order=True)
class Arc:
    """A half-open time interval ``[start, end)``.

    An arc with ``start > end`` is degenerate; it only arises from
    mirroring and always yields empty query results.

    Args:
        _start: The start time
        _end: The end time
    """

    _start: CycleTime
    _end: CycleTime

    @property
    def start(self) -> CycleTime:
        return self._start

    @property
    def end(self) -> CycleTime:
        return self._end

    @staticmethod
    def mk(start: CycleTimeLike, end: CycleTimeLike) -> Arc:
        """Create an arc from any numeric start and end.

        Args:
            start: The start time
            end: The end time

        Returns:
            A new arc
        """
        return Arc(mk_cycle_time(start), mk_cycle_time(end))

    @staticmethod
    def cycle(cyc: int) -> Arc:
        """Create an arc spanning exactly cycle ``cyc``."""
        return Arc(CycleTime(Fraction(cyc)), CycleTime(Fraction(cyc + 1)))

    def length(self) -> CycleDelta:
        return CycleDelta(self._end - self._start)

    def null(self) -> bool:
        """Check if the arc covers no time (start >= end)."""
        return self._start >= self._end

    def shift(self, delta: CycleDelta) -> Arc:
        if delta == 0:
            return self
        return Arc(CycleTime(self._start + delta), CycleTime(self._end + delta))

    def scale(self, factor: Fraction) -> Arc:
        if factor == 1:
            return self
        return Arc(CycleTime(self._start * factor), CycleTime(self._end * factor))

    def contains(self, t: CycleTime) -> bool:
        return is_in(self, t)

    def cycles(self) -> List[Arc]:
        return arc_cycles(self)

    def intersect(self, other: Arc) -> Optional[Arc]:
        return sub_arc(self, other)

    def mirror(self) -> Arc:
        return mirror_arc(self)

    def mid_point(self) -> CycleTime:
        return mid_point(self)

    def with_time(self, fn: Callable[[CycleTime], CycleTime]) -> Arc:
        return map_arc(fn, self)


type ArcLike = Union[Arc, Tuple[Numeric, Numeric]]
"""An Arc, or a (start, end) pair of numerics."""


def mk_arc(arc: ArcLike) -> Arc:
    """Coerce an arc-like value into an Arc.

    Raises:
        ValueError: If the endpoints are not numeric
    """
    if isinstance(arc, Arc):
        return arc
    start, end = arc
    return Arc(CycleTime(numeric_frac(start)), CycleTime(numeric_frac(end)))


def is_in(arc: Arc, t: CycleTime) -> bool:
    """Check whether ``t`` lies inside ``[arc.start, arc.end)``."""
    return arc.start <= t < arc.end


def arc_cycles(arc: Arc) -> List[Arc]:
    """Split an arc at every cycle boundary it crosses.

    Args:
        arc: The arc to split

    Returns:
        Sub-arcs in order, each confined to a single cycle. Empty if the arc
        is null.
    """
    return list(iter_arc_cycles(arc))


def iter_arc_cycles(arc: Arc) -> Iterator[Arc]:
    start = arc.start
    end = arc.end
    while start < end:
        if sam(start) == sam(end):
            yield Arc(start, end)
            return
        boundary = next_sam(start)
        yield Arc(start, boundary)
        start = boundary


def sub_arc(a: Arc, b: Arc) -> Optional[Arc]:
    """The intersection of two arcs, or None if it has no width."""
    start = max(a.start, b.start)
    end = min(a.end, b.end)
    if start < end:
        return Arc(start, end)
    else:
        return None


def map_arc(fn: Callable[[CycleTime], CycleTime], arc: Arc) -> Arc:
    """Apply ``fn`` to both endpoints of ``arc``."""
    return Arc(fn(arc.start), fn(arc.end))


def mirror_arc(arc: Arc) -> Arc:
    """Reflect an arc within the cycle containing its start.

    The result may be degenerate when the arc reaches past its cycle.
    """
    s, e = arc.start, arc.end
    cyc = sam(s)
    nxt = next_sam(s)
    return Arc(CycleTime(cyc + (nxt - e)), CycleTime(nxt - (s - cyc)))


def mid_point(arc: Arc) -> CycleTime:
    return CycleTime(arc.start + (arc.end - arc.start) / 2)
