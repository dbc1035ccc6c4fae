"""The Pattern query algebra.

A pattern is a deterministic function from a queried arc to the events
active in it. Every combinator below is a small frozen dataclass that
captures its inner patterns by reference and rewrites arcs on the way in
and on the way out of ``query``; nothing is materialized ahead of time.
"""

from __future__ import annotations

import logging
from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from fractions import Fraction
from math import ceil, floor
from typing import Callable, Iterable, List, Sequence, Tuple, override

from cyclepat.arc import (
    Arc,
    ArcLike,
    arc_cycles,
    is_in,
    map_arc,
    mirror_arc,
    mk_arc,
)
from cyclepat.common import (
    CycleDelta,
    CycleDeltaLike,
    CycleTime,
    Factor,
    Numeric,
    numeric_frac,
)
from cyclepat.ev import Ev
from cyclepat.printer import show

__all__ = [
    "Pattern",
    "atom",
    "bind",
    "combine",
    "constant",
    "continuous_signal",
    "density",
    "empty",
    "every",
    "fast",
    "filter_offsets",
    "fmap",
    "if_cycle",
    "map_query_arc",
    "map_query_time",
    "map_result_arc",
    "map_result_time",
    "overlay",
    "pure",
    "query",
    "rev",
    "shift_left",
    "shift_right",
    "sig",
    "silence",
    "slow",
    "slowcat",
    "stack",
    "when_cycle",
]

logger = logging.getLogger(__name__)

type Transform[T] = Callable[[Pattern[T]], Pattern[T]]
"""A function from pattern to pattern, as taken by the conditional combinators."""

type CyclePredicate = Callable[[int], bool]
"""A test on an integer cycle number."""


# sealed
class Pattern[T](metaclass=ABCMeta):
    """A value that produces timed events for any queried arc."""

    @abstractmethod
    def query(self, arc: Arc) -> List[Ev[T]]:
        """Produce the events active during the given arc.

        Args:
            arc: The time arc to query

        Returns:
            The events, in the order the pattern produces them
        """
        raise NotImplementedError

    @override
    def __str__(self) -> str:
        return show(self)

    @staticmethod
    def silence() -> Pattern[T]:
        """Create a pattern with no events.

        Returns:
            The silent pattern
        """
        return _SILENCE

    @staticmethod
    def pure(val: T) -> Pattern[T]:
        """Create a pattern repeating ``val`` once per cycle.

        Args:
            val: The value of every event

        Returns:
            A pattern with one whole-cycle event per cycle
        """
        return PurePattern(val)

    @staticmethod
    def sig(fn: Callable[[CycleTime], T]) -> Pattern[T]:
        """Create a continuous pattern sampling ``fn`` at each query start.

        Args:
            fn: The function of time to sample

        Returns:
            A continuous pattern
        """
        return SignalPattern(fn)

    @staticmethod
    def stack(pats: Iterable[Pattern[T]]) -> Pattern[T]:
        """Play all patterns at once.

        Args:
            pats: The patterns to combine

        Returns:
            The right fold of ``overlay`` over the patterns, ending in silence
        """
        out: Pattern[T] = _SILENCE
        for pat in reversed(list(pats)):
            out = OverlayPattern(pat, out)
        return out

    @staticmethod
    def slowcat(pats: Iterable[Pattern[T]]) -> Pattern[T]:
        """Play one cycle of each pattern in turn, one pattern per cycle.

        Args:
            pats: The patterns to alternate between

        Returns:
            A pattern cycling through the given patterns
        """
        children = tuple(pats)
        if len(children) == 0:
            return _SILENCE
        return SlowcatPattern(children)

    def map[U](self, fn: Callable[[T], U]) -> Pattern[U]:
        """Transform every event value, leaving arcs unchanged.

        Args:
            fn: The function to apply to each value

        Returns:
            A new pattern with transformed values
        """
        return MapPattern(self, fn)

    def combine[A, B](self: Pattern[Callable[[A], B]], other: Pattern[A]) -> Pattern[B]:
        """Apply a pattern of functions to a pattern of values.

        Each function event is matched with the value events of ``other``
        that are active at its start instant. The function event's arc is
        kept. Function events with no match produce nothing.

        Args:
            other: The pattern of arguments

        Returns:
            A pattern of results
        """
        return CombinePattern(self, other)

    def bind[U](self, fn: Callable[[T], Pattern[U]]) -> Pattern[U]:
        """Replace each event with the pattern built from its value.

        The inner pattern is queried over the outer event's arc and sampled
        at its start; the outer arc replaces the arc of every surviving
        inner event.

        Args:
            fn: Function from each value to a pattern

        Returns:
            The collapsed pattern
        """
        return BindPattern(self, fn)

    def overlay(self, other: Pattern[T]) -> Pattern[T]:
        """Play this pattern and ``other`` at the same time.

        Args:
            other: The pattern to overlay

        Returns:
            A pattern producing this pattern's events followed by the other's
        """
        return OverlayPattern(self, other)

    def map_query_arc(self, fn: Callable[[Arc], Arc]) -> Pattern[T]:
        return QueryArcPattern(self, fn)

    def map_query_time(self, fn: Callable[[CycleTime], CycleTime]) -> Pattern[T]:
        return QueryArcPattern(self, _lift_time(fn))

    def map_result_arc(self, fn: Callable[[Arc], Arc]) -> Pattern[T]:
        return ResultArcPattern(self, fn)

    def map_result_time(self, fn: Callable[[CycleTime], CycleTime]) -> Pattern[T]:
        return ResultArcPattern(self, _lift_time(fn))

    def fast(self, factor: Numeric) -> Pattern[T]:
        """Speed the pattern up by ``factor``.

        A factor of 0 or 1 leaves the pattern unchanged.

        Args:
            factor: The speed factor

        Returns:
            The faster pattern
        """
        r = Factor(numeric_frac(factor))
        if r == 0 or r == 1:
            if r == 0:
                logger.debug("Density of zero treated as identity")
            return self
        return self.map_query_time(lambda t: CycleTime(t * r)).map_result_time(
            lambda t: CycleTime(t / r)
        )

    def density(self, factor: Numeric) -> Pattern[T]:
        return self.fast(factor)

    def slow(self, factor: Numeric) -> Pattern[T]:
        """Slow the pattern down by ``factor``.

        A factor of 0 leaves the pattern unchanged.

        Args:
            factor: The slow-down factor

        Returns:
            The slower pattern
        """
        r = numeric_frac(factor)
        if r == 0:
            logger.debug("Slow of zero treated as identity")
            return self
        return self.fast(1 / r)

    def shift_left(self, delta: CycleDeltaLike) -> Pattern[T]:
        """Query ``delta`` cycles earlier and move the results ``delta`` later.

        Events land ``delta`` cycles later than in the source. Events that
        would start before a queried arc are dropped from it.

        Args:
            delta: The amount to shift by

        Returns:
            The shifted pattern
        """
        t = CycleDelta(numeric_frac(delta))
        return (
            self.map_query_time(lambda x: CycleTime(x - t))
            .map_result_time(lambda x: CycleTime(x + t))
            .filter_offsets()
        )

    def shift_right(self, delta: CycleDeltaLike) -> Pattern[T]:
        """Inverse of ``shift_left``: events land ``delta`` cycles earlier."""
        return self.shift_left(-numeric_frac(delta))

    def rev(self) -> Pattern[T]:
        """Reverse the order of events within every cycle."""
        return RevPattern(self)

    def filter_offsets(self) -> Pattern[T]:
        """Drop events that start before the queried arc."""
        return FilterOffsetsPattern(self)

    def when_cycle(self, predicate: CyclePredicate, fn: Transform[T]) -> Pattern[T]:
        """Apply ``fn`` only in the cycles whose number passes ``predicate``.

        Args:
            predicate: Test on the cycle number
            fn: The transformation to apply in matching cycles

        Returns:
            The conditionally transformed pattern
        """
        return CycleBranchPattern(predicate, fn(self), self)

    def every(self, n: int, fn: Transform[T]) -> Pattern[T]:
        """Apply ``fn`` every ``n`` cycles, starting at cycle 0.

        ``n == 0`` leaves the pattern unchanged.

        Args:
            n: The period in cycles
            fn: The transformation to apply

        Returns:
            The conditionally transformed pattern
        """
        if n == 0:
            logger.debug("every(0) treated as identity")
            return self
        return self.when_cycle(lambda c: c % n == 0, fn)

    def if_cycle(
        self, predicate: CyclePredicate, on_true: Transform[T], on_false: Transform[T]
    ) -> Pattern[T]:
        """Choose between two transformations cycle by cycle.

        Args:
            predicate: Test on the cycle number
            on_true: Applied in cycles passing the test
            on_false: Applied in all other cycles

        Returns:
            The branching pattern
        """
        return CycleBranchPattern(predicate, on_true(self), on_false(self))


def _lift_time(fn: Callable[[CycleTime], CycleTime]) -> Callable[[Arc], Arc]:
    def wrapper(arc: Arc) -> Arc:
        return map_arc(fn, arc)

    return wrapper


@dataclass(frozen=True)
class SilentPattern[T](Pattern[T]):
    """Pattern without events."""

    @override
    def query(self, arc: Arc) -> List[Ev[T]]:
        return []


_SILENCE: SilentPattern = SilentPattern()


@dataclass(frozen=True)
class PurePattern[T](Pattern[T]):
    """One event per cycle touched by the query, each spanning its cycle."""

    val: T

    @override
    def query(self, arc: Arc) -> List[Ev[T]]:
        return [
            Ev(Arc.cycle(cyc), self.val)
            for cyc in range(floor(arc.start), ceil(arc.end))
        ]


@dataclass(frozen=True)
class SignalPattern[T](Pattern[T]):
    """Continuous pattern: one event spanning the query, sampled at its start."""

    fn: Callable[[CycleTime], T]

    @override
    def query(self, arc: Arc) -> List[Ev[T]]:
        if arc.start > arc.end:
            return []
        return [Ev(arc, self.fn(arc.start))]


@dataclass(frozen=True)
class MapPattern[T, U](Pattern[U]):
    source: Pattern[T]
    fn: Callable[[T], U]

    @override
    def query(self, arc: Arc) -> List[Ev[U]]:
        return [ev.map_val(self.fn) for ev in self.source.query(arc)]


@dataclass(frozen=True)
class CombinePattern[A, B](Pattern[B]):
    """Applies function events to the value events active at their starts."""

    funcs: Pattern[Callable[[A], B]]
    source: Pattern[A]

    @override
    def query(self, arc: Arc) -> List[Ev[B]]:
        result: List[Ev[B]] = []
        for fn_ev in self.funcs.query(arc):
            for val_ev in self.source.query(fn_ev.arc):
                if is_in(val_ev.arc, fn_ev.start):
                    result.append(Ev(fn_ev.arc, fn_ev.val(val_ev.val)))
        return result


@dataclass(frozen=True)
class BindPattern[T, U](Pattern[U]):
    """Collapses a pattern of patterns; the outer event's arc always wins."""

    source: Pattern[T]
    fn: Callable[[T], Pattern[U]]

    @override
    def query(self, arc: Arc) -> List[Ev[U]]:
        result: List[Ev[U]] = []
        for outer in self.source.query(arc):
            inner_pat = self.fn(outer.val)
            for inner in inner_pat.query(outer.arc):
                if is_in(inner.arc, outer.start):
                    result.append(Ev(outer.arc, inner.val))
        return result


@dataclass(frozen=True)
class OverlayPattern[T](Pattern[T]):
    left: Pattern[T]
    right: Pattern[T]

    @override
    def query(self, arc: Arc) -> List[Ev[T]]:
        return self.left.query(arc) + self.right.query(arc)


@dataclass(frozen=True)
class QueryArcPattern[T](Pattern[T]):
    """Rewrites the queried arc before delegating."""

    source: Pattern[T]
    fn: Callable[[Arc], Arc]

    @override
    def query(self, arc: Arc) -> List[Ev[T]]:
        return self.source.query(self.fn(arc))


@dataclass(frozen=True)
class ResultArcPattern[T](Pattern[T]):
    """Rewrites the arc of every produced event."""

    source: Pattern[T]
    fn: Callable[[Arc], Arc]

    @override
    def query(self, arc: Arc) -> List[Ev[T]]:
        return [ev.map_arc(self.fn) for ev in self.source.query(arc)]


@dataclass(frozen=True)
class FilterOffsetsPattern[T](Pattern[T]):
    source: Pattern[T]

    @override
    def query(self, arc: Arc) -> List[Ev[T]]:
        return [ev for ev in self.source.query(arc) if ev.start >= arc.start]


@dataclass(frozen=True)
class RevPattern[T](Pattern[T]):
    """Mirrors each cycle of the source pattern independently."""

    source: Pattern[T]

    @override
    def query(self, arc: Arc) -> List[Ev[T]]:
        result: List[Ev[T]] = []
        for cycle_arc in arc_cycles(arc):
            for ev in self.source.query(mirror_arc(cycle_arc)):
                result.append(ev.map_arc(mirror_arc))
        return result


@dataclass(frozen=True)
class CycleBranchPattern[T](Pattern[T]):
    """Chooses a pattern per whole cycle from a test on the cycle number."""

    predicate: CyclePredicate
    on_true: Pattern[T]
    on_false: Pattern[T]

    @override
    def query(self, arc: Arc) -> List[Ev[T]]:
        result: List[Ev[T]] = []
        for cycle_arc in arc_cycles(arc):
            if self.predicate(floor(cycle_arc.start)):
                result.extend(self.on_true.query(cycle_arc))
            else:
                result.extend(self.on_false.query(cycle_arc))
        return result


@dataclass(frozen=True)
class SlowcatPattern[T](Pattern[T]):
    """Plays the children in turn, one per cycle.

    Each child keeps its own timeline: the child selected at global cycle
    ``r`` plays its cycle ``(r - n) // len(children)``, where ``n`` is its
    index.
    """

    children: Tuple[Pattern[T], ...]

    @override
    def query(self, arc: Arc) -> List[Ev[T]]:
        size = len(self.children)
        result: List[Ev[T]] = []
        for cycle_arc in arc_cycles(arc):
            cyc = floor(cycle_arc.start)
            n = cyc % size
            offset = CycleDelta(Fraction(cyc - (cyc - n) // size))
            child = self.children[n]
            for ev in child.query(cycle_arc.shift(CycleDelta(-offset))):
                result.append(ev.shift(offset))
        return result


def query[T](pat: Pattern[T], arc: ArcLike) -> List[Ev[T]]:
    """Query a pattern with an Arc or a (start, end) pair.

    Args:
        pat: The pattern to query
        arc: The arc to query

    Returns:
        The events active during the arc
    """
    return pat.query(mk_arc(arc))


def silence() -> Pattern:
    return _SILENCE


empty = silence


def pure[T](val: T) -> Pattern[T]:
    return PurePattern(val)


constant = pure
atom = pure


def sig[T](fn: Callable[[CycleTime], T]) -> Pattern[T]:
    return SignalPattern(fn)


continuous_signal = sig


def fmap[T, U](fn: Callable[[T], U], pat: Pattern[T]) -> Pattern[U]:
    return pat.map(fn)


def combine[A, B](
    funcs: Pattern[Callable[[A], B]], pat: Pattern[A]
) -> Pattern[B]:
    return funcs.combine(pat)


def bind[T, U](pat: Pattern[T], fn: Callable[[T], Pattern[U]]) -> Pattern[U]:
    return pat.bind(fn)


def overlay[T](left: Pattern[T], right: Pattern[T]) -> Pattern[T]:
    return left.overlay(right)


def stack[T](pats: Iterable[Pattern[T]]) -> Pattern[T]:
    return Pattern.stack(pats)


def slowcat[T](pats: Sequence[Pattern[T]]) -> Pattern[T]:
    return Pattern.slowcat(pats)


def map_query_arc[T](fn: Callable[[Arc], Arc], pat: Pattern[T]) -> Pattern[T]:
    return pat.map_query_arc(fn)


def map_query_time[T](
    fn: Callable[[CycleTime], CycleTime], pat: Pattern[T]
) -> Pattern[T]:
    return pat.map_query_time(fn)


def map_result_arc[T](fn: Callable[[Arc], Arc], pat: Pattern[T]) -> Pattern[T]:
    return pat.map_result_arc(fn)


def map_result_time[T](
    fn: Callable[[CycleTime], CycleTime], pat: Pattern[T]
) -> Pattern[T]:
    return pat.map_result_time(fn)


def density[T](factor: Numeric, pat: Pattern[T]) -> Pattern[T]:
    return pat.fast(factor)


fast = density


def slow[T](factor: Numeric, pat: Pattern[T]) -> Pattern[T]:
    return pat.slow(factor)


def shift_left[T](delta: CycleDeltaLike, pat: Pattern[T]) -> Pattern[T]:
    return pat.shift_left(delta)


def shift_right[T](delta: CycleDeltaLike, pat: Pattern[T]) -> Pattern[T]:
    return pat.shift_right(delta)


def rev[T](pat: Pattern[T]) -> Pattern[T]:
    return pat.rev()


def filter_offsets[T](pat: Pattern[T]) -> Pattern[T]:
    return pat.filter_offsets()


def when_cycle[T](
    predicate: CyclePredicate, fn: Transform[T], pat: Pattern[T]
) -> Pattern[T]:
    return pat.when_cycle(predicate, fn)


def every[T](n: int, fn: Transform[T], pat: Pattern[T]) -> Pattern[T]:
    return pat.every(n, fn)


def if_cycle[T](
    predicate: CyclePredicate,
    on_true: Transform[T],
    on_false: Transform[T],
    pat: Pattern[T],
) -> Pattern[T]:
    return pat.if_cycle(predicate, on_true, on_false)
