"""Event type for representing timed values in cyclepat patterns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from cyclepat.arc import Arc, is_in, map_arc
from cyclepat.common import CycleDelta, CycleTime


@dataclass(frozen=True)
class Ev[T]:
    """A value active during an arc.

    Args:
        arc: The time interval of the event
        val: The value of the event
    """

    arc: Arc
    val: T

    @property
    def start(self) -> CycleTime:
        return self.arc.start

    @property
    def end(self) -> CycleTime:
        return self.arc.end

    def active_at(self, t: CycleTime) -> bool:
        """Check whether the event is active at the instant ``t``."""
        return is_in(self.arc, t)

    def with_arc(self, arc: Arc) -> Ev[T]:
        return Ev(arc, self.val)

    def map_arc(self, fn: Callable[[Arc], Arc]) -> Ev[T]:
        return Ev(fn(self.arc), self.val)

    def map_time(self, fn: Callable[[CycleTime], CycleTime]) -> Ev[T]:
        return Ev(map_arc(fn, self.arc), self.val)

    def map_val[U](self, fn: Callable[[T], U]) -> Ev[U]:
        return Ev(self.arc, fn(self.val))

    def shift(self, delta: CycleDelta) -> Ev[T]:
        """Shift the event by a time delta.

        Args:
            delta: The amount to shift by

        Returns:
            A new event shifted by the delta
        """
        return Ev(self.arc.shift(delta), self.val)
