"""Segmentation of patterns at event boundaries."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import groupby
from typing import List, Sequence, Tuple, override

from cyclepat.arc import Arc, ArcLike, mk_arc
from cyclepat.common import CycleTime
from cyclepat.ev import Ev
from cyclepat.pattern import Pattern, filter_offsets

__all__ = [
    "SegmentPattern",
    "filter_offsets",
    "segment",
    "seq_to_rel_onsets",
    "split_events",
]


def event_points(events: Sequence[Ev[object]]) -> List[CycleTime]:
    """Distinct start and end times of the events, in first-seen order."""
    points: List[CycleTime] = []
    seen = set()
    for ev in events:
        for t in (ev.start, ev.end):
            if t not in seen:
                seen.add(t)
                points.append(t)
    return points


def split_events[T](events: Sequence[Ev[T]]) -> List[Ev[T]]:
    """Cut every event at each boundary point falling strictly inside it.

    Args:
        events: The events to split

    Returns:
        The pieces, with the pieces of each event kept in its original place
    """
    points = sorted(event_points(events))
    result: List[Ev[T]] = []
    for ev in events:
        start = ev.start
        for t in points:
            if start < t < ev.end:
                result.append(Ev(Arc(start, t), ev.val))
                start = t
        if start == ev.start:
            result.append(ev)
        else:
            result.append(Ev(Arc(start, ev.end), ev.val))
    return result


def group_by_arc[T](events: Sequence[Ev[T]]) -> List[Ev[List[T]]]:
    """Merge events with identical arcs into one event holding all values."""
    ordered = sorted(events, key=lambda ev: ev.arc)
    return [
        Ev(arc, [ev.val for ev in group])
        for arc, group in groupby(ordered, key=lambda ev: ev.arc)
    ]


@dataclass(frozen=True)
class SegmentPattern[T](Pattern[List[T]]):
    """Discretizes the source at all of its event boundaries.

    Each resulting event holds the values of every source event active
    during it.
    """

    source: Pattern[T]

    @override
    def query(self, arc: Arc) -> List[Ev[List[T]]]:
        grouped = group_by_arc(split_events(self.source.query(arc)))
        return [ev for ev in grouped if ev.start < arc.end and ev.end > arc.start]


def segment[T](pat: Pattern[T]) -> Pattern[List[T]]:
    return SegmentPattern(pat)


def seq_to_rel_onsets[T](arc: ArcLike, pat: Pattern[T]) -> List[Tuple[float, T]]:
    """Onsets of the events starting within an arc, relative to its width.

    Args:
        arc: The arc to query
        pat: The pattern to query

    Returns:
        ``(position, value)`` pairs with positions in [0, 1). Empty for an
        arc without width.
    """
    query_arc = mk_arc(arc)
    if query_arc.null():
        return []
    width = query_arc.length()
    return [
        (float((ev.start - query_arc.start) / width), ev.val)
        for ev in filter_offsets(pat).query(query_arc)
    ]
