"""Debug rendering of queried events."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Optional

from cyclepat.arc import Arc, ArcLike, mk_arc
from cyclepat.common import CycleTime, format_fraction
from cyclepat.config import ConfigError, get_config
from cyclepat.ev import Ev

if TYPE_CHECKING:
    from cyclepat.pattern import Pattern

logger = logging.getLogger(__name__)


def render_arc(arc: Arc) -> str:
    """Render an arc as ``(start, end)`` using ``n%d`` fractions."""
    return f"({format_fraction(arc.start)}, {format_fraction(arc.end)})"


def render_event(ev: Ev[Any]) -> str:
    return f"{render_arc(ev.arc)} {ev.val!r}"


def render_events(events: Iterable[Ev[Any]]) -> str:
    """Render events as a bracketed, comma separated list.

    Args:
        events: The events to render, in order

    Returns:
        String such as ``[(0, 1%2) 'a', (1%2, 1) 'b']``
    """
    return "[" + ", ".join(render_event(ev) for ev in events) + "]"


def _default_show_arc() -> Arc:
    try:
        config = get_config()
    except ConfigError as e:
        logger.warning("Rendering the first cycle: %s", e)
        return Arc.cycle(0)
    return Arc(CycleTime(config.show_start), CycleTime(config.show_end))


def show(pat: Pattern[Any], arc: Optional[ArcLike] = None) -> str:
    """Render the events a pattern produces for an inspection arc.

    Args:
        pat: The pattern to inspect
        arc: The arc to query, defaults to the configured show arc, or to
            the first cycle when the configuration cannot be read

    Returns:
        The rendered events
    """
    if arc is None:
        query_arc = _default_show_arc()
    else:
        query_arc = mk_arc(arc)
    events = pat.query(query_arc)
    logger.debug("Rendering %d events for %s", len(events), render_arc(query_arc))
    return render_events(events)
