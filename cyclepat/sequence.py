"""Combinators that play patterns one after another."""

from __future__ import annotations

from typing import Iterable, Optional

from cyclepat.pattern import Pattern, slowcat

__all__ = [
    "append",
    "append_slow",
    "cat",
    "fastcat",
    "list_to_pat",
    "maybe_list_to_pat",
    "palindrome",
    "run",
    "slowcat",
]


def cat[T](pats: Iterable[Pattern[T]]) -> Pattern[T]:
    """Play one cycle of each pattern, all squeezed into a single cycle.

    Args:
        pats: The patterns to concatenate

    Returns:
        The concatenated pattern
    """
    children = list(pats)
    return Pattern.slowcat(children).fast(len(children))


fastcat = cat


def append[T](first: Pattern[T], second: Pattern[T]) -> Pattern[T]:
    """Play both patterns within each cycle, first in the first half."""
    return cat([first, second])


def append_slow[T](first: Pattern[T], second: Pattern[T]) -> Pattern[T]:
    """Alternate whole cycles of the two patterns."""
    return cat([first, second]).slow(2)


def list_to_pat[T](vals: Iterable[T]) -> Pattern[T]:
    """Sequence the values evenly within each cycle.

    Args:
        vals: The values to sequence

    Returns:
        A pattern with one equal step per value
    """
    return cat([Pattern.pure(val) for val in vals])


def maybe_list_to_pat[T](vals: Iterable[Optional[T]]) -> Pattern[T]:
    """Like ``list_to_pat``, but ``None`` leaves its step silent."""
    return cat(
        [Pattern.silence() if val is None else Pattern.pure(val) for val in vals]
    )


def run(n: int) -> Pattern[int]:
    """Sequence the numbers ``0`` to ``n - 1`` within each cycle."""
    return list_to_pat(range(n))


def palindrome[T](pat: Pattern[T]) -> Pattern[T]:
    """Alternate cycles of the pattern played forwards and backwards."""
    return append_slow(pat, pat.rev())
