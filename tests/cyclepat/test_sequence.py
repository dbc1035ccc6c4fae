from fractions import Fraction
from typing import List, Tuple

from cyclepat import sequence
from cyclepat.arc import Arc
from cyclepat.pattern import Pattern, pure, silence, slow, slowcat
from cyclepat.sequence import (
    append,
    append_slow,
    cat,
    fastcat,
    list_to_pat,
    maybe_list_to_pat,
    palindrome,
    run,
)


def timeline[T](pat: Pattern[T], start: int, end: int) -> List[Tuple[Fraction, Fraction, T]]:
    """Query and sort events by start time."""
    events = pat.query(Arc.mk(start, end))
    return sorted((ev.start, ev.end, ev.val) for ev in events)


def test_slowcat_single_is_identity() -> None:
    """Test a one-pattern slowcat plays that pattern unchanged."""
    pat = list_to_pat(["a", "b", "c"])
    arc = Arc.mk(Fraction(-3, 2), Fraction(7, 3))
    assert slowcat([pat]).query(arc) == pat.query(arc)


def test_slowcat_empty_is_silence() -> None:
    """Test an empty slowcat has no events."""
    assert slowcat([]).query(Arc.mk(0, 4)) == []


def test_slowcat_alternates_cycles() -> None:
    """Test one pattern per cycle, in turn."""
    pat = slowcat([pure("a"), pure("b"), pure("c")])
    assert [ev.val for ev in pat.query(Arc.mk(0, 6))] == ["a", "b", "c"] * 2


def test_slowcat_children_keep_own_timeline() -> None:
    """Test each child advances through its own cycles."""
    two_cycles = slow(2, list_to_pat(["x", "y"]))
    pat = slowcat([two_cycles, pure("z")])
    assert timeline(pat, 0, 4) == [
        (Fraction(0), Fraction(1), "x"),
        (Fraction(1), Fraction(2), "z"),
        (Fraction(2), Fraction(3), "y"),
        (Fraction(3), Fraction(4), "z"),
    ]


def test_slowcat_negative_cycles() -> None:
    """Test selection wraps around for cycles before zero."""
    pat = slowcat([pure("a"), pure("b")])
    assert [ev.val for ev in pat.query(Arc.mk(-2, 0))] == ["a", "b"]


def test_cat_compresses_into_one_cycle() -> None:
    """Test each pattern's cycle is squeezed into an equal slot."""
    pat = cat([list_to_pat([1, 2]), pure(3)])
    assert timeline(pat, 0, 1) == [
        (Fraction(0), Fraction(1, 4), 1),
        (Fraction(1, 4), Fraction(1, 2), 2),
        (Fraction(1, 2), Fraction(1), 3),
    ]


def test_cat_advances_children_per_cycle() -> None:
    """Test the second outer cycle plays each child's second cycle."""
    pat = fastcat([slow(2, list_to_pat(["a", "b"])), pure("c")])
    assert timeline(pat, 0, 2) == [
        (Fraction(0), Fraction(1, 2), "a"),
        (Fraction(1, 2), Fraction(1), "c"),
        (Fraction(1), Fraction(3, 2), "b"),
        (Fraction(3, 2), Fraction(2), "c"),
    ]


def test_cat_empty() -> None:
    """Test an empty cat is silent."""
    assert cat([]).query(Arc.mk(0, 1)) == []


def test_append() -> None:
    """Test append splits each cycle between two patterns."""
    assert timeline(append(pure("a"), pure("b")), 0, 1) == [
        (Fraction(0), Fraction(1, 2), "a"),
        (Fraction(1, 2), Fraction(1), "b"),
    ]


def test_append_slow() -> None:
    """Test append_slow alternates whole cycles."""
    assert timeline(append_slow(pure("a"), pure("b")), 0, 4) == [
        (Fraction(0), Fraction(1), "a"),
        (Fraction(1), Fraction(2), "b"),
        (Fraction(2), Fraction(3), "a"),
        (Fraction(3), Fraction(4), "b"),
    ]


def test_list_to_pat() -> None:
    """Test values are spread evenly over the cycle."""
    assert timeline(list_to_pat(["a", "b", "c"]), 1, 2) == [
        (Fraction(1), Fraction(4, 3), "a"),
        (Fraction(4, 3), Fraction(5, 3), "b"),
        (Fraction(5, 3), Fraction(2), "c"),
    ]


def test_maybe_list_to_pat() -> None:
    """Test missing values leave silent steps."""
    assert timeline(maybe_list_to_pat([1, None, 3]), 0, 1) == [
        (Fraction(0), Fraction(1, 3), 1),
        (Fraction(2, 3), Fraction(1), 3),
    ]


def test_run() -> None:
    """Test run counts up within each cycle."""
    assert timeline(run(4), 0, 1) == [
        (Fraction(0), Fraction(1, 4), 0),
        (Fraction(1, 4), Fraction(1, 2), 1),
        (Fraction(1, 2), Fraction(3, 4), 2),
        (Fraction(3, 4), Fraction(1), 3),
    ]
    assert run(0).query(Arc.mk(0, 1)) == []


def test_palindrome() -> None:
    """Test alternate cycles play backwards."""
    pat = palindrome(list_to_pat(["a", "b"]))
    assert [val for _, _, val in timeline(pat, 0, 3)] == ["a", "b", "b", "a", "a", "b"]


def test_silence_in_cat_keeps_slot() -> None:
    """Test a silent child still takes its share of the cycle."""
    pat = cat([pure("a"), silence(), pure("b")])
    assert timeline(pat, 0, 1) == [
        (Fraction(0), Fraction(1, 3), "a"),
        (Fraction(2, 3), Fraction(1), "b"),
    ]


def test_slowcat_is_shared() -> None:
    """Test the sequencing module exposes the core slowcat."""
    assert sequence.slowcat is slowcat
