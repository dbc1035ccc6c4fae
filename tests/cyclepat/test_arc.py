from fractions import Fraction

from cyclepat.arc import (
    Arc,
    arc_cycles,
    cycle_pos,
    is_in,
    map_arc,
    mid_point,
    mirror_arc,
    mk_arc,
    next_sam,
    sam,
    sub_arc,
)
from cyclepat.common import CycleTime


def t(num: int, den: int = 1) -> CycleTime:
    return CycleTime(Fraction(num, den))


def test_sam_and_next_sam() -> None:
    """Test cycle boundaries around a time."""
    assert sam(t(5, 2)) == Fraction(2)
    assert next_sam(t(5, 2)) == Fraction(3)
    assert sam(t(3)) == Fraction(3)
    assert next_sam(t(3)) == Fraction(4)
    assert sam(t(-1, 2)) == Fraction(-1)


def test_cycle_pos() -> None:
    """Test position within the current cycle."""
    assert cycle_pos(t(7, 4)) == Fraction(3, 4)
    assert cycle_pos(t(2)) == Fraction(0)
    assert cycle_pos(t(-1, 4)) == Fraction(3, 4)


def test_is_in_half_open() -> None:
    """Test that arcs include their start but not their end."""
    arc = Arc.mk(0, 1)
    assert is_in(arc, t(0))
    assert is_in(arc, t(1, 2))
    assert not is_in(arc, t(1))
    assert not is_in(Arc.mk(1, 1), t(1))


def test_arc_cycles_single_cycle() -> None:
    """Test an arc inside one cycle is returned unchanged."""
    arc = Arc.mk(Fraction(1, 4), Fraction(3, 4))
    assert arc_cycles(arc) == [arc]


def test_arc_cycles_splits_at_boundaries() -> None:
    """Test an arc crossing cycles is split at each boundary."""
    arc = Arc.mk(Fraction(1, 2), Fraction(5, 2))
    assert arc_cycles(arc) == [
        Arc.mk(Fraction(1, 2), 1),
        Arc.mk(1, 2),
        Arc.mk(2, Fraction(5, 2)),
    ]


def test_arc_cycles_whole_cycles() -> None:
    """Test an arc ending on a boundary yields no trailing empty piece."""
    assert arc_cycles(Arc.mk(0, 2)) == [Arc.mk(0, 1), Arc.mk(1, 2)]


def test_arc_cycles_null() -> None:
    """Test null and degenerate arcs have no cycles."""
    assert arc_cycles(Arc.mk(1, 1)) == []
    assert arc_cycles(Arc.mk(2, 1)) == []


def test_arc_cycles_many_cycles() -> None:
    """Test splitting a long arc does not recurse."""
    pieces = arc_cycles(Arc.mk(0, 5000))
    assert len(pieces) == 5000
    assert pieces[-1] == Arc.cycle(4999)


def test_sub_arc() -> None:
    """Test arc intersection."""
    a = Arc.mk(0, 1)
    b = Arc.mk(Fraction(1, 2), 2)
    assert sub_arc(a, b) == Arc.mk(Fraction(1, 2), 1)
    assert sub_arc(b, a) == Arc.mk(Fraction(1, 2), 1)


def test_sub_arc_disjoint_and_touching() -> None:
    """Test arcs without a positive-width overlap have no intersection."""
    assert sub_arc(Arc.mk(0, 1), Arc.mk(2, 3)) is None
    assert sub_arc(Arc.mk(0, 1), Arc.mk(1, 2)) is None


def test_map_arc() -> None:
    """Test mapping both endpoints."""
    arc = map_arc(lambda x: CycleTime(x * 2), Arc.mk(Fraction(1, 4), 1))
    assert arc == Arc.mk(Fraction(1, 2), 2)


def test_mirror_arc() -> None:
    """Test reflecting an arc within its cycle."""
    assert mirror_arc(Arc.mk(0, Fraction(1, 4))) == Arc.mk(Fraction(3, 4), 1)
    assert mirror_arc(Arc.mk(Fraction(5, 4), Fraction(3, 2))) == Arc.mk(
        Fraction(3, 2), Fraction(7, 4)
    )
    assert mirror_arc(Arc.mk(2, 3)) == Arc.mk(2, 3)


def test_mirror_arc_is_involution_within_cycle() -> None:
    """Test mirroring twice restores an arc within one cycle."""
    arc = Arc.mk(Fraction(1, 3), Fraction(1, 2))
    assert mirror_arc(mirror_arc(arc)) == arc


def test_mid_point() -> None:
    """Test the midpoint of an arc."""
    assert mid_point(Arc.mk(1, 2)) == Fraction(3, 2)
    assert mid_point(Arc.mk(0, Fraction(1, 3))) == Fraction(1, 6)


def test_arc_helpers() -> None:
    """Test Arc convenience methods."""
    arc = Arc.mk(Fraction(1, 2), 2)
    assert arc.length() == Fraction(3, 2)
    assert not arc.null()
    assert Arc.mk(1, 1).null()
    assert arc.shift(Fraction(1)) == Arc.mk(Fraction(3, 2), 3)
    assert arc.scale(Fraction(2)) == Arc.mk(1, 4)
    assert Arc.cycle(3) == Arc.mk(3, 4)
    assert arc.contains(t(1))


def test_mk_arc_coerces_numerics() -> None:
    """Test tuples of ints and floats become exact arcs."""
    assert mk_arc((0, 0.25)) == Arc.mk(0, Fraction(1, 4))
    arc = Arc.mk(0, 1)
    assert mk_arc(arc) is arc


def test_arc_methods_match_functions() -> None:
    """Test the Arc methods agree with the module level helpers."""
    arc = Arc.mk(Fraction(1, 2), Fraction(5, 2))
    assert arc.cycles() == arc_cycles(arc)
    assert arc.cycles() == [
        Arc.mk(Fraction(1, 2), 1),
        Arc.mk(1, 2),
        Arc.mk(2, Fraction(5, 2)),
    ]
    assert arc.intersect(Arc.mk(2, 3)) == Arc.mk(2, Fraction(5, 2))
    assert arc.intersect(Arc.mk(3, 4)) is None
    assert Arc.mk(Fraction(1, 4), Fraction(1, 2)).mirror() == Arc.mk(
        Fraction(1, 2), Fraction(3, 4)
    )
    assert arc.mid_point() == t(3, 2)
    assert arc.with_time(lambda x: CycleTime(x * 2)) == Arc.mk(1, 5)
