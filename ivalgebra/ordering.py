"""Total ordering over intervals of a common basis type.

The order sorts intervals by the least value they can admit, then by how far
they extend. Every pairwise algorithm in `ivalgebra.interval` starts by
putting its two operands into this order (see `ordered_pair`), which halves
the number of open/closed/unbounded cases it has to consider.
"""

from functools import cmp_to_key
from typing import TYPE_CHECKING, Any, TypeVar

from ivalgebra.endpoint import Bounded, Mode, Unbounded

if TYPE_CHECKING:
    from ivalgebra.interval import IntervalLike

    IvlT = TypeVar("IvlT", bound=IntervalLike[Any])


def compare_values(x: Any, y: Any) -> int:
    """Three-way comparison using only `<` on the basis type."""
    if x < y:
        return -1
    if y < x:
        return 1
    return 0


def _lower_compare(a: "Bounded[Any] | Unbounded", b: "Bounded[Any] | Unbounded") -> int:
    match (a, b):
        case (Unbounded(), Unbounded()):
            return 0
        case (Unbounded(), Bounded()):
            return -1
        case (Bounded(), Unbounded()):
            return 1
    cmp = compare_values(a.value, b.value)
    if cmp != 0:
        return cmp
    # A closed lower bound admits its own value, so it starts earlier
    if a.mode is b.mode:
        return 0
    return -1 if a.mode is Mode.CLOSED else 1


def _upper_compare(a: "Bounded[Any] | Unbounded", b: "Bounded[Any] | Unbounded") -> int:
    match (a, b):
        case (Unbounded(), Unbounded()):
            return 0
        case (Unbounded(), Bounded()):
            return 1
        case (Bounded(), Unbounded()):
            return -1
    cmp = compare_values(a.value, b.value)
    if cmp != 0:
        return cmp
    # An open upper bound excludes its own value, so it ends earlier
    if a.mode is b.mode:
        return 0
    return -1 if a.mode is Mode.OPEN else 1


def compare(a: "IntervalLike[Any]", b: "IntervalLike[Any]") -> int:
    """Return -1, 0 or 1 as `a` sorts before, equal to, or after `b`.

    Lower endpoints are compared first (unbounded first, then by value, then
    closed before open). Ties are broken on upper endpoints (by value with
    unbounded last, then open before closed).
    """
    cmp = _lower_compare(a.lower, b.lower)
    if cmp != 0:
        return cmp
    return _upper_compare(a.upper, b.upper)


def lower_endpoint_compare(a: "IntervalLike[Any]", b: "IntervalLike[Any]") -> int:
    """Compare only where `a` and `b` start, ignoring their upper endpoints.

    A negative result means `a` admits everything `b` admits on that side.
    """
    return _lower_compare(a.lower, b.lower)


def upper_endpoint_compare(a: "IntervalLike[Any]", b: "IntervalLike[Any]") -> int:
    """Compare only where `a` and `b` stop, ignoring their lower endpoints.

    A positive result means `a` extends further than `b`.
    """
    return _upper_compare(a.upper, b.upper)


sort_key = cmp_to_key(compare)


def ordered_pair(a: "IvlT", b: "IvlT") -> tuple["IvlT", "IvlT", int]:
    """Return `(first, second, cmp)` with `first` sorting no later than `second`.

    `cmp` is the result of `compare(a, b)`, so callers can tell whether the two
    were identical under the order.
    """
    cmp = compare(a, b)
    if cmp > 0:
        return b, a, cmp
    return a, b, cmp
