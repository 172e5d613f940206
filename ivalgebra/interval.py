from dataclasses import dataclass
from typing import Any, Generic, Protocol, overload, runtime_checkable

from typing_extensions import override

from ivalgebra.endpoint import UNBOUNDED, Bounded, Endpoint, Mode, T, Unbounded, endpoint
from ivalgebra.errors import InvalidIntervalError
from ivalgebra.ordering import (
    compare,
    compare_values,
    lower_endpoint_compare,
    ordered_pair,
    upper_endpoint_compare,
)
from ivalgebra.util import (
    LOWER_CLOSED,
    LOWER_OPEN,
    NEG_INFINITY,
    POS_INFINITY,
    SEPARATOR,
    UPPER_CLOSED,
    UPPER_OPEN,
)


@runtime_checkable
class IntervalLike(Protocol[T]):
    """The operations every interval representation provides.

    `Interval` is the only implementation shipped here; other representations
    (say, one specialized to a numeric basis) satisfy this protocol without
    inheriting from it.
    """

    @property
    def lower(self) -> Endpoint[T]: ...

    @property
    def upper(self) -> Endpoint[T]: ...

    def is_empty(self) -> bool: ...

    def includes(self, item: Any) -> bool: ...

    def intersects(self, other: "IntervalLike[T]") -> bool: ...

    def intersection(self, other: "IntervalLike[T]") -> "IntervalLike[T]": ...

    def union(self, other: "IntervalLike[T]") -> "IntervalLike[T] | None": ...


def _require_interval(item: Any, operation: str) -> None:
    if item is None:
        raise TypeError(
            f"{operation}() requires an interval, got None.\n"
            f"Hint: Use Interval.all() for the interval admitting every value"
        )
    if not isinstance(item, IntervalLike):
        raise TypeError(
            f"{operation}() requires an interval, "
            f"got {type(item).__name__!r}: {item!r}"
        )


def _overlaps(first: IntervalLike[Any], second: IntervalLike[Any]) -> bool:
    """Gap test for a non-empty, distinct, already-ordered pair.

    An unbounded endpoint on either side of the gap means there is no gap.
    """
    match (second.lower, first.upper):
        case (Bounded() as start, Bounded() as stop):
            gap = compare_values(start.value, stop.value)
        case _:
            return True
    if gap > 0:
        return False
    if gap == 0:
        # The pair only shares the boundary value if both sides admit it
        return start.is_closed and stop.is_closed
    return True


@dataclass(frozen=True, kw_only=True)
class Interval(Generic[T]):
    """An interval over a totally-ordered basis type.

    Each side is an `Endpoint`: `Bounded(value, mode)` or `UNBOUNDED`. Both
    sides default to unbounded, so `Interval()` admits every value.

    Construction rejects a bounded upper value below a bounded lower value.
    A degenerate interval (equal bounded values) is empty unless both of its
    endpoints are closed.

    Only the basis type's `<` is ever used, so emptiness of an open interval
    is decided by order alone. Over a discrete basis, `(1, 2)` on integers is
    reported as non-empty even though no integer lies inside it. Correcting
    this would require a notion of "next value" the basis need not have.

    Intervals are immutable, but if the basis values themselves are mutable
    and get mutated, the interval's invariants no longer hold.
    """

    lower: Endpoint[T] = UNBOUNDED
    upper: Endpoint[T] = UNBOUNDED

    def __post_init__(self) -> None:
        for edge, value in (("lower", self.lower), ("upper", self.upper)):
            if not isinstance(value, (Bounded, Unbounded)):
                raise TypeError(
                    f"Interval {edge} endpoint must be Bounded or UNBOUNDED.\n"
                    f"Got {type(value).__name__!r}: {value!r}\n"
                    f"Hint: Build endpoints with Bounded(value, mode), UNBOUNDED, "
                    f"or use interval(lower, upper) where None means unbounded"
                )
        match (self.lower, self.upper):
            case (Bounded() as lo, Bounded() as hi) if hi.value < lo.value:
                raise InvalidIntervalError(
                    f"Interval upper endpoint ({hi.value!r}) must be >= "
                    f"lower endpoint ({lo.value!r})"
                )

    # Construction shortcuts

    @classmethod
    def closed(cls, lower: T, upper: T) -> "Interval[T]":
        """[lower, upper]"""
        return cls(lower=Bounded(lower, Mode.CLOSED), upper=Bounded(upper, Mode.CLOSED))

    @classmethod
    def open(cls, lower: T, upper: T) -> "Interval[T]":
        """(lower, upper)"""
        return cls(lower=Bounded(lower, Mode.OPEN), upper=Bounded(upper, Mode.OPEN))

    @classmethod
    def closed_open(cls, lower: T, upper: T) -> "Interval[T]":
        """[lower, upper)"""
        return cls(lower=Bounded(lower, Mode.CLOSED), upper=Bounded(upper, Mode.OPEN))

    @classmethod
    def open_closed(cls, lower: T, upper: T) -> "Interval[T]":
        """(lower, upper]"""
        return cls(lower=Bounded(lower, Mode.OPEN), upper=Bounded(upper, Mode.CLOSED))

    @classmethod
    def at_least(cls, lower: T) -> "Interval[T]":
        return cls(lower=Bounded(lower, Mode.CLOSED))

    @classmethod
    def greater_than(cls, lower: T) -> "Interval[T]":
        return cls(lower=Bounded(lower, Mode.OPEN))

    @classmethod
    def at_most(cls, upper: T) -> "Interval[T]":
        return cls(upper=Bounded(upper, Mode.CLOSED))

    @classmethod
    def less_than(cls, upper: T) -> "Interval[T]":
        return cls(upper=Bounded(upper, Mode.OPEN))

    @classmethod
    def all(cls) -> "Interval[T]":
        return cls()

    @classmethod
    def degenerate(cls, value: T) -> "Interval[T]":
        """[value, value], the interval admitting exactly one value."""
        return cls.closed(value, value)

    @classmethod
    def empty(cls, value: T) -> "Interval[T]":
        """(value, value), a canonical empty interval anchored at `value`."""
        return cls.open(value, value)

    # Endpoint accessors

    @property
    def lower_value(self) -> T | None:
        """Lower endpoint value, or None if unbounded below."""
        return self.lower.value if isinstance(self.lower, Bounded) else None

    @property
    def upper_value(self) -> T | None:
        """Upper endpoint value, or None if unbounded above."""
        return self.upper.value if isinstance(self.upper, Bounded) else None

    @property
    def lower_mode(self) -> Mode | None:
        return self.lower.mode if isinstance(self.lower, Bounded) else None

    @property
    def upper_mode(self) -> Mode | None:
        return self.upper.mode if isinstance(self.upper, Bounded) else None

    # Algebra

    def is_empty(self) -> bool:
        """True if no value can be admitted by both endpoints.

        An unbounded side always admits something, so only a pair of bounded
        endpoints can be empty: reversed values, or equal values where at
        least one side is open.
        """
        match (self.lower, self.upper):
            case (Bounded() as lo, Bounded() as hi):
                cmp = compare_values(lo.value, hi.value)
            case _:
                return False
        if cmp < 0:
            return False
        if cmp > 0:
            return True
        return lo.is_open or hi.is_open

    def _lower_admits(self, value: Any) -> bool:
        match self.lower:
            case Bounded(value=bound, mode=Mode.CLOSED):
                return compare_values(bound, value) <= 0
            case Bounded(value=bound):
                return compare_values(bound, value) < 0
            case _:
                return True

    def _upper_admits(self, value: Any) -> bool:
        match self.upper:
            case Bounded(value=bound, mode=Mode.CLOSED):
                return compare_values(bound, value) >= 0
            case Bounded(value=bound):
                return compare_values(bound, value) > 0
            case _:
                return True

    @overload
    def includes(self, item: "IntervalLike[T]") -> bool: ...

    @overload
    def includes(self, item: T) -> bool: ...

    def includes(self, item: "IntervalLike[T] | T") -> bool:
        """Test membership of a value, or containment of another interval.

        A value is included when both endpoints admit it. An interval is
        included when neither of its endpoints is less restrictive than the
        matching endpoint of this interval.

        Raises:
            TypeError: If item is None
        """
        if item is None:
            raise TypeError(
                f"includes() requires a value or an interval, got None.\n"
                f"Hint: None is never a member of an interval; unboundedness "
                f"is expressed with UNBOUNDED endpoints"
            )
        if isinstance(item, IntervalLike):
            return (
                lower_endpoint_compare(self, item) <= 0
                and upper_endpoint_compare(self, item) >= 0
            )
        return self._lower_admits(item) and self._upper_admits(item)

    def intersects(self, other: "IntervalLike[T]") -> bool:
        """True if at least one value is admitted by both intervals.

        Raises:
            TypeError: If other is not an interval
        """
        _require_interval(other, "intersects")
        if self.is_empty() or other.is_empty():
            return False
        first, second, cmp = ordered_pair(self, other)
        if cmp == 0:
            return True
        return _overlaps(first, second)

    def intersection(self, other: "IntervalLike[T]") -> "Interval[T]":
        """Return the interval of values admitted by both intervals.

        When there are no such values the result is a degenerate open
        interval, for which `is_empty()` holds.

        Raises:
            TypeError: If other is not an interval
        """
        _require_interval(other, "intersection")
        if self.is_empty() or other.is_empty():
            return self._empty_beside(other)
        first, second, cmp = ordered_pair(self, other)
        if cmp == 0:
            return self
        if not _overlaps(first, second):
            return self._empty_beside(other)
        # The later-starting interval has the tighter lower bound
        upper = first.upper if upper_endpoint_compare(first, second) < 0 else second.upper
        return Interval(lower=second.lower, upper=upper)

    def union(self, other: "IntervalLike[T]") -> "Interval[T] | None":
        """Return the single interval admitting exactly the values of both.

        Returns None when no such interval exists: when either operand is
        empty, or when a gap (or a boundary value neither side admits)
        separates them. None ("no union") is distinct from an empty interval.

        Raises:
            TypeError: If other is not an interval
        """
        _require_interval(other, "union")
        if self.is_empty() or other.is_empty():
            return None
        first, second, cmp = ordered_pair(self, other)
        if cmp == 0 or _overlaps(first, second):
            upper = first.upper if upper_endpoint_compare(first, second) > 0 else second.upper
            return Interval(lower=first.lower, upper=upper)
        # Disjoint, but adjoining at a boundary value one side admits
        match (first.upper, second.lower):
            case (Bounded() as stop, Bounded() as start) if (
                compare_values(stop.value, start.value) == 0
                and (stop.is_closed or start.is_closed)
            ):
                return Interval(lower=first.lower, upper=second.upper)
        return None

    def is_mergeable_with(self, other: "IntervalLike[T]") -> bool:
        """True if one interval could replace both without changing membership."""
        return self.union(other) is not None

    def _empty_beside(self, other: "IntervalLike[T]") -> "Interval[T]":
        for candidate in (self.lower, self.upper, other.lower, other.upper):
            if isinstance(candidate, Bounded):
                return Interval.empty(candidate.value)
        # Only two fully unbounded intervals lack a bounded endpoint, and
        # those always overlap.
        raise ValueError(
            f"Cannot anchor an empty interval: neither {self} nor {other} "
            f"has a bounded endpoint"
        )

    # Notation

    def notation(self) -> str:
        """Mathematical bracket notation, e.g. `[0, 1)` or `(−∞, 5]`."""
        match self.lower:
            case Bounded(value=value, mode=mode):
                left = (LOWER_CLOSED if mode is Mode.CLOSED else LOWER_OPEN) + str(value)
            case _:
                left = LOWER_OPEN + NEG_INFINITY
        match self.upper:
            case Bounded(value=value, mode=mode):
                right = str(value) + (UPPER_CLOSED if mode is Mode.CLOSED else UPPER_OPEN)
            case _:
                right = POS_INFINITY + UPPER_OPEN
        return left + SEPARATOR + right

    @override
    def __str__(self) -> str:
        return self.notation()

    @override
    def __repr__(self) -> str:
        return f"Interval({self.notation()})"

    def __contains__(self, value: object) -> bool:
        return self.includes(value)

    # Total order (see ivalgebra.ordering.compare)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, IntervalLike):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, IntervalLike):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, IntervalLike):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, IntervalLike):
            return NotImplemented
        return compare(self, other) >= 0


def interval(
    lower: T | None,
    upper: T | None,
    *,
    lower_mode: Mode = Mode.CLOSED,
    upper_mode: Mode = Mode.CLOSED,
) -> Interval[T]:
    """Create an interval from raw values, where None means unbounded.

    Example:
        >>> interval(0, 10)
        Interval([0, 10])
        >>> interval(None, 5, upper_mode=Mode.OPEN)
        Interval((−∞, 5))
    """
    return Interval(lower=endpoint(lower, lower_mode), upper=endpoint(upper, upper_mode))
