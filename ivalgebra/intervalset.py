"""Sets of pairwise-disjoint intervals.

A `DisjointIntervalSet` is immutable and maximally coalesced: no two members
share a value, and no two members could be replaced by a single interval
without changing which values the set admits. Sets are produced by a
`Builder`, which merges each newly included interval with every member it
overlaps or adjoins.

Example:
    >>> from ivalgebra import Interval, DisjointIntervalSet
    >>> s = (
    ...     DisjointIntervalSet.builder()
    ...     .include(Interval.closed(0, 1))
    ...     .include(Interval.closed(5, 6))
    ...     .include(Interval.closed(1, 2))
    ...     .build()
    ... )
    >>> str(s)
    '{[0, 2], [5, 6]}'
"""

import bisect
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Generic

from typing_extensions import override

from ivalgebra.endpoint import T
from ivalgebra.errors import BuilderStateError
from ivalgebra.interval import Interval, IntervalLike
from ivalgebra.ordering import lower_endpoint_compare, sort_key, upper_endpoint_compare
from ivalgebra.util import EMPTY_SET, SEPARATOR

logger = logging.getLogger(__name__)


def _as_interval(item: Any, position: int | None = None) -> Interval[Any]:
    where = "" if position is None else f" at position {position}"
    if item is None:
        raise TypeError(
            f"Builder.include() cannot include None{where}.\n"
            f"Hint: Use Interval.all() for the interval admitting every value"
        )
    if isinstance(item, Interval):
        return item
    if isinstance(item, IntervalLike):
        return Interval(lower=item.lower, upper=item.upper)
    raise TypeError(
        f"Builder.include() expects intervals, got {type(item).__name__!r}{where}: "
        f"{item!r}"
    )


def _span(intervals: list[Interval[T]]) -> Interval[T]:
    """Smallest interval covering every member of a mergeable group."""
    lowest = min(intervals, key=cmp_to_key(lower_endpoint_compare))
    highest = max(intervals, key=cmp_to_key(upper_endpoint_compare))
    return Interval(lower=lowest.lower, upper=highest.upper)


def _merge_into(working: list[Interval[T]], new: Interval[T]) -> list[Interval[T]]:
    """Return a sorted, coalesced list holding `working` plus `new`.

    `working` itself is never modified, so a failure part way through leaves
    the caller's list as it was.
    """
    if new.is_empty():
        logger.debug("Ignoring empty interval %s", new)
        return working
    for existing in working:
        if existing.includes(new):
            logger.debug("Interval %s absorbed by %s", new, existing)
            return working

    # Merging can widen the running interval enough to reach further
    # members, so keep collecting until nothing else touches it.
    merged = new
    pending = list(working)
    while True:
        touching: list[Interval[T]] = []
        rest: list[Interval[T]] = []
        for member in pending:
            (touching if merged.is_mergeable_with(member) else rest).append(member)
        if not touching:
            break
        widened = _span([merged, *touching])
        logger.debug("Merged %s with %s into %s", merged, touching, widened)
        merged = widened
        pending = rest

    bisect.insort(pending, merged, key=sort_key)
    return pending


@dataclass(frozen=True, init=False)
class DisjointIntervalSet(Generic[T]):
    """Immutable, sorted collection of disjoint, non-mergeable intervals.

    Members are kept in `ivalgebra.ordering.compare` order, so equality and
    hashing do not depend on insertion order.

    Attributes:
        members: The member intervals, sorted
    """

    members: tuple[Interval[T], ...]

    def __init__(self, intervals: Iterable[Interval[T]] = ()) -> None:
        """Coalesce `intervals` into a new set (shorthand for a one-shot Builder)."""
        built = Builder[T]().include_all(intervals).build()
        object.__setattr__(self, "members", built.members)

    @classmethod
    def _freeze(cls, members: tuple[Interval[T], ...]) -> "DisjointIntervalSet[T]":
        instance = cls.__new__(cls)
        object.__setattr__(instance, "members", members)
        return instance

    @staticmethod
    def builder() -> "Builder[Any]":
        return Builder()

    @classmethod
    def empty(cls) -> "DisjointIntervalSet[Any]":
        return cls._freeze(())

    def to_builder(self) -> "Builder[T]":
        """Return a new Builder already holding this set's members."""
        return Builder[T]().include(self)

    def includes(self, value: T) -> bool:
        """True if any member interval includes `value`.

        Raises:
            TypeError: If value is None
        """
        if value is None:
            raise TypeError("DisjointIntervalSet.includes() requires a value, got None")
        return any(member.includes(value) for member in self.members)

    def contains(self, interval: IntervalLike[T]) -> bool:
        """True if `interval` is exactly one of the members.

        This is a membership test, not an inclusion test: `[1, 2]` is not
        contained by `{[0, 10]}` even though it is included by it.
        """
        if interval is None:
            raise TypeError("DisjointIntervalSet.contains() requires an interval, got None")
        idx = bisect.bisect_left(self.members, sort_key(interval), key=sort_key)
        return idx < len(self.members) and self.members[idx] == interval

    def is_empty(self) -> bool:
        return not self.members

    def __contains__(self, interval: object) -> bool:
        if not isinstance(interval, IntervalLike):
            return False
        return self.contains(interval)

    def __iter__(self) -> Iterator[Interval[T]]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def __getitem__(self, index: int) -> Interval[T]:
        return self.members[index]

    @override
    def __str__(self) -> str:
        if not self.members:
            return EMPTY_SET
        return "{" + SEPARATOR.join(member.notation() for member in self.members) + "}"

    @override
    def __repr__(self) -> str:
        return f"DisjointIntervalSet({self})"


class Builder(Generic[T]):
    """Mutable accumulator producing a `DisjointIntervalSet`.

    Each `include` merges the new interval with all members it intersects or
    adjoins, so the working collection is disjoint and maximally coalesced
    after every call. `build()` snapshots it; the builder stays usable and
    later includes never affect sets already built.

    A builder has a single owner and no internal locking.
    """

    def __init__(self) -> None:
        self._working: list[Interval[T]] = []

    def include(
        self, item: "IntervalLike[T] | DisjointIntervalSet[T] | Iterable[IntervalLike[T]]"
    ) -> "Builder[T]":
        """Include an interval, or every interval of a set or iterable.

        Args:
            item: An interval, a DisjointIntervalSet, or an iterable of intervals

        Returns:
            This builder, for chaining

        Raises:
            TypeError: If item is None or contains a non-interval. The builder
                is left unchanged.
        """
        if item is None or isinstance(item, IntervalLike):
            self._working = _merge_into(self._working, _as_interval(item))
            return self
        if isinstance(item, Iterable):
            return self.include_all(item)
        raise TypeError(
            f"Builder.include() expects an interval, a DisjointIntervalSet or an "
            f"iterable of intervals.\n"
            f"Got {type(item).__name__!r}: {item!r}"
        )

    def include_all(self, intervals: Iterable[IntervalLike[T]]) -> "Builder[T]":
        """Include every interval in `intervals`.

        The whole batch is merged into a copy of the working collection,
        which replaces it only once every member has gone in. A bad member
        leaves the builder unchanged.
        """
        if intervals is None:
            raise TypeError("Builder.include_all() requires an iterable, got None")
        batch = [_as_interval(item, position) for position, item in enumerate(intervals)]
        working = self._working
        for ivl in batch:
            working = _merge_into(working, ivl)
        self._working = working
        return self

    def build(self) -> DisjointIntervalSet[T]:
        """Freeze the working collection into a DisjointIntervalSet.

        Raises:
            BuilderStateError: If the working collection holds a non-interval
        """
        for position, member in enumerate(self._working):
            if not isinstance(member, Interval):
                raise BuilderStateError(
                    f"Builder working collection holds {type(member).__name__!r} "
                    f"at position {position}; only Interval members are permitted"
                )
        logger.debug("Built DisjointIntervalSet of %d intervals", len(self._working))
        return DisjointIntervalSet._freeze(tuple(self._working))
