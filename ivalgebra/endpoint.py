"""Endpoint model: a bounded value with an open/closed mode, or no bound at all.

An endpoint is either `Bounded(value, mode)` or `Unbounded`. Unboundedness is
its own variant rather than a `None` smuggled into the value slot, so a
present-but-odd basis value can never be mistaken for infinity.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Protocol, TypeAlias, TypeVar

from typing_extensions import override


class SupportsLessThan(Protocol):
    def __lt__(self, other: Any, /) -> bool: ...


T = TypeVar("T", bound=SupportsLessThan)


class Mode(Enum):
    """Whether a bounded endpoint's own value belongs to the interval."""

    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class Bounded(Generic[T]):
    value: T
    mode: Mode = Mode.CLOSED

    def __post_init__(self) -> None:
        if self.value is None:
            raise TypeError(
                f"Bounded endpoint value cannot be None.\n"
                f"Hint: Use UNBOUNDED (or endpoint(None)) for an endpoint "
                f"with no bound"
            )
        if not isinstance(self.mode, Mode):
            raise TypeError(
                f"Endpoint mode must be Mode.OPEN or Mode.CLOSED, "
                f"got {type(self.mode).__name__!r}: {self.mode!r}"
            )

    @property
    def is_bounded(self) -> bool:
        return True

    @property
    def is_closed(self) -> bool:
        return self.mode is Mode.CLOSED

    @property
    def is_open(self) -> bool:
        return self.mode is Mode.OPEN


@dataclass(frozen=True)
class Unbounded:
    """No bound in this direction; conceptually -infinity or +infinity.

    All instances are equal, so two unbounded endpoints compare equal
    regardless of how they were created.
    """

    @property
    def is_bounded(self) -> bool:
        return False

    @override
    def __repr__(self) -> str:
        return "UNBOUNDED"


UNBOUNDED = Unbounded()

Endpoint: TypeAlias = Bounded[T] | Unbounded


def endpoint(value: T | None, mode: Mode = Mode.CLOSED) -> Endpoint[T]:
    """Build an endpoint, treating `None` as unbounded."""
    if value is None:
        return UNBOUNDED
    return Bounded(value, mode)
