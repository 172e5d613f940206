"""Exception types raised by ivalgebra.

Absent or wrongly-typed arguments raise the built-in `TypeError`; only the
failures specific to interval algebra get their own classes.
"""


class InvalidIntervalError(ValueError):
    """Raised when an interval's upper endpoint value is below its lower one."""


class BuilderStateError(RuntimeError):
    """Raised when a Builder's working collection holds a non-interval.

    This is unreachable through the public API and indicates a logic fault.
    """
