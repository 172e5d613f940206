"""Presentation constants for ivalgebra.

These control the textual (mathematical bracket) notation of intervals.
"""

# Unbounded endpoints
NEG_INFINITY = "−∞"
POS_INFINITY = "+∞"

# Brackets, indexed by side
LOWER_CLOSED = "["
LOWER_OPEN = "("
UPPER_CLOSED = "]"
UPPER_OPEN = ")"

SEPARATOR = ", "
EMPTY_SET = "∅"
