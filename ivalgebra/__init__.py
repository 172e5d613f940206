from importlib.resources import files

from .endpoint import UNBOUNDED, Bounded, Endpoint, Mode, Unbounded, endpoint
from .errors import BuilderStateError, InvalidIntervalError
from .interval import Interval, IntervalLike, interval
from .intervalset import Builder, DisjointIntervalSet
from .ordering import compare, lower_endpoint_compare, sort_key, upper_endpoint_compare

# Load documentation files for programmatic access by agents and code-aware tools
_docs_path = files(__package__) / "docs"
docs = {
    "readme": (_docs_path / "README.md").read_text(encoding="utf-8"),
    "api": (_docs_path / "API.md").read_text(encoding="utf-8"),
}

__all__ = [
    "Interval",
    "IntervalLike",
    "interval",
    "Mode",
    "Bounded",
    "Unbounded",
    "UNBOUNDED",
    "Endpoint",
    "endpoint",
    "DisjointIntervalSet",
    "Builder",
    "compare",
    "sort_key",
    "lower_endpoint_compare",
    "upper_endpoint_compare",
    "InvalidIntervalError",
    "BuilderStateError",
    "docs",
]
