"""
fieldscope - include/exclude field filtering for decoded object graphs

Given a root value and two dotted path lists (include-only and
exclude-only), decides for every reachable field whether it is emitted.
"""

__version__ = "0.3.0"

from fieldscope.errors import (
    FieldScopeError,
    InvalidPathError,
    MaxDepthExceeded,
    ConfigError,
)
from fieldscope.core import (
    FieldPath,
    PathSpec,
    parse_path_spec,
    Mode,
    resolve_mode,
    FilterDecision,
    FilterPlan,
    build_plan,
    GraphWalker,
    FilterResult,
    CycleDetected,
    filter_value,
    iter_decisions,
    prune,
)

__all__ = [
    "__version__",
    # errors
    "FieldScopeError",
    "InvalidPathError",
    "MaxDepthExceeded",
    "ConfigError",
    # core
    "FieldPath",
    "PathSpec",
    "parse_path_spec",
    "Mode",
    "resolve_mode",
    "FilterDecision",
    "FilterPlan",
    "build_plan",
    "GraphWalker",
    "FilterResult",
    "CycleDetected",
    "filter_value",
    "iter_decisions",
    "prune",
]
