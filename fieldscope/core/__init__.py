"""
Core Layer - 核心层

包含路径解析器、模式推导、过滤计划、遍历器和空容器清理。
"""

from fieldscope.core.paths import (
    FieldPath,
    PathSpec,
    parse_field_path,
    parse_path_spec,
    PATH_SEPARATOR,
    LIST_SEPARATOR,
)
from fieldscope.core.modes import (
    Mode,
    resolve_mode,
)
from fieldscope.core.plan import (
    FilterDecision,
    DecisionReason,
    Verdict,
    FilterPlan,
    build_plan,
    decide,
    should_descend,
)
from fieldscope.core.adapters import (
    FieldSource,
    FieldAdapter,
    RecordAdapter,
    CollectionAdapter,
    AdapterRegistry,
    DEFAULT_REGISTRY,
    is_composite,
)
from fieldscope.core.walker import (
    GraphWalker,
    FilterResult,
    FilterStats,
    FieldVisit,
    CycleDetected,
    DEFAULT_MAX_DEPTH,
    filter_value,
    iter_decisions,
)
from fieldscope.core.pruning import (
    prune,
    is_empty_composite,
)

__all__ = [
    # paths
    "FieldPath",
    "PathSpec",
    "parse_field_path",
    "parse_path_spec",
    "PATH_SEPARATOR",
    "LIST_SEPARATOR",
    # modes
    "Mode",
    "resolve_mode",
    # plan
    "FilterDecision",
    "DecisionReason",
    "Verdict",
    "FilterPlan",
    "build_plan",
    "decide",
    "should_descend",
    # adapters
    "FieldSource",
    "FieldAdapter",
    "RecordAdapter",
    "CollectionAdapter",
    "AdapterRegistry",
    "DEFAULT_REGISTRY",
    "is_composite",
    # walker
    "GraphWalker",
    "FilterResult",
    "FilterStats",
    "FieldVisit",
    "CycleDetected",
    "DEFAULT_MAX_DEPTH",
    "filter_value",
    "iter_decisions",
    # pruning
    "prune",
    "is_empty_composite",
]
