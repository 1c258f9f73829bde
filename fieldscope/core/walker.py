"""Graph walker.

Walks a decoded value depth-first, asks the filter plan about every field
and builds a filtered copy. The same traversal can be consumed as a stream
of :class:`FieldVisit` records for serializers that only need keep/drop
signals.

The input is never modified. All walk state (the current path and the set
of composites on the active branch) lives on the call stack of a single
``walk`` call, so one walker can serve concurrent callers.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Generator, Iterable, Iterator, Optional, Union

from fieldscope.errors import MaxDepthExceeded
from fieldscope.core.adapters import (
    AdapterRegistry,
    CollectionAdapter,
    DEFAULT_REGISTRY,
    FieldAdapter,
    RecordAdapter,
)
from fieldscope.core.modes import Mode
from fieldscope.core.paths import FieldPath, PathSpec
from fieldscope.core.plan import (
    DecisionReason,
    FilterDecision,
    FilterPlan,
    Verdict,
    build_plan,
)
from fieldscope.core.pruning import should_prune

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 128

RawSpec = Union[str, Iterable[str], PathSpec, None]


# ============================================================
# 数据模型
# ============================================================

@dataclass
class CycleDetected:
    """
    结构环路诊断（非致命）

    Attributes:
        path: 环路边所在的字段路径
        type_name: 重复出现的值的类型名
        message: 描述
        code: 诊断代码
    """
    path: str
    type_name: str
    message: str
    code: str = "CYCLE_DETECTED"

    def to_dict(self) -> dict[str, str]:
        return {
            "code": self.code,
            "path": self.path,
            "type": self.type_name,
            "message": self.message,
        }


@dataclass(frozen=True)
class FieldVisit:
    """One keep/drop signal from the walk."""
    path: FieldPath
    decision: FilterDecision
    reason: DecisionReason
    composite: bool = False

    @property
    def kept(self) -> bool:
        return self.decision is FilterDecision.KEEP


@dataclass
class FilterStats:
    """Counters collected during one walk."""
    visited: int = 0
    kept: int = 0
    dropped: int = 0
    pruned: int = 0
    cycles: int = 0
    max_depth: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "visited": self.visited,
            "kept": self.kept,
            "dropped": self.dropped,
            "pruned": self.pruned,
            "cycles": self.cycles,
            "max_depth": self.max_depth,
        }


@dataclass
class FilterResult:
    """
    过滤结果

    Attributes:
        value: 过滤后的值（新对象，输入不会被修改）
        mode: 生效的过滤模式
        diagnostics: 环路等诊断信息
        stats: 统计信息
    """
    value: Any
    mode: Mode
    diagnostics: list[CycleDetected] = field(default_factory=list)
    stats: FilterStats = field(default_factory=FilterStats)

    @property
    def cycles_detected(self) -> bool:
        return bool(self.diagnostics)


# ============================================================
# 遍历器
# ============================================================

_CYCLE = Verdict(FilterDecision.DROP, DecisionReason.CYCLE)

Walk = Generator[FieldVisit, None, Any]


class _WalkState:
    """Per-call state. Never shared between walks."""

    def __init__(self) -> None:
        self.active: set[int] = set()
        self.stats = FilterStats()
        self.diagnostics: list[CycleDetected] = []


class GraphWalker:
    """Cycle-safe depth-first walker bound to one filter plan."""

    def __init__(
        self,
        plan: FilterPlan,
        prune: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
        registry: Optional[AdapterRegistry] = None,
    ):
        """
        Args:
            plan: 过滤计划
            prune: 是否移除因过滤而变空的复合字段
            max_depth: 允许的最大嵌套深度
            registry: 字段枚举适配器，默认使用内置适配器
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")
        self.plan = plan
        self.prune = prune
        self.max_depth = max_depth
        self.registry = registry or DEFAULT_REGISTRY

    def walk(self, root: Any) -> FilterResult:
        """Filter ``root`` and return the filtered copy with diagnostics."""
        state = _WalkState()
        walk = self._walk_root(root, state)
        try:
            while True:
                next(walk)
        except StopIteration as stop:
            value = stop.value
        except RecursionError as e:
            raise MaxDepthExceeded(self.max_depth, "<recursion limit>") from e

        logger.debug(
            f"Filtered value in {self.plan.mode.value} mode: "
            f"{state.stats.kept} kept, {state.stats.dropped} dropped, "
            f"{state.stats.pruned} pruned"
        )
        return FilterResult(
            value=value,
            mode=self.plan.mode,
            diagnostics=state.diagnostics,
            stats=state.stats,
        )

    def visits(self, root: Any) -> Iterator[FieldVisit]:
        """Yield a keep/drop signal for every field reached, depth-first."""
        state = _WalkState()
        try:
            yield from self._walk_root(root, state)
        except RecursionError as e:
            raise MaxDepthExceeded(self.max_depth, "<recursion limit>") from e

    # --------------------------------------------------------
    # internals
    # --------------------------------------------------------

    def _walk_root(self, root: Any, state: _WalkState) -> Walk:
        adapter = self.registry.find(root)
        if adapter is None:
            return root
        state.active.add(id(root))
        return (yield from self._walk_composite(root, adapter, FieldPath(), 0, state))

    def _walk_composite(
        self,
        value: Any,
        adapter: FieldAdapter,
        path: FieldPath,
        depth: int,
        state: _WalkState,
    ) -> Walk:
        if depth > self.max_depth:
            raise MaxDepthExceeded(self.max_depth, str(path))
        state.stats.max_depth = max(state.stats.max_depth, depth)

        if isinstance(adapter, CollectionAdapter):
            return (yield from self._walk_collection(value, adapter, path, depth, state))
        if isinstance(adapter, RecordAdapter):
            return (yield from self._walk_record(value, adapter, path, depth, state))
        raise TypeError(f"Unsupported adapter type: {type(adapter).__name__}")

    def _walk_record(
        self,
        value: Any,
        adapter: RecordAdapter,
        path: FieldPath,
        depth: int,
        state: _WalkState,
    ) -> Walk:
        kept: dict[Any, Any] = {}
        for name, key, child in adapter.keyed_fields(value):
            child_path = path.child(name)
            child_adapter = self.registry.find(child)
            composite = child_adapter is not None

            verdict = self.plan.evaluate(child_path, composite)
            if composite and verdict.kept and id(child) in state.active:
                self._record_cycle(child, child_path, state)
                verdict = _CYCLE

            state.stats.visited += 1
            if verdict.kept:
                state.stats.kept += 1
            else:
                state.stats.dropped += 1
            yield FieldVisit(child_path, verdict.decision, verdict.reason, composite)

            if not verdict.kept:
                continue
            if not composite:
                kept[key] = child
                continue

            filtered = yield from self._descend(child, child_adapter, child_path, depth + 1, state)
            if should_prune(self.prune, self._has_children(child, child_adapter), filtered):
                state.stats.pruned += 1
                continue
            kept[key] = filtered

        return adapter.rebuild(value, kept)

    def _walk_collection(
        self,
        value: Any,
        adapter: CollectionAdapter,
        path: FieldPath,
        depth: int,
        state: _WalkState,
    ) -> Walk:
        # Elements share the collection's path; the decision for the field
        # itself was already made by the caller.
        kept: list[Any] = []
        for element in adapter.elements(value):
            element_adapter = self.registry.find(element)
            if element_adapter is None:
                kept.append(element)
                continue
            if id(element) in state.active:
                self._record_cycle(element, path, state)
                continue

            filtered = yield from self._descend(element, element_adapter, path, depth + 1, state)
            if should_prune(self.prune, self._has_children(element, element_adapter), filtered):
                state.stats.pruned += 1
                continue
            kept.append(filtered)

        return adapter.rebuild(value, kept)

    def _descend(
        self,
        value: Any,
        adapter: FieldAdapter,
        path: FieldPath,
        depth: int,
        state: _WalkState,
    ) -> Walk:
        key = id(value)
        state.active.add(key)
        try:
            return (yield from self._walk_composite(value, adapter, path, depth, state))
        finally:
            state.active.discard(key)

    def _has_children(self, value: Any, adapter: FieldAdapter) -> bool:
        if isinstance(adapter, CollectionAdapter):
            return next(iter(adapter.elements(value)), _MISSING) is not _MISSING
        return next(iter(adapter.fields(value)), _MISSING) is not _MISSING

    def _record_cycle(self, value: Any, path: FieldPath, state: _WalkState) -> None:
        type_name = type(value).__name__
        where = str(path) or "<root>"
        state.stats.cycles += 1
        state.diagnostics.append(CycleDetected(
            path=where,
            type_name=type_name,
            message=f"Structural cycle at '{where}' ({type_name}); edge dropped",
        ))
        logger.debug(f"Cycle detected at '{where}' ({type_name}), dropping edge")


_MISSING = object()


# ============================================================
# 便捷函数
# ============================================================

def filter_value(
    root: Any,
    include: RawSpec = None,
    exclude: RawSpec = None,
    *,
    plan: Optional[FilterPlan] = None,
    prune: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
    registry: Optional[AdapterRegistry] = None,
) -> FilterResult:
    """
    按 include/exclude 规格过滤一个值

    Args:
        root: 已解码的根值（dict、list、dataclass、普通对象等）
        include: include-only 规格（原始字符串、字符串列表或 PathSpec）
        exclude: exclude-only 规格
        plan: 已构建的过滤计划，提供时忽略 include/exclude
        prune: 是否移除因过滤而变空的复合字段
        max_depth: 最大嵌套深度
        registry: 自定义适配器注册表

    Returns:
        FilterResult 对象

    Raises:
        InvalidPathError: 规格语法错误（在遍历开始前抛出）
        MaxDepthExceeded: 超过最大深度
    """
    if plan is None:
        plan = build_plan(include, exclude)
    walker = GraphWalker(plan, prune=prune, max_depth=max_depth, registry=registry)
    return walker.walk(root)


def iter_decisions(
    root: Any,
    include: RawSpec = None,
    exclude: RawSpec = None,
    *,
    plan: Optional[FilterPlan] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    registry: Optional[AdapterRegistry] = None,
) -> Iterator[FieldVisit]:
    """
    Stream (path, decision) signals for every field reached.

    Dropped composites are reported once and not walked into. The spec is
    parsed eagerly so a malformed path fails before the first signal.
    """
    if plan is None:
        plan = build_plan(include, exclude)
    walker = GraphWalker(plan, max_depth=max_depth, registry=registry)
    return walker.visits(root)
