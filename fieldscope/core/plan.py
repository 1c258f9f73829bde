"""Filter plan - the per-field keep/drop decision.

A plan is built once per filtering call from the two parsed specs and is
then consulted for every (traversal path, field name) pair the walker
meets. Decisions depend on the full path only, so the same field name (or
the same type reused at different places) can get different answers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union

from fieldscope.core.modes import Mode, resolve_mode
from fieldscope.core.paths import FieldPath, PathSpec, parse_field_path, parse_path_spec


class FilterDecision(Enum):
    """Keep or drop a field."""
    KEEP = "keep"
    DROP = "drop"

    @property
    def kept(self) -> bool:
        return self is FilterDecision.KEEP


class DecisionReason(Enum):
    """Why a field was kept or dropped."""
    PASS_THROUGH = "pass_through"                # no filtering requested
    INCLUDED = "included"                        # path listed in include spec
    UNDER_INCLUDE = "under_include"              # an ancestor is listed in include spec
    ANCESTOR_OF_INCLUDE = "ancestor_of_include"  # retained for an included descendant
    NOT_INCLUDED = "not_included"
    EXCLUDED = "excluded"                        # path or an ancestor listed in exclude spec
    NOT_EXCLUDED = "not_excluded"
    CYCLE = "cycle"                              # set by the walker, never by the plan


@dataclass(frozen=True)
class Verdict:
    """
    单个字段的判定结果

    Attributes:
        decision: KEEP 或 DROP
        reason: 判定原因
        rule: 命中的规则路径（如果有）
    """
    decision: FilterDecision
    reason: DecisionReason
    rule: Optional[FieldPath] = None

    @property
    def kept(self) -> bool:
        return self.decision is FilterDecision.KEEP


_PASS = Verdict(FilterDecision.KEEP, DecisionReason.PASS_THROUGH)


@dataclass(frozen=True)
class FilterPlan:
    """
    过滤计划

    Attributes:
        include: include-only 规格
        exclude: exclude-only 规格
        mode: 由两个规格推导出的模式
    """
    include: PathSpec
    exclude: PathSpec
    mode: Mode

    @classmethod
    def from_specs(cls, include: PathSpec, exclude: PathSpec) -> "FilterPlan":
        return cls(include=include, exclude=exclude, mode=resolve_mode(include, exclude))

    @property
    def has_exclusions(self) -> bool:
        return not self.exclude.is_empty

    @property
    def is_pass_through(self) -> bool:
        return self.mode is Mode.PASS_THROUGH

    def evaluate(self, path: FieldPath, is_composite: bool = False) -> Verdict:
        """
        Decide whether the field at ``path`` is emitted.

        Exclusion always wins: a field is dropped when its own path or any
        ancestor path is excluded, so a deeper include can never bring back
        a shallower exclude. In whitelist mode a field is kept when it is
        included, sits below an included path, or (for composites only) lies
        on the way to an included descendant.
        """
        if self.mode is Mode.PASS_THROUGH:
            return _PASS

        excluded_by = self.exclude.matches(path)
        if excluded_by is not None:
            return Verdict(FilterDecision.DROP, DecisionReason.EXCLUDED, excluded_by)

        if self.mode is Mode.BLACKLIST:
            return Verdict(FilterDecision.KEEP, DecisionReason.NOT_EXCLUDED)

        if path in self.include:
            return Verdict(FilterDecision.KEEP, DecisionReason.INCLUDED, path)

        included_by = self.include.matches(path)
        if included_by is not None:
            return Verdict(FilterDecision.KEEP, DecisionReason.UNDER_INCLUDE, included_by)

        # A scalar cannot hold the wanted descendant, so a path like
        # "accountNumber.x" stays inert instead of leaking accountNumber.
        if is_composite and self.include.is_ancestor_of_member(path):
            return Verdict(FilterDecision.KEEP, DecisionReason.ANCESTOR_OF_INCLUDE)

        return Verdict(FilterDecision.DROP, DecisionReason.NOT_INCLUDED)

    def decide(
        self,
        traversal_path: FieldPath,
        field_name: str,
        is_composite: bool = False,
    ) -> FilterDecision:
        return self.evaluate(traversal_path.child(field_name), is_composite).decision

    def should_descend(
        self,
        traversal_path: FieldPath,
        field_name: str,
        is_composite: bool = True,
    ) -> bool:
        """A composite field is walked into whenever it is kept."""
        if not is_composite:
            return False
        return self.evaluate(traversal_path.child(field_name), True).kept

    def is_visible(self, path: Union[str, FieldPath], is_composite: bool = True) -> bool:
        """
        Answer keep/drop for an arbitrary dotted path.

        Meant for serializers that only need a visibility callback and never
        hand their value tree to the walker. The root (``""`` or an empty
        ``FieldPath``) is always visible.
        """
        if isinstance(path, str):
            if not path:
                return True
            path = parse_field_path(path)
        if path.is_root:
            return True
        return self.evaluate(path, is_composite).kept


def build_plan(
    include: Union[str, Iterable[str], PathSpec, None] = None,
    exclude: Union[str, Iterable[str], PathSpec, None] = None,
) -> FilterPlan:
    """
    解析两个原始规格并生成过滤计划

    Raises:
        InvalidPathError: 任一规格语法错误
    """
    include_spec = include if isinstance(include, PathSpec) else parse_path_spec(include)
    exclude_spec = exclude if isinstance(exclude, PathSpec) else parse_path_spec(exclude)
    return FilterPlan.from_specs(include_spec, exclude_spec)


def decide(
    mode: Mode,
    include: PathSpec,
    exclude: PathSpec,
    traversal_path: FieldPath,
    field_name: str,
    is_composite: bool = False,
) -> FilterDecision:
    """Stateless form of :meth:`FilterPlan.decide`."""
    return FilterPlan(include, exclude, mode).decide(traversal_path, field_name, is_composite)


def should_descend(
    mode: Mode,
    include: PathSpec,
    exclude: PathSpec,
    traversal_path: FieldPath,
    field_name: str,
    is_composite: bool = True,
) -> bool:
    """Stateless form of :meth:`FilterPlan.should_descend`."""
    return FilterPlan(include, exclude, mode).should_descend(traversal_path, field_name, is_composite)
