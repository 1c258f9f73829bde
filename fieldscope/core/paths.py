"""Field path parsing.

Turns raw include/exclude strings such as ``"accountNumber, transactions.amount"``
into immutable, dot-segmented paths.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Union

from fieldscope.errors import InvalidPathError


# ============================================================
# 配置常量
# ============================================================

PATH_SEPARATOR = "."
LIST_SEPARATOR = ","

# Segments are limited to letters, digits and underscore
SEGMENT_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


# ============================================================
# 数据模型
# ============================================================

@dataclass(frozen=True, order=True)
class FieldPath:
    """
    字段路径 - 从根到某个字段的段序列

    The empty path is the root traversal position and never appears
    inside a PathSpec.

    Attributes:
        segments: 路径段，例如 ("transactions", "amount")
    """
    segments: tuple[str, ...] = ()

    @classmethod
    def of(cls, *segments: str) -> "FieldPath":
        return cls(tuple(segments))

    def child(self, name: str) -> "FieldPath":
        """Return the path of field ``name`` below this path."""
        return FieldPath(self.segments + (name,))

    @property
    def parent(self) -> "FieldPath":
        return FieldPath(self.segments[:-1])

    @property
    def name(self) -> str:
        return self.segments[-1] if self.segments else ""

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def is_root(self) -> bool:
        return not self.segments

    def is_prefix_of(self, other: "FieldPath") -> bool:
        """True when ``other`` equals this path or lies below it."""
        n = len(self.segments)
        return n <= len(other.segments) and other.segments[:n] == self.segments

    def prefixes(self) -> Iterator["FieldPath"]:
        """Yield every non-empty prefix, shortest first, including the path itself."""
        for i in range(1, len(self.segments) + 1):
            yield FieldPath(self.segments[:i])

    def __str__(self) -> str:
        return PATH_SEPARATOR.join(self.segments)

    def __len__(self) -> int:
        return len(self.segments)


@dataclass(frozen=True)
class PathSpec:
    """
    路径规格 - 一组去重后的字段路径

    Attributes:
        paths: 路径集合
    """
    paths: frozenset[FieldPath] = frozenset()
    # Strict ancestors of every member, used for ancestor retention
    _ancestors: frozenset[FieldPath] = field(default=frozenset(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        ancestors = set()
        for path in self.paths:
            for i in range(1, len(path.segments)):
                ancestors.add(FieldPath(path.segments[:i]))
        object.__setattr__(self, "_ancestors", frozenset(ancestors))

    @classmethod
    def of(cls, *dotted: str) -> "PathSpec":
        """Build a spec from already-split dotted tokens (validated)."""
        return cls(frozenset(parse_field_path(token) for token in dotted))

    @property
    def is_empty(self) -> bool:
        return not self.paths

    def __bool__(self) -> bool:
        return bool(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[FieldPath]:
        return iter(sorted(self.paths))

    def __contains__(self, path: object) -> bool:
        return path in self.paths

    def matches(self, path: FieldPath) -> Optional[FieldPath]:
        """
        Return the shortest member that equals ``path`` or is one of its
        ancestors, or None.
        """
        for prefix in path.prefixes():
            if prefix in self.paths:
                return prefix
        return None

    def is_ancestor_of_member(self, path: FieldPath) -> bool:
        """True when some member lies strictly below ``path``."""
        return path in self._ancestors

    def to_strings(self) -> list[str]:
        return [str(p) for p in self]

    def __str__(self) -> str:
        return LIST_SEPARATOR.join(self.to_strings())


# ============================================================
# 解析函数
# ============================================================

def parse_field_path(token: str) -> FieldPath:
    """
    解析单个点分路径

    Args:
        token: 已去除首尾空白的路径字符串，例如 "account.address.city"

    Returns:
        FieldPath 对象

    Raises:
        InvalidPathError: 出现空段（首尾或连续的点）或非法字符
    """
    if not token:
        raise InvalidPathError(token, "path is empty")

    segments = token.split(PATH_SEPARATOR)
    for segment in segments:
        if not segment:
            raise InvalidPathError(token, "empty path segment", segment)
        if not SEGMENT_PATTERN.match(segment):
            raise InvalidPathError(
                token,
                f"segment '{segment}' may only contain letters, digits and '_'",
                segment,
            )
    return FieldPath(tuple(segments))


def _split_tokens(raw: str) -> list[str]:
    tokens = (part.strip() for part in raw.split(LIST_SEPARATOR))
    return [t for t in tokens if t]


def parse_path_spec(raw: Union[str, Iterable[str], None]) -> PathSpec:
    """
    解析路径规格

    Splits on commas, trims whitespace, drops empty tokens and parses each
    token as a dotted path. ``None`` and blank input give the empty spec.
    An iterable of strings (e.g. a repeated query parameter) is parsed as
    if its items were joined with commas.

    Raises:
        InvalidPathError: 任一路径不合法时整个规格失败
    """
    if raw is None:
        return PathSpec()

    chunks = [raw] if isinstance(raw, str) else list(raw)
    paths: set[FieldPath] = set()
    for chunk in chunks:
        if chunk is None:
            continue
        for token in _split_tokens(chunk):
            paths.add(parse_field_path(token))

    return PathSpec(frozenset(paths))
