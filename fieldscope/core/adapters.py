"""Field enumeration adapters.

The walker never inspects values directly. It asks an adapter registry
whether a value is a record (named fields), a collection (elements that
share the parent field's path), or neither (a scalar copied as is).
Custom types plug in by implementing ``__field_items__`` or by registering
an adapter ahead of the built-ins.
"""

import dataclasses
import types
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from typing import Any, Iterable, Iterator, Optional, Protocol, runtime_checkable


@runtime_checkable
class FieldSource(Protocol):
    """Objects that enumerate their own fields as (name, value) pairs."""

    def __field_items__(self) -> Iterable[tuple[str, Any]]:
        ...


class FieldAdapter(ABC):
    """Base class for adapters."""

    name: str = "adapter"

    @abstractmethod
    def handles(self, value: Any) -> bool:
        """Return True if this adapter knows how to walk ``value``."""
        pass


class RecordAdapter(FieldAdapter):
    """Adapter for values with named fields."""

    @abstractmethod
    def fields(self, value: Any) -> Iterator[tuple[str, Any]]:
        """Yield (name, value) pairs in a stable order."""
        pass

    def keyed_fields(self, value: Any) -> Iterator[tuple[str, Any, Any]]:
        """
        Yield (name, key, value) triples.

        ``name`` is the path segment the plan sees; ``key`` is what the
        filtered copy is rebuilt on. They differ only for mappings with
        non-string keys.
        """
        for name, item in self.fields(value):
            yield name, name, item

    def rebuild(self, value: Any, kept: dict[Any, Any]) -> Any:
        """Build the filtered copy. Records come back as plain dicts by default."""
        return kept


class CollectionAdapter(FieldAdapter):
    """Adapter for values whose elements sit at the parent field's path."""

    @abstractmethod
    def elements(self, value: Any) -> Iterator[Any]:
        pass

    def rebuild(self, value: Any, kept: list[Any]) -> Any:
        return kept


# ============================================================
# 内置适配器
# ============================================================

class FieldSourceAdapter(RecordAdapter):
    name = "field_source"

    def handles(self, value: Any) -> bool:
        return not isinstance(value, type) and isinstance(value, FieldSource)

    def fields(self, value: Any) -> Iterator[tuple[str, Any]]:
        for key, item in value.__field_items__():
            yield str(key), item


class MappingAdapter(RecordAdapter):
    name = "mapping"

    def handles(self, value: Any) -> bool:
        return isinstance(value, Mapping)

    def fields(self, value: Any) -> Iterator[tuple[str, Any]]:
        for name, _, item in self.keyed_fields(value):
            yield name, item

    def keyed_fields(self, value: Any) -> Iterator[tuple[str, Any, Any]]:
        # Non-string keys (YAML ints, bools) are matched by their text but
        # kept as is in the copy, so 1 and "1" stay two entries.
        for key, item in value.items():
            yield str(key), key, item


class NamedTupleAdapter(RecordAdapter):
    name = "namedtuple"

    def handles(self, value: Any) -> bool:
        return isinstance(value, tuple) and hasattr(type(value), "_fields")

    def fields(self, value: Any) -> Iterator[tuple[str, Any]]:
        for key in type(value)._fields:
            yield key, getattr(value, key)


class DataclassAdapter(RecordAdapter):
    name = "dataclass"

    def handles(self, value: Any) -> bool:
        return dataclasses.is_dataclass(value) and not isinstance(value, type)

    def fields(self, value: Any) -> Iterator[tuple[str, Any]]:
        for f in dataclasses.fields(value):
            yield f.name, getattr(value, f.name)


class SequenceAdapter(CollectionAdapter):
    name = "sequence"

    _TEXT_TYPES = (str, bytes, bytearray, memoryview)

    def handles(self, value: Any) -> bool:
        if isinstance(value, self._TEXT_TYPES):
            return False
        return isinstance(value, (Sequence, Set))

    def elements(self, value: Any) -> Iterator[Any]:
        return iter(value)

    def rebuild(self, value: Any, kept: list[Any]) -> Any:
        # Tuples stay tuples; sets come back as lists since filtered
        # elements are usually unhashable dicts.
        if isinstance(value, tuple):
            return tuple(kept)
        return kept


class ObjectAdapter(RecordAdapter):
    """Plain objects: public attributes from ``__dict__``."""
    name = "object"

    _OPAQUE_TYPES = (
        type,
        types.ModuleType,
        types.FunctionType,
        types.BuiltinFunctionType,
        types.MethodType,
        Enum,
    )

    def handles(self, value: Any) -> bool:
        if isinstance(value, self._OPAQUE_TYPES):
            return False
        return hasattr(value, "__dict__")

    def fields(self, value: Any) -> Iterator[tuple[str, Any]]:
        for key, item in vars(value).items():
            if not key.startswith("_"):
                yield key, item


# ============================================================
# 注册表
# ============================================================

class AdapterRegistry:
    """
    适配器注册表

    Adapters are tried in order; the first one whose ``handles`` returns
    True wins. Custom adapters go in front of the built-ins.
    """

    def __init__(self, adapters: Optional[Iterable[FieldAdapter]] = None):
        self._adapters: list[FieldAdapter] = list(adapters or [])

    @classmethod
    def with_defaults(cls) -> "AdapterRegistry":
        return cls([
            FieldSourceAdapter(),
            MappingAdapter(),
            NamedTupleAdapter(),
            DataclassAdapter(),
            SequenceAdapter(),
            ObjectAdapter(),
        ])

    def register(self, adapter: FieldAdapter, first: bool = True) -> None:
        """Register an adapter (prevents duplicates by name)."""
        self.unregister(adapter.name)
        if first:
            self._adapters.insert(0, adapter)
        else:
            self._adapters.append(adapter)

    def unregister(self, name: str) -> None:
        self._adapters = [a for a in self._adapters if a.name != name]

    def names(self) -> list[str]:
        return [a.name for a in self._adapters]

    def find(self, value: Any) -> Optional[FieldAdapter]:
        """Return the adapter for ``value``, or None for scalars."""
        if value is None or isinstance(value, (str, int, float, bool)):
            return None
        for adapter in self._adapters:
            if adapter.handles(value):
                return adapter
        return None

    def is_composite(self, value: Any) -> bool:
        return self.find(value) is not None


DEFAULT_REGISTRY = AdapterRegistry.with_defaults()


def is_composite(value: Any, registry: Optional[AdapterRegistry] = None) -> bool:
    """Whether ``value`` has fields or elements the walker would visit."""
    return (registry or DEFAULT_REGISTRY).is_composite(value)
