"""Tests for field enumeration adapters."""

from collections import OrderedDict, namedtuple
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterator

from fieldscope.core.adapters import (
    AdapterRegistry,
    CollectionAdapter,
    DEFAULT_REGISTRY,
    RecordAdapter,
    is_composite,
)
from fieldscope.core.walker import filter_value


class TestDefaultRegistry:
    """Built-in composite detection."""

    def test_scalars(self) -> None:
        for value in [None, 1, 1.5, True, "text", b"bytes", Decimal("1.0"), datetime(2024, 1, 1), Path("x")]:
            assert not is_composite(value), value

    def test_composites(self) -> None:
        Point = namedtuple("Point", "x y")

        @dataclass
        class Item:
            name: str

        for value in [{}, OrderedDict(), [], (), set(), frozenset(), Point(1, 2), Item("a")]:
            assert is_composite(value), value

    def test_classes_and_functions_are_scalars(self) -> None:
        @dataclass
        class Item:
            name: str

        assert not is_composite(Item)
        assert not is_composite(len)
        assert not is_composite(lambda: None)

    def test_builtin_order(self) -> None:
        assert DEFAULT_REGISTRY.names() == [
            "field_source",
            "mapping",
            "namedtuple",
            "dataclass",
            "sequence",
            "object",
        ]

    def test_namedtuple_walked_as_record(self) -> None:
        Point = namedtuple("Point", "x y")
        result = filter_value({"p": Point(1, 2)}, exclude="p.y")
        assert result.value == {"p": {"x": 1}}

    def test_non_string_keys_matched_by_text(self) -> None:
        result = filter_value({1: "a", 2: "b"}, include="1")
        assert result.value == {1: "a"}

    def test_mapping_keyed_fields(self) -> None:
        adapter = DEFAULT_REGISTRY.find({})
        assert list(adapter.keyed_fields({1: "a", "b": 2})) == [("1", 1, "a"), ("b", "b", 2)]
        assert list(adapter.fields({1: "a"})) == [("1", "a")]


class TestCustomAdapters:
    """Registering adapters ahead of the built-ins."""

    def test_custom_record_adapter(self) -> None:
        class Row:
            def __init__(self, **cols: Any) -> None:
                self._cols = cols

        class RowAdapter(RecordAdapter):
            name = "row"

            def handles(self, value: Any) -> bool:
                return isinstance(value, Row)

            def fields(self, value: Any) -> Iterator[tuple[str, Any]]:
                return iter(value._cols.items())

        registry = AdapterRegistry.with_defaults()
        registry.register(RowAdapter())
        assert registry.names()[0] == "row"

        result = filter_value({"row": Row(id=1, secret="x")}, exclude="row.secret", registry=registry)
        assert result.value == {"row": {"id": 1}}

    def test_custom_collection_adapter(self) -> None:
        class Page:
            def __init__(self, *items: Any) -> None:
                self._items = list(items)

        class PageAdapter(CollectionAdapter):
            name = "page"

            def handles(self, value: Any) -> bool:
                return isinstance(value, Page)

            def elements(self, value: Any) -> Iterator[Any]:
                return iter(value._items)

        registry = AdapterRegistry.with_defaults()
        registry.register(PageAdapter())
        page = Page({"id": 1, "x": 2}, {"id": 3, "x": 4})
        result = filter_value({"page": page}, include="page.id", registry=registry)
        assert result.value == {"page": [{"id": 1}, {"id": 3}]}

    def test_register_replaces_same_name(self) -> None:
        registry = AdapterRegistry.with_defaults()
        registry.register(DEFAULT_REGISTRY.find({}), first=False)
        assert registry.names().count("mapping") == 1
        assert registry.names()[-1] == "mapping"

    def test_unregister(self) -> None:
        registry = AdapterRegistry.with_defaults()
        registry.unregister("object")
        assert "object" not in registry.names()

        class Thing:
            def __init__(self) -> None:
                self.a = 1

        assert not registry.is_composite(Thing())
