"""Tests for the standalone pruning function."""

from fieldscope.core.pruning import is_empty_composite, prune, should_prune


class TestPrune:
    """prune(value, enabled)."""

    def test_disabled_returns_value_unchanged(self) -> None:
        value = {"a": {}, "b": []}
        assert prune(value, enabled=False) is value

    def test_cascading_removal(self) -> None:
        value = {"a": {"b": {"c": {}}}, "d": 1, "e": [[], {}]}
        assert prune(value) == {"d": 1}

    def test_root_kept_when_empty(self) -> None:
        assert prune({"a": {}}) == {}
        assert prune([[]]) == []

    def test_scalars_untouched(self) -> None:
        value = {"zero": 0, "blank": "", "none": None, "false": False}
        assert prune(value) == value

    def test_tuples_stay_tuples(self) -> None:
        assert prune({"t": ({"a": 1}, {})}) == {"t": ({"a": 1},)}

    def test_input_not_mutated(self) -> None:
        value = {"a": {"b": {}}, "c": 1}
        prune(value)
        assert value == {"a": {"b": {}}, "c": 1}


class TestHelpers:
    def test_is_empty_composite(self) -> None:
        assert is_empty_composite({})
        assert is_empty_composite(())
        assert not is_empty_composite("")
        assert not is_empty_composite({"a": 1})

    def test_should_prune_only_when_emptied(self) -> None:
        assert should_prune(True, True, {})
        assert not should_prune(True, False, {})
        assert not should_prune(False, True, {})
        assert not should_prune(True, True, {"a": 1})
