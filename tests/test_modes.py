"""Tests for mode resolution."""

import pytest

from fieldscope.core.modes import Mode, resolve_mode
from fieldscope.core.paths import PathSpec


class TestResolveMode:
    """All four emptiness combinations."""

    @pytest.mark.parametrize(
        "include, exclude, expected",
        [
            ((), (), Mode.PASS_THROUGH),
            (("a",), (), Mode.WHITELIST),
            ((), ("a",), Mode.BLACKLIST),
            (("a",), ("a.b",), Mode.WHITELIST),
        ],
    )
    def test_resolution(self, include, exclude, expected) -> None:
        assert resolve_mode(PathSpec.of(*include), PathSpec.of(*exclude)) is expected
