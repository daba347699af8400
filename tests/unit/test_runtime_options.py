"""Tests for runtime configuration."""

from __future__ import annotations

from typing import Any

import pytest

from knotwork.runtime.options import RuntimeOptions


def _always(_: Any) -> bool:
    return True


def _never(_: Any) -> bool:
    return False


class TestRuntimeOptions:
    """Tests for RuntimeOptions."""

    def test_defaults_are_empty(self) -> None:
        options: RuntimeOptions[Any] = RuntimeOptions()

        assert dict(options.condition_hooks) == {}
        assert options.expression_evaluator is None

    def test_from_dict_snake_case(self) -> None:
        def evaluator(expr: str, state: Any) -> bool:
            return True

        options: RuntimeOptions[Any] = RuntimeOptions.from_dict(
            {"condition_hooks": {"hasKey": _always}, "expression_evaluator": evaluator}
        )

        assert options.condition_hooks == {"hasKey": _always}
        assert options.expression_evaluator is evaluator

    def test_from_dict_camel_case(self) -> None:
        """Wire-style key names are accepted too."""
        options: RuntimeOptions[Any] = RuntimeOptions.from_dict(
            {"conditionHooks": {"hasKey": _always}}
        )

        assert options.condition_hooks == {"hasKey": _always}
        assert options.expression_evaluator is None

    def test_from_dict_empty(self) -> None:
        options: RuntimeOptions[Any] = RuntimeOptions.from_dict({})

        assert dict(options.condition_hooks) == {}

    def test_from_dict_rejects_non_callable_hook(self) -> None:
        with pytest.raises(TypeError, match="'hasKey' must be callable"):
            RuntimeOptions.from_dict({"condition_hooks": {"hasKey": True}})

    def test_from_dict_rejects_non_callable_evaluator(self) -> None:
        with pytest.raises(TypeError, match="expression_evaluator must be callable"):
            RuntimeOptions.from_dict({"expressionEvaluator": "gold > 3"})

    def test_from_dict_copies_hooks(self) -> None:
        """Later changes to the source mapping do not leak in."""
        hooks = {"hasKey": _always}
        options: RuntimeOptions[Any] = RuntimeOptions.from_dict({"condition_hooks": hooks})

        hooks["late"] = _never

        assert "late" not in options.condition_hooks

    def test_with_hooks_returns_copy(self) -> None:
        base: RuntimeOptions[Any] = RuntimeOptions(condition_hooks={"hasKey": _always})

        extended = base.with_hooks(hasKey=_never, hasSword=_always)

        assert extended.condition_hooks == {"hasKey": _never, "hasSword": _always}
        assert base.condition_hooks == {"hasKey": _always}

    def test_options_are_frozen(self) -> None:
        options: RuntimeOptions[Any] = RuntimeOptions()

        with pytest.raises(AttributeError):
            options.expression_evaluator = None  # type: ignore[misc]
