"""Choice condition resolution.

A missing resolver is an error, never a silent ``False``: a mistyped hook
name would otherwise hide its choice forever.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic

from knotwork.models.story import ExpressionCondition, HookCondition
from knotwork.runtime.errors import MissingConditionHookError, MissingExpressionEvaluatorError
from knotwork.runtime.options import RuntimeOptions, StateT

if TYPE_CHECKING:
    from knotwork.models.story import Condition


class ConditionEvaluator(Generic[StateT]):
    """Resolves guards against caller state using registered capabilities."""

    def __init__(self, options: RuntimeOptions[StateT] | None = None) -> None:
        self._options: RuntimeOptions[StateT] = options or RuntimeOptions()

    def evaluate(self, condition: Condition | None, state: StateT) -> bool:
        """Return whether *condition* holds for *state*.

        No condition always passes.

        Raises:
            MissingConditionHookError: Hook name not registered.
            MissingExpressionEvaluatorError: No expression evaluator registered.
        """
        if condition is None:
            return True

        if isinstance(condition, HookCondition):
            hook = self._options.condition_hooks.get(condition.name)
            if hook is None:
                raise MissingConditionHookError(
                    hook_name=condition.name,
                    registered=sorted(self._options.condition_hooks),
                )
            return bool(hook(state))

        if isinstance(condition, ExpressionCondition):
            evaluator = self._options.expression_evaluator
            if evaluator is None:
                raise MissingExpressionEvaluatorError(expression=condition.expr)
            return bool(evaluator(condition.expr, state))

        msg = f"Unsupported condition type: {type(condition).__name__}"
        raise TypeError(msg)
