"""Runtime configuration.

The runtime has no ambient lookups: everything it needs to resolve choice
guards is handed over once, at construction, in a RuntimeOptions value.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar

StateT = TypeVar("StateT")

ConditionHook = Callable[[StateT], bool]
ExpressionEvaluator = Callable[[str, StateT], bool]


@dataclass(frozen=True)
class RuntimeOptions(Generic[StateT]):
    """Capabilities used to resolve choice conditions.

    Both slots are optional; a missing one only matters when a condition
    of that kind is actually encountered, and then it is an error.

    Attributes:
        condition_hooks: Hook name → predicate over caller state.
        expression_evaluator: Callable taking expression text and caller state.
    """

    condition_hooks: Mapping[str, ConditionHook[StateT]] = field(default_factory=dict)
    expression_evaluator: ExpressionEvaluator[StateT] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RuntimeOptions[StateT]:
        """Create options from a dictionary.

        Args:
            data: Mapping with optional ``condition_hooks`` / ``conditionHooks``
                and ``expression_evaluator`` / ``expressionEvaluator`` keys.

        Returns:
            RuntimeOptions instance.

        Raises:
            TypeError: If a hook or the evaluator is not callable.
        """
        hooks = data.get("condition_hooks", data.get("conditionHooks")) or {}
        evaluator = data.get("expression_evaluator", data.get("expressionEvaluator"))

        for name, hook in hooks.items():
            if not callable(hook):
                msg = f"Condition hook {name!r} must be callable, got {type(hook).__name__}"
                raise TypeError(msg)
        if evaluator is not None and not callable(evaluator):
            msg = f"expression_evaluator must be callable, got {type(evaluator).__name__}"
            raise TypeError(msg)

        return cls(condition_hooks=dict(hooks), expression_evaluator=evaluator)

    def with_hooks(self, **hooks: ConditionHook[StateT]) -> RuntimeOptions[StateT]:
        """Return a copy with additional hooks registered (later wins)."""
        return replace(self, condition_hooks={**self.condition_hooks, **hooks})
