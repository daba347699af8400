"""Runtime package - interactive traversal of a story graph."""

from knotwork.runtime.conditions import ConditionEvaluator
from knotwork.runtime.errors import (
    ChoiceNotFoundError,
    ConditionResolutionError,
    ConditionUnmetError,
    KnotNotFoundError,
    MissingConditionHookError,
    MissingExpressionEvaluatorError,
    NodeNotFoundError,
    StoryRuntimeError,
    StructuralError,
)
from knotwork.runtime.options import RuntimeOptions
from knotwork.runtime.runtime import StoryRuntime
from knotwork.runtime.step import ChoiceView, Position, StepResult

__all__ = [
    "ChoiceNotFoundError",
    "ChoiceView",
    "ConditionEvaluator",
    "ConditionResolutionError",
    "ConditionUnmetError",
    "KnotNotFoundError",
    "MissingConditionHookError",
    "MissingExpressionEvaluatorError",
    "NodeNotFoundError",
    "Position",
    "RuntimeOptions",
    "StepResult",
    "StoryRuntime",
    "StoryRuntimeError",
    "StructuralError",
]
