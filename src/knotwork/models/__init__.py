"""Pydantic models for story definitions.

These models define the structured, immutable shape of a branching story:
knots containing nodes, nodes carrying choices, and choices optionally
guarded by conditions.
"""

from knotwork.models.story import (
    Choice,
    Condition,
    EffectT,
    Ending,
    ExpressionCondition,
    HookCondition,
    Knot,
    Node,
    Story,
    Target,
)

__all__ = [
    "Choice",
    "Condition",
    "EffectT",
    "Ending",
    "ExpressionCondition",
    "HookCondition",
    "Knot",
    "Node",
    "Story",
    "Target",
]
