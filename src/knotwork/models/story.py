"""Story definition models.

A story is a directed graph of beats ("nodes") grouped into sections
("knots"). These models describe the plain, serializable shape supplied
by an external loader or authoring tool; they are immutable once built and
are shared read-only by the analyzer and any number of runtimes.

The effect payload is application-defined. Models are generic over it so
an embedding game can pin one concrete shape::

    class Effect(BaseModel):
        vigor: int = 0

    story = Story[Effect].from_dict(data)

Field names accept both the wire spelling (``entryKnot``, ``entryNode``)
and the Python spelling (``entry_knot``, ``entry_node``).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

EffectT = TypeVar("EffectT")


class _StoryModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------


class HookCondition(_StoryModel):
    """Guard resolved against a caller-registered predicate table."""

    type: Literal["hook"] = "hook"
    name: str = Field(min_length=1)


class ExpressionCondition(_StoryModel):
    """Guard resolved by a caller-supplied expression evaluator.

    The expression text is opaque to knotwork; no grammar is defined here.
    """

    type: Literal["expression"] = "expression"
    expr: str = Field(min_length=1)


Condition = Annotated[HookCondition | ExpressionCondition, Field(discriminator="type")]


# ---------------------------------------------------------------------------
# Graph node types
# ---------------------------------------------------------------------------


class Ending(_StoryModel):
    """Marks a node terminal ("good", "bad", "neutral", ...)."""

    id: str
    label: str | None = None


class Target(_StoryModel):
    """Destination of a choice or divert.

    An omitted knot means "stay in the current knot".
    """

    knot: str | None = None
    node: str = Field(min_length=1)

    def resolve_knot(self, current_knot: str) -> str:
        """Return the target knot, defaulting to *current_knot*."""
        return self.knot or current_knot


class Choice(_StoryModel, Generic[EffectT]):
    """A labeled, optionally guarded edge leaving a node."""

    id: str
    label: str
    target: Target
    effect: EffectT | None = None
    condition: Condition | None = None

    @field_validator("condition", mode="before")
    @classmethod
    def _expand_condition_shorthand(cls, value: Any) -> Any:
        """Accept ``{"hook": name}`` and ``{"expression": text}`` shorthands."""
        if isinstance(value, Mapping) and "type" not in value:
            if "hook" in value:
                return {"type": "hook", "name": value["hook"]}
            if "expression" in value:
                return {"type": "expression", "expr": value["expression"]}
        return value


class Node(_StoryModel, Generic[EffectT]):
    """A single story beat."""

    id: str
    text: str | list[str] | None = None
    tags: list[str] = Field(default_factory=list)
    choices: list[Choice[EffectT]] = Field(default_factory=list)
    effect: EffectT | None = None
    ending: Ending | None = None

    @property
    def lines(self) -> list[str]:
        """Display text as an ordered list of strings."""
        if self.text is None:
            return []
        if isinstance(self.text, str):
            return [self.text]
        return list(self.text)

    @property
    def is_terminal(self) -> bool:
        return self.ending is not None

    def get_choice(self, choice_id: str) -> Choice[EffectT] | None:
        """Return the first choice with *choice_id*, or None."""
        return next((choice for choice in self.choices if choice.id == choice_id), None)


class Knot(_StoryModel, Generic[EffectT]):
    """A named section of a story with one designated entry node."""

    id: str
    entry_node: str = Field(alias="entryNode")
    nodes: dict[str, Node[EffectT]] = Field(default_factory=dict)


class Story(_StoryModel, Generic[EffectT]):
    """A complete story definition."""

    version: Literal[1] = 1
    entry_knot: str = Field(alias="entryKnot")
    knots: dict[str, Knot[EffectT]] = Field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Story[EffectT]:
        """Build a story from a plain mapping.

        Raises:
            pydantic.ValidationError: If required fields are missing or mistyped.
        """
        return cls.model_validate(data)

    def get_node(self, knot_id: str, node_id: str) -> Node[EffectT] | None:
        """Look up a node by its qualified identity, or None if either part is missing."""
        knot = self.knots.get(knot_id)
        if knot is None:
            return None
        return knot.nodes.get(node_id)
