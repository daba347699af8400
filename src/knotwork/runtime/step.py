"""Values returned by the runtime."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic

from knotwork.models.story import EffectT

if TYPE_CHECKING:
    from knotwork.models.story import Ending


@dataclass(frozen=True)
class Position:
    """Where a runtime currently is."""

    knot_id: str
    node_id: str

    def __str__(self) -> str:
        return f"{self.knot_id}.{self.node_id}"


@dataclass(frozen=True)
class ChoiceView:
    """A choice as presented to the player.

    Targets and effects are transition-only data and are not exposed.
    """

    id: str
    label: str


@dataclass(frozen=True)
class StepResult(Generic[EffectT]):
    """Everything a presentation layer needs to render one beat.

    Attributes:
        node_id: Node arrived at (or currently at).
        knot_id: Knot of that node.
        text: Display text, one entry per paragraph.
        tags: Free-form node tags.
        ending: Ending marker if the node is terminal.
        choices: Choices whose conditions hold for the supplied state.
        effects: Effects triggered by this step: the taken choice's effect
            first, then the node's own arrival effect.
    """

    node_id: str
    knot_id: str
    text: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    ending: Ending | None = None
    choices: list[ChoiceView] = field(default_factory=list)
    effects: list[EffectT] = field(default_factory=list)

    @property
    def is_ending(self) -> bool:
        return self.ending is not None

    @property
    def position(self) -> Position:
        return Position(self.knot_id, self.node_id)
