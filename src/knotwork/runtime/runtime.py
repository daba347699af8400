"""Story runtime state machine.

A runtime owns exactly one Position inside a story and moves it through
``choose`` (a player decision) or ``divert`` (an unconditional jump, e.g.
restoring a save). The story itself is never modified, so any number of
runtimes may share one story. A single runtime is not synchronized: give
each caller its own instance.

Every transition validates its target before moving, so the position
always names an existing node.

Example::

    runtime = StoryRuntime(
        story,
        RuntimeOptions(condition_hooks={"has_key": lambda state: state["has_key"]}),
    )
    step = runtime.current({"has_key": False})
    step = runtime.choose(step.choices[0].id, {"has_key": False})
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Generic

from pydantic import ValidationError

from knotwork.models.story import EffectT, Target
from knotwork.observability.logging import get_logger
from knotwork.runtime.conditions import ConditionEvaluator
from knotwork.runtime.errors import (
    ChoiceNotFoundError,
    ConditionUnmetError,
    KnotNotFoundError,
    NodeNotFoundError,
)
from knotwork.runtime.options import RuntimeOptions, StateT
from knotwork.runtime.step import ChoiceView, Position, StepResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from knotwork.models.story import Node, Story

log = get_logger(__name__)


class StoryRuntime(Generic[EffectT, StateT]):
    """Walks a story one beat at a time.

    Args:
        story: Story to run. Treated as read-only.
        options: Condition hooks and expression evaluator.

    Raises:
        KnotNotFoundError: The story's entry knot does not exist.
        NodeNotFoundError: The entry knot's entry node does not exist.
    """

    def __init__(
        self,
        story: Story[EffectT],
        options: RuntimeOptions[StateT] | None = None,
    ) -> None:
        self._story = story
        self._conditions: ConditionEvaluator[StateT] = ConditionEvaluator(options)

        entry_knot = story.knots.get(story.entry_knot)
        if entry_knot is None:
            raise KnotNotFoundError(knot_id=story.entry_knot, available=list(story.knots))
        self._get_node(story.entry_knot, entry_knot.entry_node)
        self._position = Position(story.entry_knot, entry_knot.entry_node)

        log.debug("runtime_started", position=str(self._position))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def get_story(self) -> Story[EffectT]:
        return self._story

    def get_position(self) -> Position:
        return self._position

    @property
    def is_finished(self) -> bool:
        """True if the current node carries an ending marker."""
        return self._current_node().ending is not None

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def current(self, state: StateT) -> StepResult[EffectT]:
        """Describe the current node without moving.

        Args:
            state: Caller-owned data, used only to evaluate choice conditions.
        """
        return self._build_step(self._position, state)

    def choose(self, choice_id: str, state: StateT) -> StepResult[EffectT]:
        """Take a choice on the current node and advance.

        The choice's own effect is reported ahead of the target node's
        arrival effect.

        Raises:
            ChoiceNotFoundError: The current node has no such choice.
            ConditionUnmetError: The choice's condition is false for *state*.
            ConditionResolutionError: The condition's resolver is not registered.
            KnotNotFoundError: The target knot does not exist.
            NodeNotFoundError: The target node does not exist.
        """
        here = self._position
        node = self._current_node()
        choice = node.get_choice(choice_id)
        if choice is None:
            raise ChoiceNotFoundError(
                choice_id=choice_id,
                knot_id=here.knot_id,
                node_id=here.node_id,
                available=[c.id for c in node.choices],
            )

        if not self._conditions.evaluate(choice.condition, state):
            log.debug("choice_refused", choice=choice_id, position=str(here))
            raise ConditionUnmetError(
                choice_id=choice_id, knot_id=here.knot_id, node_id=here.node_id
            )

        target = self._resolve(choice.target)
        extra_effects = [choice.effect] if choice.effect is not None else []
        step = self._build_step(target, state, extra_effects)
        self._position = target

        log.debug("choice_taken", choice=choice_id, source=str(here), target=str(target))
        return step

    def divert(
        self,
        target: Target | Position | Mapping[str, str],
        state: StateT,
    ) -> StepResult[EffectT]:
        """Jump directly to a node, bypassing choices and conditions.

        Args:
            target: A Target, a Position, or a mapping with ``node`` and an
                optional ``knot``. An omitted knot means the current knot.
            state: Caller-owned data, used only to evaluate choice conditions.

        Raises:
            KnotNotFoundError: The target knot does not exist.
            NodeNotFoundError: The target node does not exist, or a mapping
                target has no usable ``node``.
        """
        here = self._position
        resolved = self._resolve(self._coerce_target(target))
        step = self._build_step(resolved, state)
        self._position = resolved

        log.debug("diverted", source=str(here), target=str(resolved))
        return step

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _get_node(self, knot_id: str, node_id: str) -> Node[EffectT]:
        knot = self._story.knots.get(knot_id)
        if knot is None:
            raise KnotNotFoundError(knot_id=knot_id, available=list(self._story.knots))
        node = knot.nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(knot_id=knot_id, node_id=node_id, available=list(knot.nodes))
        return node

    def _current_node(self) -> Node[EffectT]:
        return self._get_node(self._position.knot_id, self._position.node_id)

    def _resolve(self, target: Target) -> Position:
        """Resolve *target* against the current knot and verify it exists."""
        knot_id = target.resolve_knot(self._position.knot_id)
        self._get_node(knot_id, target.node)
        return Position(knot_id, target.node)

    def _build_step(
        self,
        position: Position,
        state: StateT,
        extra_effects: Sequence[EffectT] = (),
    ) -> StepResult[EffectT]:
        node = self._get_node(position.knot_id, position.node_id)

        choices = [
            ChoiceView(id=choice.id, label=choice.label)
            for choice in node.choices
            if self._conditions.evaluate(choice.condition, state)
        ]

        effects = list(extra_effects)
        if node.effect is not None:
            effects.append(node.effect)

        return StepResult(
            node_id=position.node_id,
            knot_id=position.knot_id,
            text=node.lines,
            tags=list(node.tags),
            ending=node.ending,
            choices=choices,
            effects=effects,
        )

    def _coerce_target(self, target: Target | Position | Mapping[str, str]) -> Target:
        if isinstance(target, Target):
            return target
        if isinstance(target, Position):
            return Target(knot=target.knot_id, node=target.node_id)
        try:
            return Target.model_validate(target)
        except ValidationError as e:
            fields = target if isinstance(target, Mapping) else {}
            knot_id = str(fields.get("knot") or self._position.knot_id)
            knot = self._story.knots.get(knot_id)
            raise NodeNotFoundError(
                knot_id=knot_id,
                node_id=str(fields.get("node") or ""),
                available=list(knot.nodes) if knot else [],
            ) from e
