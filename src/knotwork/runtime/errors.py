"""Runtime error types with author-facing feedback.

These errors are raised when a runtime operation cannot proceed: a knot,
node or choice does not exist, a choice's guard is not satisfied, or a
guard cannot be resolved because its hook or evaluator was never
registered. All of them abort the operation immediately; none are retried.

Each error carries its semantic context as fields and can format itself as
a multi-line explanation for a story author.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from difflib import get_close_matches


class StoryRuntimeError(Exception):
    """Base class for runtime failures."""

    def to_author_feedback(self) -> str:
        """Format error as actionable feedback for a story author."""
        return str(self)


def _suggestion_lines(wanted: str, available: list[str]) -> list[str]:
    matches = get_close_matches(wanted, available, n=3, cutoff=0.6)
    if not matches:
        return []
    lines = ["**Did you mean one of these?**"]
    lines.extend(f"  - `{m}`" for m in matches)
    lines.append("")
    return lines


def _available_lines(title: str, available: list[str], limit: int = 20) -> list[str]:
    if not available:
        return []
    lines = [f"**{title}**:"]
    for a in sorted(available)[:limit]:
        lines.append(f"  - `{a}`")
    if len(available) > limit:
        lines.append(f"  - ... and {len(available) - limit} more")
    return lines


# ---------------------------------------------------------------------------
# Structural errors
# ---------------------------------------------------------------------------


class StructuralError(StoryRuntimeError):
    """A referenced knot, node or choice does not exist."""


@dataclass
class KnotNotFoundError(StructuralError):
    """Raised when a position or target names a knot the story lacks.

    Attributes:
        knot_id: The knot that was referenced.
        available: Knot ids defined by the story.
    """

    knot_id: str
    available: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__init__(f'Knot "{self.knot_id}" not found.')

    def to_author_feedback(self) -> str:
        lines = [
            "## Reference Error: Knot Not Found",
            "",
            f"**You referenced**: `{self.knot_id}`",
            "",
            "**Problem**: This knot does not exist in the story.",
            "",
        ]
        lines.extend(_suggestion_lines(self.knot_id, self.available))
        lines.extend(_available_lines("Valid knots", self.available))
        return "\n".join(lines)


@dataclass
class NodeNotFoundError(StructuralError):
    """Raised when a position or target names a node its knot lacks.

    Attributes:
        knot_id: Knot the node was looked up in.
        node_id: The node that was referenced.
        available: Node ids defined in that knot.
    """

    knot_id: str
    node_id: str
    available: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__init__(f'Node "{self.node_id}" in knot "{self.knot_id}" not found.')

    def to_author_feedback(self) -> str:
        lines = [
            "## Reference Error: Node Not Found",
            "",
            f"**You referenced**: `{self.knot_id}.{self.node_id}`",
            "",
            f"**Problem**: Knot `{self.knot_id}` has no node `{self.node_id}`.",
            "",
        ]
        lines.extend(_suggestion_lines(self.node_id, self.available))
        lines.extend(_available_lines(f"Nodes in `{self.knot_id}`", self.available))
        return "\n".join(lines)


@dataclass
class ChoiceNotFoundError(StructuralError):
    """Raised when choosing an id the current node does not offer.

    Attributes:
        choice_id: The choice that was requested.
        knot_id: Knot of the current node.
        node_id: The current node.
        available: Choice ids defined on the current node.
    """

    choice_id: str
    knot_id: str
    node_id: str
    available: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__init__(f'Choice "{self.choice_id}" not found in node "{self.node_id}".')

    def to_author_feedback(self) -> str:
        lines = [
            "## Reference Error: Choice Not Found",
            "",
            f"**You chose**: `{self.choice_id}`",
            f"**At**: `{self.knot_id}.{self.node_id}`",
            "",
        ]
        if not self.available:
            lines.append("**Problem**: This node has no choices.")
            return "\n".join(lines)
        lines.extend(["**Problem**: This node has no choice with that id.", ""])
        lines.extend(_suggestion_lines(self.choice_id, self.available))
        lines.extend(_available_lines("Choices here", self.available))
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Condition errors
# ---------------------------------------------------------------------------


@dataclass
class ConditionUnmetError(StoryRuntimeError):
    """Raised when choosing a choice whose guard evaluates false.

    Attributes:
        choice_id: The refused choice.
        knot_id: Knot of the current node.
        node_id: The current node.
    """

    choice_id: str
    knot_id: str
    node_id: str

    def __post_init__(self) -> None:
        super().__init__(f'Choice "{self.choice_id}" is not available due to condition.')


class ConditionResolutionError(StoryRuntimeError):
    """A guard was encountered but nothing was registered to resolve it."""


@dataclass
class MissingConditionHookError(ConditionResolutionError):
    """Raised when a hook condition names an unregistered predicate.

    Attributes:
        hook_name: Name used by the condition.
        registered: Hook names that were registered.
    """

    hook_name: str
    registered: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__init__(
            f'Condition hook "{self.hook_name}" not found. '
            "Register it via RuntimeOptions.condition_hooks."
        )

    def to_author_feedback(self) -> str:
        lines = [
            "## Condition Error: Hook Not Registered",
            "",
            f"**Hook**: `{self.hook_name}`",
            "",
            "**Problem**: No predicate with this name was registered with the runtime.",
            "",
        ]
        lines.extend(_suggestion_lines(self.hook_name, self.registered))
        lines.extend(_available_lines("Registered hooks", self.registered))
        return "\n".join(lines)


@dataclass
class MissingExpressionEvaluatorError(ConditionResolutionError):
    """Raised when an expression condition is met without an evaluator.

    Attributes:
        expression: The expression text that could not be evaluated.
    """

    expression: str

    def __post_init__(self) -> None:
        super().__init__(
            f'Expression evaluator not provided for expr: "{self.expression}". '
            "Register it via RuntimeOptions.expression_evaluator."
        )
