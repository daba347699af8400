"""Directed graph derived from a story definition.

Every node is addressed by its (knot, node) pair. The adjacency mapping
lists, per node, the targets of its choices in choice order; targets are
not validated, so a malformed edge simply points at a key that is not in
the graph. Downstream checks skip such keys instead of failing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NamedTuple

from knotwork.observability.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from knotwork.models.story import Story

log = get_logger(__name__)


class NodeKey(NamedTuple):
    """Qualified identity of a node."""

    knot_id: str
    node_id: str

    def __str__(self) -> str:
        return f"{self.knot_id}.{self.node_id}"


@dataclass(frozen=True)
class StoryGraph:
    """Adjacency view of a story.

    Attributes:
        adjacency: Node key → ordered target keys. Its keys are exactly the
            nodes defined by the story, in knot then node definition order.
        terminals: Keys of nodes carrying an ending marker.
        entry_knot: The story's declared entry knot.
        entry: Key of the entry node, or None if the entry knot is missing.
    """

    adjacency: dict[NodeKey, list[NodeKey]]
    terminals: frozenset[NodeKey]
    entry_knot: str
    entry: NodeKey | None

    def __contains__(self, key: object) -> bool:
        return key in self.adjacency

    def __iter__(self) -> Iterator[NodeKey]:
        return iter(self.adjacency)

    def __len__(self) -> int:
        return len(self.adjacency)

    @property
    def nodes(self) -> list[NodeKey]:
        """All node keys in definition order."""
        return list(self.adjacency)

    def successors(self, key: NodeKey) -> list[NodeKey]:
        """Targets of *key*'s choices, including dangling ones."""
        return self.adjacency.get(key, [])

    def is_terminal(self, key: NodeKey) -> bool:
        return key in self.terminals


def build_story_graph(story: Story[Any]) -> StoryGraph:
    """Derive the directed graph of a story.

    Pure transformation: the story is not modified and no edge target is
    checked for existence.

    Args:
        story: Story definition.

    Returns:
        StoryGraph with adjacency, terminal set and entry key.
    """
    adjacency: dict[NodeKey, list[NodeKey]] = {}
    terminals: set[NodeKey] = set()

    for knot_id, knot in story.knots.items():
        for node_id, node in knot.nodes.items():
            key = NodeKey(knot_id, node_id)
            adjacency[key] = [
                NodeKey(choice.target.resolve_knot(knot_id), choice.target.node)
                for choice in node.choices
            ]
            if node.ending is not None:
                terminals.add(key)

    entry_knot = story.knots.get(story.entry_knot)
    entry = NodeKey(story.entry_knot, entry_knot.entry_node) if entry_knot else None

    log.debug(
        "story_graph_built",
        nodes=len(adjacency),
        edges=sum(len(targets) for targets in adjacency.values()),
        terminals=len(terminals),
    )
    return StoryGraph(
        adjacency=adjacency,
        terminals=frozenset(terminals),
        entry_knot=story.entry_knot,
        entry=entry,
    )
