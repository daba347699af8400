"""Strongly connected components and inescapable-loop detection.

Tarjan's algorithm, run with an explicit frame stack instead of native
recursion so that long linear stories cannot exhaust the interpreter's
recursion limit.

Algorithm:
    1. Visit nodes in the given order; each undiscovered node starts a DFS.
    2. On discovery a node gets the next index, its low-link is set to that
       index and it is pushed on the component stack.
    3. A frame holds the node and an iterator over its successors, so a
       frame resumes exactly where it left off after a child returns.
    4. When a frame is exhausted its low-link is folded into the parent's;
       if low-link equals its own index, the component is popped.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, TypeVar

from knotwork.graph.analysis_types import AnalysisIssue

if TYPE_CHECKING:
    from knotwork.graph.model import NodeKey, StoryGraph

K = TypeVar("K", bound=Hashable)


def strongly_connected_components(
    nodes: Iterable[K],
    successors: Mapping[K, Sequence[K]],
) -> list[list[K]]:
    """Partition *nodes* into strongly connected components.

    Only *nodes* take part: edges to anything outside that set are ignored.

    Args:
        nodes: Nodes to partition, in the order roots are tried.
        successors: Adjacency mapping; missing entries mean no successors.

    Returns:
        Components in completion order. Members appear in stack-pop order.
    """
    members: dict[K, None] = dict.fromkeys(nodes)
    index = 0
    indices: dict[K, int] = {}
    lowlinks: dict[K, int] = {}
    stack: list[K] = []
    on_stack: set[K] = set()
    components: list[list[K]] = []

    def discover(node: K) -> Iterator[K]:
        nonlocal index
        indices[node] = index
        lowlinks[node] = index
        index += 1
        stack.append(node)
        on_stack.add(node)
        return iter(successors.get(node, ()))

    for root in members:
        if root in indices:
            continue
        frames: list[tuple[K, Iterator[K]]] = [(root, discover(root))]
        while frames:
            node, neighbors = frames[-1]
            descended = False
            for neighbor in neighbors:
                if neighbor not in members:
                    continue
                if neighbor not in indices:
                    frames.append((neighbor, discover(neighbor)))
                    descended = True
                    break
                if neighbor in on_stack:
                    lowlinks[node] = min(lowlinks[node], indices[neighbor])
            if descended:
                continue

            frames.pop()
            if frames:
                parent = frames[-1][0]
                lowlinks[parent] = min(lowlinks[parent], lowlinks[node])

            if lowlinks[node] == indices[node]:
                component: list[K] = []
                while True:
                    popped = stack.pop()
                    on_stack.discard(popped)
                    component.append(popped)
                    if popped == node:
                        break
                components.append(component)

    return components


def is_candidate_loop(component: Sequence[NodeKey], graph: StoryGraph) -> bool:
    """True for components of two or more nodes, or one node with a self-edge."""
    if len(component) > 1:
        return True
    only = component[0]
    return only in graph.successors(only)


def can_escape(component: Sequence[NodeKey], graph: StoryGraph) -> bool:
    """True if any member is terminal or any edge leaves the component.

    A dangling target counts as leaving the component.
    """
    if any(graph.is_terminal(key) for key in component):
        return True
    component_set = set(component)
    return any(
        target not in component_set for key in component for target in graph.successors(key)
    )


def find_inescapable_loops(graph: StoryGraph, reachable: Sequence[NodeKey]) -> list[AnalysisIssue]:
    """Report reachable loops with no ending inside and no way out.

    Args:
        graph: Story graph.
        reachable: Reachable keys; the SCC pass is restricted to these.

    Returns:
        One INESCAPABLE_LOOP issue per offending component.
    """
    issues: list[AnalysisIssue] = []
    for component in strongly_connected_components(reachable, graph.adjacency):
        if not is_candidate_loop(component, graph) or can_escape(component, graph):
            continue
        node_ids = [key.node_id for key in component]
        issues.append(
            AnalysisIssue(
                kind="INESCAPABLE_LOOP",
                path_example=node_ids,
                scc=list(node_ids),
                message="Inescapable loop detected involving nodes: "
                + ", ".join(str(key) for key in component),
                nodes=list(component),
            )
        )
    return issues
