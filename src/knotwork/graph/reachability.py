"""Reachability from the story's entry point."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from knotwork.graph.analysis_types import AnalysisIssue

if TYPE_CHECKING:
    from knotwork.graph.model import NodeKey, StoryGraph


def reachable_from(graph: StoryGraph, entry: NodeKey) -> list[NodeKey]:
    """BFS from *entry* over choice edges.

    Edges pointing at keys outside the graph do not extend reachability.

    Returns:
        Reachable keys in BFS discovery order, each once. Empty if *entry*
        itself is not in the graph.
    """
    if entry not in graph:
        return []
    visited: dict[NodeKey, None] = {entry: None}
    queue: deque[NodeKey] = deque([entry])
    while queue:
        current = queue.popleft()
        for next_key in graph.successors(current):
            if next_key in graph and next_key not in visited:
                visited[next_key] = None
                queue.append(next_key)
    return list(visited)


def check_reachability(graph: StoryGraph) -> tuple[list[NodeKey], list[AnalysisIssue]]:
    """Compute reachable nodes and report everything else.

    A missing entry knot or entry node yields one UNREACHABLE issue with an
    empty path example, and no traversal is attempted. Every node not
    reached is then reported as its own UNREACHABLE issue.

    Returns:
        Tuple of (reachable keys in BFS order, issues).
    """
    issues: list[AnalysisIssue] = []

    if graph.entry is None:
        issues.append(
            AnalysisIssue(
                kind="UNREACHABLE",
                path_example=[],
                message=f"Entry knot {graph.entry_knot} does not exist.",
            )
        )
        reachable: list[NodeKey] = []
    elif graph.entry not in graph:
        issues.append(
            AnalysisIssue(
                kind="UNREACHABLE",
                path_example=[],
                message=f"Entry node {graph.entry} does not exist.",
                nodes=[graph.entry],
            )
        )
        reachable = []
    else:
        reachable = reachable_from(graph, graph.entry)

    visited = set(reachable)
    for key in graph:
        if key in visited:
            continue
        issues.append(
            AnalysisIssue(
                kind="UNREACHABLE",
                path_example=[key.node_id],
                message=f"Node {key} is unreachable from start.",
                nodes=[key],
            )
        )
    return reachable, issues
