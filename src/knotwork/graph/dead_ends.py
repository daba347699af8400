"""Dead-end detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from knotwork.graph.analysis_types import AnalysisIssue

if TYPE_CHECKING:
    from collections.abc import Collection

    from knotwork.graph.model import NodeKey, StoryGraph


def find_dead_ends(graph: StoryGraph, reachable: Collection[NodeKey]) -> list[AnalysisIssue]:
    """Report reachable nodes with no choices and no ending marker.

    Unreachable nodes are skipped; they are already reported as such.
    Issues follow the graph's node order.
    """
    reachable_set = set(reachable)
    issues: list[AnalysisIssue] = []
    for key in graph:
        if key not in reachable_set:
            continue
        if graph.successors(key) or graph.is_terminal(key):
            continue
        issues.append(
            AnalysisIssue(
                kind="DEAD_END",
                path_example=[key.node_id],
                message=f"Node {key} is a dead end (no choices and not an ending).",
                nodes=[key],
            )
        )
    return issues
