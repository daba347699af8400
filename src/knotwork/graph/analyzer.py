"""Static story analysis.

Pure, deterministic checks over a story definition, run before a story
ships. Nothing here raises for a malformed story: every defect found is
returned as an AnalysisIssue.

Check order (and therefore issue order):
    1. Missing entry point and unreachable nodes
    2. Dead ends among reachable nodes
    3. Inescapable loops among reachable nodes
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from knotwork.graph.analysis_types import AnalysisResult
from knotwork.graph.dead_ends import find_dead_ends
from knotwork.graph.model import build_story_graph
from knotwork.graph.reachability import check_reachability
from knotwork.graph.scc import find_inescapable_loops
from knotwork.observability.logging import get_logger

if TYPE_CHECKING:
    from knotwork.models.story import Story

log = get_logger(__name__)


def analyze_story(story: Story[Any]) -> AnalysisResult:
    """Analyze a story for structural defects.

    Checks for:
    - Unreachable nodes: nodes that cannot be reached from the entry point
    - Dead ends: reachable nodes with no choices and no ending marker
    - Inescapable loops: reachable loops with no ending and no way out

    No state is kept between calls; analyzing the same story twice gives
    equal results.

    Args:
        story: Story definition to analyze. Not modified.

    Returns:
        AnalysisResult with issues in check order.
    """
    graph = build_story_graph(story)

    reachable, issues = check_reachability(graph)
    issues.extend(find_dead_ends(graph, reachable))
    issues.extend(find_inescapable_loops(graph, reachable))

    result = AnalysisResult(issues=issues)
    log_event = log.info if result.has_issues else log.debug
    log_event(
        "story_analyzed",
        nodes=len(graph),
        reachable=len(reachable),
        unreachable=len(result.of_kind("UNREACHABLE")),
        dead_ends=len(result.of_kind("DEAD_END")),
        inescapable_loops=len(result.of_kind("INESCAPABLE_LOOP")),
    )
    return result
