"""Graph package - static analysis of story graphs.

Derives a directed graph from a story definition and checks it for
unreachable content, dead ends and inescapable loops.
"""

from knotwork.graph.analysis_types import AnalysisIssue, AnalysisResult, IssueKind
from knotwork.graph.analyzer import analyze_story
from knotwork.graph.dead_ends import find_dead_ends
from knotwork.graph.model import NodeKey, StoryGraph, build_story_graph
from knotwork.graph.reachability import check_reachability, reachable_from
from knotwork.graph.scc import find_inescapable_loops, strongly_connected_components

__all__ = [
    "AnalysisIssue",
    "AnalysisResult",
    "IssueKind",
    "NodeKey",
    "StoryGraph",
    "analyze_story",
    "build_story_graph",
    "check_reachability",
    "find_dead_ends",
    "find_inescapable_loops",
    "reachable_from",
    "strongly_connected_components",
]
