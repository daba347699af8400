"""knotwork: branching-narrative runtime and story graph analyzer."""

from knotwork.graph import AnalysisIssue, AnalysisResult, NodeKey, analyze_story
from knotwork.models import Story
from knotwork.runtime import RuntimeOptions, StepResult, StoryRuntime

__version__ = "0.1.0"

__all__ = [
    "AnalysisIssue",
    "AnalysisResult",
    "NodeKey",
    "RuntimeOptions",
    "StepResult",
    "Story",
    "StoryRuntime",
    "__version__",
    "analyze_story",
]
