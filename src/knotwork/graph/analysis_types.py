"""Shared analysis types used by the reachability, dead-end and loop checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from knotwork.graph.model import NodeKey

IssueKind = Literal["INESCAPABLE_LOOP", "DEAD_END", "UNREACHABLE"]

_KIND_LABELS: dict[str, tuple[str, str]] = {
    "UNREACHABLE": ("unreachable", "unreachable"),
    "DEAD_END": ("dead end", "dead ends"),
    "INESCAPABLE_LOOP": ("inescapable loop", "inescapable loops"),
}


@dataclass
class AnalysisIssue:
    """A structural defect found in a story graph.

    Issues are data, not exceptions: they describe the story's shape.

    Attributes:
        kind: "INESCAPABLE_LOOP", "DEAD_END" or "UNREACHABLE".
        path_example: Node ids illustrating where the issue occurs.
        message: Human-readable description using qualified knot.node names.
        scc: For loop issues, the node ids of the strongly connected component.
        nodes: Qualified keys of the nodes involved.
    """

    kind: IssueKind
    path_example: list[str]
    message: str
    scc: list[str] | None = None
    nodes: list[NodeKey] = field(default_factory=list)


@dataclass
class AnalysisResult:
    """Aggregated results of a story analysis.

    Attributes:
        issues: Issues in check order: entry/unreachable, dead ends, loops.
    """

    issues: list[AnalysisIssue] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        """True if any issue was found."""
        return bool(self.issues)

    def of_kind(self, kind: IssueKind) -> list[AnalysisIssue]:
        """Return the issues of a single kind, preserving order."""
        return [issue for issue in self.issues if issue.kind == kind]

    @property
    def summary(self) -> str:
        """Human-readable summary of all issues."""
        parts: list[str] = []
        for kind, (singular, plural) in _KIND_LABELS.items():
            count = sum(1 for issue in self.issues if issue.kind == kind)
            if count:
                parts.append(f"{count} {singular if count == 1 else plural}")
        return ", ".join(parts) if parts else "no issues"
