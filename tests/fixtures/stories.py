"""Story builders shared by analyzer and runtime tests.

Builders return plain dicts in the wire shape so tests exercise the same
parsing path as real story files.
"""

from __future__ import annotations

from typing import Any

from knotwork.models import Story


def choice(
    choice_id: str,
    node: str,
    *,
    knot: str | None = None,
    label: str | None = None,
    effect: Any = None,
    condition: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Build a choice dict."""
    data: dict[str, Any] = {
        "id": choice_id,
        "label": label or choice_id.replace("-", " ").title(),
        "target": {"node": node} if knot is None else {"knot": knot, "node": node},
    }
    if effect is not None:
        data["effect"] = effect
    if condition is not None:
        data["condition"] = condition
    return data


def node(
    node_id: str,
    *choices: dict[str, Any],
    text: str | list[str] | None = None,
    ending: str | None = None,
    effect: Any = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Build a node dict; ``ending`` is the ending id when the node is terminal."""
    data: dict[str, Any] = {"id": node_id}
    if text is not None:
        data["text"] = text
    if choices:
        data["choices"] = list(choices)
    if ending is not None:
        data["ending"] = {"id": ending}
    if effect is not None:
        data["effect"] = effect
    if tags is not None:
        data["tags"] = tags
    return data


def knot(knot_id: str, entry: str, *nodes: dict[str, Any]) -> dict[str, Any]:
    """Build a knot dict from node dicts."""
    return {"id": knot_id, "entryNode": entry, "nodes": {n["id"]: n for n in nodes}}


def story(entry_knot: str, *knots: dict[str, Any]) -> Story[Any]:
    """Build a Story from knot dicts."""
    return Story.from_dict(
        {"version": 1, "entryKnot": entry_knot, "knots": {k["id"]: k for k in knots}}
    )


def single_knot_story(entry: str, *nodes: dict[str, Any], knot_id: str = "intro") -> Story[Any]:
    """Build a one-knot story whose entry knot is ``intro``."""
    return story(knot_id, knot(knot_id, entry, *nodes))


def make_walkthrough_story() -> Story[Any]:
    """Two-knot story used for runtime walks.

    intro.start --look (vigor+1)--> intro.look (vigor+1) --open--> hallway.entry (ending)
    """
    return story(
        "intro",
        knot(
            "intro",
            "start",
            node(
                "start",
                choice("look", "look", label="Look around", effect={"vigor": 1}),
                text="You wake up.",
            ),
            node(
                "look",
                choice("open", "entry", knot="hallway", label="Open the door"),
                text=["The room is dim.", "A door stands ajar."],
                effect={"vigor": 1},
                tags=["indoors"],
            ),
        ),
        knot(
            "hallway",
            "entry",
            node("entry", text="You step into the hallway.", ending="escaped"),
        ),
    )


def make_locked_door_story() -> Story[Any]:
    """One node with an ungated and a hook-gated choice."""
    return single_knot_story(
        "door",
        node(
            "door",
            choice("knock", "wait"),
            choice("unlock", "inside", condition={"type": "hook", "name": "hasKey"}),
            text="A locked door.",
        ),
        node("wait", text="Nobody answers.", ending="waited"),
        node("inside", text="The lock clicks.", ending="inside"),
    )
