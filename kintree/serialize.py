from __future__ import annotations

from typing import Any, Iterable, Optional

from .connectors import connector_lines
from .models import Person, TreeNode, iter_nodes


def initials(first_name: str | None) -> str:
    """Card avatar text: first two letters upper-cased, else one, else '?'."""
    s = (first_name or "").strip()
    if len(s) >= 2:
        return s[:2].upper()
    if s:
        return s.upper()
    return "?"


def person_to_public(p: Optional[Person]) -> Optional[dict[str, Any]]:
    if p is None:
        return None

    # Registry extras keep their camelCase keys; blank values are dropped.
    attrs: dict[str, Any] = {}
    for k, v in p.model_dump(exclude_none=True).items():
        if isinstance(v, str) and not v.strip():
            continue
        attrs[k] = v

    return {
        "id": p.person_id,
        "type": "person",
        "first_name": p.first_name or None,
        "initials": initials(p.first_name),
        "generation": p.generation,
        "gender": p.gender,
        "attributes": attrs,
    }


def node_to_public(node: TreeNode) -> dict[str, Any]:
    out = person_to_public(node.member) or {}
    out.update(
        {
            "x": node.x,
            "y": node.y,
            "depth": node.depth,
            "spouse": person_to_public(node.spouse),
            "children": [node_to_public(c) for c in node.children],
        }
    )
    return out


def forest_edges(forest: Iterable[TreeNode]) -> list[dict[str, str]]:
    edges: list[dict[str, str]] = []
    for node in iter_nodes(forest):
        if node.spouse is not None:
            edges.append({"from": node.person_id, "to": node.spouse.person_id, "type": "spouse"})
        for child in node.children:
            edges.append({"from": node.person_id, "to": child.person_id, "type": "child"})
    return edges


def forest_to_payload(forest: list[TreeNode]) -> dict[str, Any]:
    return {
        "nodes": [node_to_public(n) for n in forest],
        "edges": forest_edges(forest),
        "lines": [ln.to_public() for ln in connector_lines(forest)],
    }
