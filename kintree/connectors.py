from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

from .models import TreeNode, iter_nodes

CARD_WIDTH = 280
CARD_HEIGHT = 200
# Horizontal bus sits this far below the top of the parent card.
BUS_OFFSET = 250

LineKind = Literal["stem", "bus", "drop"]


@dataclass(frozen=True)
class Line:
    kind: LineKind
    x1: int
    y1: int
    x2: int
    y2: int
    parent_id: str
    child_id: str | None = None

    def to_public(self) -> dict[str, object]:
        return {
            "kind": self.kind,
            "x1": self.x1,
            "y1": self.y1,
            "x2": self.x2,
            "y2": self.y2,
            "parent": self.parent_id,
            "child": self.child_id,
        }


def connector_lines(forest: Iterable[TreeNode]) -> list[Line]:
    """Parent-to-children connector segments, in card coordinates.

    Per parent with children: a stem down from the card's bottom-center, a
    bus across first..last child (only with 2+ children), and a drop from the
    bus to the top-center of each child card.
    """

    mid = CARD_WIDTH // 2
    out: list[Line] = []
    for node in iter_nodes(forest):
        if not node.children:
            continue
        pid = node.person_id
        bus_y = node.y + BUS_OFFSET
        out.append(Line("stem", node.x + mid, node.y + CARD_HEIGHT, node.x + mid, bus_y, pid))
        if len(node.children) > 1:
            first, last = node.children[0], node.children[-1]
            out.append(Line("bus", first.x + mid, bus_y, last.x + mid, bus_y, pid))
        for child in node.children:
            out.append(Line("drop", child.x + mid, bus_y, child.x + mid, child.y, pid, child.person_id))
    return out
