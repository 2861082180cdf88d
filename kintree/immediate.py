from __future__ import annotations

import logging
from typing import Optional, Sequence

from .layout import CenteredLayout, LayoutPolicy
from .models import Person, TreeNode

log = logging.getLogger(__name__)


def _find_person(members: Sequence[Person], person_id: str | None) -> Optional[Person]:
    if not person_id:
        return None
    for m in members:
        if m.person_id == person_id:
            return m
    return None


def build_immediate_family(
    members: Sequence[Person],
    viewer_person_id: str | None,
    *,
    layout: Optional[LayoutPolicy] = None,
) -> list[TreeNode]:
    """Build the one-root "my family" view: viewer, spouse and direct children.

    The spouse is read from the viewer's ``spouse_id`` field. Children are
    anyone whose father or mother is the viewer or that spouse, so a spouse's
    children from another union are included. Children are leaves; the view
    never goes deeper than one generation below the viewer.
    """

    layout = layout or CenteredLayout()

    viewer = _find_person(members, viewer_person_id)
    if viewer is None:
        log.info("viewer %s not found among %d members", viewer_person_id, len(members))
        return []

    spouse = _find_person(members, viewer.spouse_id)
    if spouse is not None and spouse.person_id == viewer.person_id:
        spouse = None

    adults = {viewer.person_id}
    if spouse is not None:
        adults.add(spouse.person_id)

    children: list[Person] = []
    seen: set[str] = set()
    for m in members:
        if m.person_id in adults or m.person_id in seen:
            continue
        if m.father_id in adults or m.mother_id in adults:
            seen.add(m.person_id)
            children.append(m)

    child_nodes: list[TreeNode] = []
    for idx, child in enumerate(children):
        x, y = layout.position(depth=1, column=idx)
        child_nodes.append(TreeNode(member=child, x=x, y=y, depth=1))

    x, y = layout.position(depth=0, column=0, span=len(child_nodes))
    return [
        TreeNode(
            member=viewer,
            children=child_nodes,
            spouse=spouse,
            x=x,
            y=y,
            depth=0,
        )
    ]
