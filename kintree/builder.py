"""Full-lineage ("root view") tree construction.

Roots are the members at the lowest recorded generation plus anyone with no
recorded parents. Each root's descendants are discovered by scanning the flat
member list for parent links; a node's spouse is inferred from co-parentage
(the other parent of one of its children), not from ``spouse_id``.

A single ``visited`` set is threaded through the whole build so that no
person becomes more than one node (or both a node and a spouse), and so that
cyclic parent data terminates.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .layout import ROOT_COLUMN_STRIDE, LayoutPolicy, SequentialLayout
from .models import Person, TreeNode

log = logging.getLogger(__name__)


def _min_generation(members: Sequence[Person]) -> Optional[int]:
    gens = [m.generation for m in members if m.generation is not None]
    return min(gens) if gens else None


def _select_roots(members: Sequence[Person]) -> list[Person]:
    """Return root candidates, lowest-generation members first.

    The predicate is a union: a member at the minimum generation is a root even
    when parents are recorded, and a member with no recorded parents is a root
    whatever generation it claims. Generation numbers are self-reported.
    """

    min_gen = _min_generation(members)
    first: list[Person] = []
    rest: list[Person] = []
    for m in members:
        if min_gen is not None and m.generation == min_gen:
            first.append(m)
        elif not m.has_recorded_parents:
            rest.append(m)
    return first + rest


def _find_children(members: Sequence[Person], member: Person) -> list[Person]:
    out: list[Person] = []
    seen: set[str] = set()
    for m in members:
        if m.person_id in seen or m.person_id == member.person_id:
            continue
        if member.is_parent_of(m):
            seen.add(m.person_id)
            out.append(m)
    return out


def _infer_spouse(
    members: Sequence[Person],
    member: Person,
    children: Sequence[Person],
    *,
    exclude: set[str],
) -> Optional[Person]:
    """Return the first member who co-parents one of ``children`` with ``member``."""

    if not children:
        return None

    pid = member.person_id
    for m in members:
        if m.person_id == pid or m.person_id in exclude:
            continue
        for c in children:
            if (c.father_id == pid and c.mother_id == m.person_id) or (
                c.mother_id == pid and c.father_id == m.person_id
            ):
                return m
    return None


class _Build:
    def __init__(self, members: Sequence[Person], layout: LayoutPolicy) -> None:
        self.members = members
        self.layout = layout
        self.visited: set[str] = set()

    def node(self, member: Person, depth: int, column: int) -> TreeNode:
        self.visited.add(member.person_id)

        children = _find_children(self.members, member)
        fresh: list[Person] = []
        for c in children:
            if c.person_id in self.visited:
                log.warning(
                    "skipping %s under %s: already placed in this tree (cyclic or repeated parentage)",
                    c.person_id,
                    member.person_id,
                )
                continue
            fresh.append(c)

        child_ids = {c.person_id for c in fresh}
        spouse = _infer_spouse(
            self.members,
            member,
            children,
            exclude=self.visited | child_ids,
        )

        # Claim everything found at this level before descending, so deeper
        # levels cannot rediscover a sibling or the spouse.
        self.visited.update(child_ids)
        if spouse is not None:
            self.visited.add(spouse.person_id)

        child_nodes = [self.node(c, depth + 1, column + idx) for idx, c in enumerate(fresh)]

        x, y = self.layout.position(depth=depth, column=column, span=len(child_nodes) or 1)
        return TreeNode(
            member=member,
            children=child_nodes,
            spouse=spouse,
            x=x,
            y=y,
            depth=depth,
        )


def build_tree(members: Sequence[Person], *, layout: Optional[LayoutPolicy] = None) -> list[TreeNode]:
    """Build the root-view forest for the members of one family line."""

    if not members:
        return []

    build = _Build(members, layout or SequentialLayout())
    forest: list[TreeNode] = []
    for idx, root in enumerate(_select_roots(members)):
        if root.person_id in build.visited:
            # Already placed as a descendant or as someone's spouse.
            continue
        forest.append(build.node(root, 0, idx * ROOT_COLUMN_STRIDE))
    return forest
