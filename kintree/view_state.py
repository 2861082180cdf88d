"""Tree page state: loaded people, family line selection, view mode, forest.

``TreeView`` is the single owner of one rendered tree. Every change that
matters (new people, another family line, the view toggle) triggers a full
rebuild from the flat member list; nothing is updated incrementally.

Loading is the only asynchronous step. Each ``refresh`` takes a new request
generation and a response is applied only if no newer refresh has started
meanwhile, so a slow, stale fetch cannot overwrite fresher state.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Optional, Protocol, Sequence

from .models import Person, TreeNode, Viewer
from .strategy import LayoutStrategy, ViewContext, select_strategy
from .viewport import Viewport

log = logging.getLogger(__name__)

TreeStatus = Literal[
    "loading",
    "login_required",
    "not_registered",
    "no_members",
    "no_family_lines",
    "no_selection",
    "no_structure",
    "ready",
]


class PersonSource(Protocol):
    async def search(self, filters: Optional[dict[str, Any]] = None) -> list[Person]:
        ...


def family_lines_of(members: Sequence[Person]) -> list[str]:
    """Sorted, unique, non-blank family line ids."""
    return sorted({m.family_line_id.strip() for m in members if m.family_line_id and m.family_line_id.strip()})


class TreeView:
    def __init__(self, viewer: Optional[Viewer] = None, *, viewport: Optional[Viewport] = None) -> None:
        self.viewer = viewer
        self.viewport = viewport or Viewport()
        self.members: list[Person] = []
        self.family_lines: list[str] = []
        self.selected_family: Optional[str] = None
        self.show_root_view = False
        self.forest: list[TreeNode] = []
        self.loading = True
        self._generation = 0

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @property
    def viewer_family_id(self) -> Optional[str]:
        return self.viewer.family_id if self.viewer else None

    def begin_request(self) -> int:
        self._generation += 1
        self.loading = True
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def refresh(self, source: PersonSource, *, rebuild: bool = True) -> bool:
        """Fetch everyone from ``source`` and rebuild.

        Returns False when the response was superseded by a newer refresh.
        With ``rebuild=False`` only the default selection is made; the caller
        is expected to finish with ``show``.
        """

        generation = self.begin_request()
        members = await source.search({})
        if not self.is_current(generation):
            log.debug("discarding stale person list (request %d, current %d)", generation, self._generation)
            return False
        self.apply_members(members, rebuild=rebuild)
        return True

    def apply_members(self, members: Sequence[Person], *, rebuild: bool = True) -> None:
        self.members = list(members)
        self.family_lines = family_lines_of(self.members)
        self.loading = False

        own = self.viewer_family_id
        if own and own in self.family_lines:
            self.selected_family = own
            self.show_root_view = False
        elif self.family_lines:
            self.selected_family = self.family_lines[0]
            self.show_root_view = True
        else:
            self.selected_family = None

        if rebuild:
            self.rebuild()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_family(self, family_id: Optional[str]) -> None:
        self.selected_family = (family_id or "").strip() or None
        self.rebuild()

    def set_root_view(self, enabled: bool) -> None:
        self.show_root_view = bool(enabled)
        self.rebuild()

    def show(self, family_id: Optional[str], *, root_view: bool) -> list[TreeNode]:
        """Set family line and view mode together, then rebuild once."""
        self.selected_family = (family_id or "").strip() or None
        self.show_root_view = bool(root_view)
        return self.rebuild()

    @property
    def can_toggle(self) -> bool:
        return bool(self.viewer_family_id)

    def toggle_view(self) -> bool:
        """Flip between root view and the viewer's immediate family.

        Switching into immediate-family view re-selects the viewer's own line.
        Without a viewer family there is nothing to toggle to; returns False.
        """

        if not self.can_toggle:
            return False
        if self.show_root_view:
            self.show_root_view = False
            self.selected_family = self.viewer_family_id
        else:
            self.show_root_view = True
        self.rebuild()
        return True

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    @property
    def strategy(self) -> LayoutStrategy:
        return select_strategy("root" if self.show_root_view else "family")

    def family_members(self) -> list[Person]:
        if not self.selected_family:
            return []
        return [m for m in self.members if (m.family_line_id or "").strip() == self.selected_family]

    def rebuild(self) -> list[TreeNode]:
        members = self.family_members()
        if not members:
            self.forest = []
            return self.forest

        strategy = self.strategy
        context = ViewContext(viewer_person_id=self.viewer.person_id if self.viewer else None)
        self.forest = strategy.build(members, context)
        self.viewport.reset()
        log.debug(
            "built %s view for family %s: %d members, %d roots",
            strategy.name,
            self.selected_family,
            len(members),
            len(self.forest),
        )
        return self.forest

    # ------------------------------------------------------------------
    # Header / placeholders
    # ------------------------------------------------------------------

    def stats(self) -> dict[str, int]:
        if self.show_root_view:
            members = self.family_members()
            gens = [m.generation for m in members if m.generation is not None]
            return {
                "members": len(members),
                "generations": max(gens) if gens else 0,
            }

        if not self.forest:
            return {"members": 0, "generations": 1}
        root = self.forest[0]
        return {
            "members": 1 + (1 if root.spouse is not None else 0) + len(root.children),
            "generations": 2 if root.children else 1,
        }

    def status(self) -> TreeStatus:
        if self.loading:
            return "loading"
        if not self.viewer_family_id and not self.show_root_view:
            return "login_required"
        if not self.show_root_view and not self.forest:
            return "not_registered"
        if not self.members:
            return "no_members"
        if not self.family_lines:
            return "no_family_lines"
        if not self.selected_family:
            return "no_selection"
        if not self.forest:
            if not self.family_members():
                return "no_members"
            return "no_structure"
        return "ready"
