from __future__ import annotations

from typing import Any, Literal, Optional

from fastapi import APIRouter, Depends, Query

from ..models import Viewer
from ..registry import RegistryClient
from ..serialize import forest_to_payload
from ..session import get_viewer
from ..view_state import TreeView, family_lines_of

router = APIRouter()


def _registry() -> RegistryClient:
    return RegistryClient()


@router.get("/family-lines")
async def list_family_lines() -> dict[str, Any]:
    """Family line ids known to the registry, sorted."""

    people = await _registry().search({})
    lines = family_lines_of(people)
    return {"results": lines, "total": len(lines)}


@router.get("/tree")
async def family_tree(
    family: Optional[str] = Query(default=None, min_length=1, max_length=64),
    view: Literal["auto", "root", "family"] = Query(default="auto"),
    viewer: Optional[Viewer] = Depends(get_viewer),
) -> dict[str, Any]:
    """Return the laid-out forest for one family line.

    - view=auto: the viewer's immediate family when logged in with a family
      line, otherwise the root view of the first family line; passing
      ``family`` always means the root view of that line
    - view=root: full lineage of ``family`` (or the default line)
    - view=family: viewer, spouse and children within the viewer's own
      line; ``family`` is ignored

    An unknown family or a viewer with no registry record yields an empty
    forest with a ``status`` explaining why, never an error.
    """

    tv = TreeView(viewer)
    await tv.refresh(_registry(), rebuild=False)

    root_view = tv.show_root_view
    if view == "root" or (view == "auto" and family is not None):
        root_view = True
    elif view == "family":
        root_view = False

    if root_view:
        tv.show(family or tv.selected_family, root_view=True)
    else:
        tv.show(tv.viewer_family_id or tv.selected_family, root_view=False)

    out: dict[str, Any] = {
        "view": tv.strategy.name,
        "family": tv.selected_family,
        "family_lines": tv.family_lines,
        "can_toggle": tv.can_toggle,
        "status": tv.status(),
        "stats": tv.stats(),
    }
    out.update(forest_to_payload(tv.forest))
    out["viewport"] = tv.viewport.to_public()
    return out
