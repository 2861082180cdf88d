from __future__ import annotations

import math
from typing import Any

from fastapi import APIRouter, Body, HTTPException

from ..viewport import DEFAULT_POSITION, DEFAULT_SCALE, Viewport

router = APIRouter()

_ACTIONS = frozenset({"zoom_in", "zoom_out", "reset", "drag"})


def _number(raw: Any, detail: str) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail=detail) from None
    if not math.isfinite(value):
        raise HTTPException(status_code=400, detail=detail)
    return value


def _point(raw: Any, name: str) -> tuple[float, float]:
    if not isinstance(raw, dict) or "x" not in raw or "y" not in raw:
        raise HTTPException(status_code=400, detail=f"{name} must be an object with x and y")
    detail = f"{name} must have finite numeric x and y"
    return _number(raw["x"], detail), _number(raw["y"], detail)


@router.post("/viewport")
def apply_viewport_action(payload: dict[str, Any] = Body(default_factory=dict)) -> dict[str, Any]:
    """Apply one pan/zoom transition to a client-held viewport state.

    Body: ``{"scale": 1.0, "position": {"x": 50, "y": 50}, "action": "zoom_in"}``.
    ``action=drag`` also takes ``from`` and ``to`` pointer positions and is
    the same as pointer-down at ``from``, move to ``to``, pointer-up.
    """

    action = str(payload.get("action") or "").strip().lower()
    if action not in _ACTIONS:
        raise HTTPException(status_code=400, detail=f"action must be one of {sorted(_ACTIONS)}")

    scale = _number(payload.get("scale", DEFAULT_SCALE), "scale must be a finite number")

    position = payload.get("position")
    x, y = _point(position, "position") if position is not None else DEFAULT_POSITION

    vp = Viewport(scale=scale, x=x, y=y)
    if action == "zoom_in":
        vp.zoom_in()
    elif action == "zoom_out":
        vp.zoom_out()
    elif action == "reset":
        vp.reset()
    else:
        fx, fy = _point(payload.get("from"), "from")
        tx, ty = _point(payload.get("to"), "to")
        vp.pointer_down(fx, fy)
        vp.pointer_move(tx, ty)
        vp.pointer_up()

    return vp.to_public()
