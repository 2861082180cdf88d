from __future__ import annotations

import pytest

from kintree.layout import CenteredLayout, SequentialLayout
from kintree.viewport import Viewport


def test_sequential_layout_ignores_span() -> None:
    layout = SequentialLayout(column_width=10, row_height=20)
    assert layout.position(depth=2, column=3) == (30, 40)
    assert layout.position(depth=2, column=3, span=5) == (30, 40)


def test_centered_layout_shifts_by_half_the_span() -> None:
    layout = CenteredLayout(column_width=10, row_height=20)
    assert layout.position(depth=0, column=0, span=1) == (0, 0)
    assert layout.position(depth=0, column=0, span=4) == (15, 0)
    assert layout.position(depth=0, column=0, span=0) == (0, 0)
    assert layout.position(depth=1, column=2) == (20, 20)


class TestViewport:
    def test_defaults(self) -> None:
        vp = Viewport()
        assert vp.scale == 1.0
        assert vp.position == (50.0, 50.0)
        assert not vp.dragging

    def test_drag_maps_pointer_one_to_one(self) -> None:
        vp = Viewport(x=50, y=50)
        vp.pointer_down(100, 100)
        assert vp.dragging
        vp.pointer_move(130, 90)
        assert vp.position == (80, 40)
        vp.pointer_move(0, 0)
        assert vp.position == (-50, -50)
        vp.pointer_up()
        assert not vp.dragging

    def test_move_without_drag_is_ignored(self) -> None:
        vp = Viewport()
        vp.pointer_move(500, 500)
        assert vp.position == (50.0, 50.0)

    def test_pointer_leave_ends_drag(self) -> None:
        vp = Viewport()
        vp.pointer_down(0, 0)
        vp.pointer_leave()
        vp.pointer_move(10, 10)
        assert vp.position == (50.0, 50.0)

    def test_zoom_steps_and_clamps(self) -> None:
        vp = Viewport()
        vp.zoom_in()
        assert vp.scale == 1.1
        for _ in range(20):
            vp.zoom_in()
        assert vp.scale == 2.0
        for _ in range(30):
            vp.zoom_out()
        assert vp.scale == 0.5

    def test_zoom_out_lands_on_tenths(self) -> None:
        vp = Viewport()
        for _ in range(3):
            vp.zoom_out()
        assert vp.scale == 0.7

    def test_reset_restores_defaults(self) -> None:
        vp = Viewport(scale=1.7, x=-300, y=12)
        vp.pointer_down(1, 1)
        vp.reset()
        assert vp.scale == 1.0
        assert vp.position == (50.0, 50.0)
        assert not vp.dragging

    def test_initial_scale_is_clamped(self) -> None:
        assert Viewport(scale=9).scale == 2.0
        assert Viewport(scale=0.1).scale == 0.5

    def test_custom_bounds(self) -> None:
        vp = Viewport(min_scale=0.25, max_scale=4.0)
        for _ in range(50):
            vp.zoom_in()
        assert vp.scale == 4.0

    def test_invalid_bounds(self) -> None:
        with pytest.raises(ValueError):
            Viewport(min_scale=2.0, max_scale=1.0)

    def test_transform(self) -> None:
        vp = Viewport(scale=1.5, x=50, y=-20.5)
        assert vp.transform() == "translate(50px, -20.5px) scale(1.5)"
