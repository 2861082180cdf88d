"""Coordinate policies shared by the tree builders.

Both policies map a grid slot (generation depth, column) to pixel-like
coordinates. They differ in how a parent is placed relative to its
children:

- ``SequentialLayout`` puts every node at its own column; parents are not
  re-centered over their children (root view).
- ``CenteredLayout`` shifts a node right by half the width of the columns its
  children span, so a single parent sits centered above them (immediate
  family view).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

COLUMN_WIDTH = 320
ROW_HEIGHT = 280

# Columns reserved per root in the root view.
ROOT_COLUMN_STRIDE = 3


class LayoutPolicy(Protocol):
    def position(self, *, depth: int, column: int, span: int = 1) -> tuple[int, int]:
        ...


@dataclass(frozen=True)
class SequentialLayout:
    column_width: int = COLUMN_WIDTH
    row_height: int = ROW_HEIGHT

    def position(self, *, depth: int, column: int, span: int = 1) -> tuple[int, int]:
        return column * self.column_width, depth * self.row_height


@dataclass(frozen=True)
class CenteredLayout:
    column_width: int = COLUMN_WIDTH
    row_height: int = ROW_HEIGHT

    def position(self, *, depth: int, column: int, span: int = 1) -> tuple[int, int]:
        shift = max(0, (span - 1) * self.column_width // 2)
        return column * self.column_width + shift, depth * self.row_height
