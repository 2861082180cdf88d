"""View strategies: the two ways a family line can be turned into a forest.

Both share the ``build(members, context) -> list[TreeNode]`` contract and are
selected explicitly by name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Protocol, Sequence, Union

from .builder import build_tree
from .immediate import build_immediate_family
from .layout import CenteredLayout, LayoutPolicy, SequentialLayout
from .models import Person, TreeNode

ViewName = Literal["root", "family"]


@dataclass(frozen=True)
class ViewContext:
    viewer_person_id: Optional[str] = None


class ViewStrategy(Protocol):
    name: ViewName

    def build(self, members: Sequence[Person], context: ViewContext) -> list[TreeNode]:
        ...


@dataclass(frozen=True)
class RootView:
    layout: LayoutPolicy = field(default_factory=SequentialLayout)
    name: ViewName = "root"

    def build(self, members: Sequence[Person], context: ViewContext) -> list[TreeNode]:
        return build_tree(members, layout=self.layout)


@dataclass(frozen=True)
class ImmediateFamilyView:
    layout: LayoutPolicy = field(default_factory=CenteredLayout)
    name: ViewName = "family"

    def build(self, members: Sequence[Person], context: ViewContext) -> list[TreeNode]:
        return build_immediate_family(members, context.viewer_person_id, layout=self.layout)


LayoutStrategy = Union[RootView, ImmediateFamilyView]


def select_strategy(view: str) -> LayoutStrategy:
    v = (view or "").strip().lower()
    if v == "root":
        return RootView()
    if v == "family":
        return ImmediateFamilyView()
    raise ValueError(f"unknown view: {view!r}")
