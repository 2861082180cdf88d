"""Data classes for registry people and the derived tree nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class Person(BaseModel):
    """A person record as returned by the registry's search endpoint.

    The registry speaks camelCase (``personId``, ``familyLineId``, ...); both
    that and the snake_case field names are accepted. Descriptive attributes
    the tree logic does not use (``eyeColor``, ``dob``, ...) are kept as extras
    so they can be passed through to the rendering layer untouched.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    person_id: str
    family_line_id: Optional[str] = None
    generation: Optional[int] = None
    first_name: Optional[str] = None
    gender: Optional[str] = None
    father_id: Optional[str] = None
    mother_id: Optional[str] = None
    spouse_id: Optional[str] = None
    blood_group: Optional[str] = None
    eye_color: Optional[str] = None

    @field_validator("person_id", mode="before")
    @classmethod
    def _coerce_person_id(cls, v: object) -> object:
        # Some registry rows carry numeric ids.
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("family_line_id", "father_id", "mother_id", "spouse_id", mode="before")
    @classmethod
    def _blank_ref_is_missing(cls, v: object) -> object:
        if v is None:
            return None
        if isinstance(v, int):
            return str(v)
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("generation", mode="before")
    @classmethod
    def _blank_generation_is_missing(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def has_recorded_parents(self) -> bool:
        return bool(self.father_id or self.mother_id)

    def is_parent_of(self, other: Person) -> bool:
        return other.father_id == self.person_id or other.mother_id == self.person_id


@dataclass
class TreeNode:
    member: Person
    children: list[TreeNode] = field(default_factory=list)
    spouse: Optional[Person] = None
    x: int = 0
    y: int = 0
    depth: int = 0

    @property
    def person_id(self) -> str:
        return self.member.person_id


@dataclass(frozen=True)
class Viewer:
    """Identity of the logged-in user, taken from the session cookie."""

    user_id: str
    person_id: Optional[str] = None
    family_id: Optional[str] = None


def iter_nodes(forest: Iterable[TreeNode]) -> Iterator[TreeNode]:
    """Depth-first, pre-order walk over every node of a forest."""
    stack = list(reversed(list(forest)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def iter_edges(forest: Iterable[TreeNode]) -> Iterator[tuple[TreeNode, TreeNode]]:
    for node in iter_nodes(forest):
        for child in node.children:
            yield node, child
