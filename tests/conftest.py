from __future__ import annotations

from typing import Any, Callable

import pytest

from kintree.models import Person


def _person(pid: str, *, gen: int | None = 1, father: str | None = None, mother: str | None = None,
            spouse: str | None = None, family: str = "F1", name: str | None = None, **extra: Any) -> Person:
    return Person(
        personId=pid,
        familyLineId=family,
        generation=gen,
        firstName=name if name is not None else f"Person {pid}",
        fatherId=father,
        motherId=mother,
        spouseId=spouse,
        **extra,
    )


@pytest.fixture()
def person() -> Callable[..., Person]:
    return _person


@pytest.fixture()
def three_generations() -> list[Person]:
    # G1:   P1 (M) + P2 (F)
    # G2:   P3 (child of P1+P2) + P4 (married in), P5 (child of P1+P2)
    # G3:   P6 (child of P3+P4)
    return [
        _person("P1", gen=1, spouse="P2", gender="M"),
        _person("P2", gen=1, spouse="P1", gender="F"),
        _person("P3", gen=2, father="P1", mother="P2", spouse="P4", gender="M"),
        _person("P4", gen=2, spouse="P3", gender="F"),
        _person("P5", gen=2, father="P1", mother="P2", gender="F"),
        _person("P6", gen=3, father="P3", mother="P4", gender="M"),
    ]
