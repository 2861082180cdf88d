from __future__ import annotations

import asyncio
import json
from unittest.mock import patch

import httpx

from kintree.builder import build_tree
from kintree.registry import RegistryClient, parse_people


def _client(handler) -> RegistryClient:
    return RegistryClient("http://registry.test/", timeout=5, transport=httpx.MockTransport(handler))


def test_search_posts_filter_and_parses_people() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json=[
                {"personId": "P1", "familyLineId": "F1", "generation": 1, "firstName": "Ram", "gender": "M"},
                {"personId": "P2", "familyLineId": "F1", "generation": 2, "firstName": "Sita",
                 "fatherId": "P1", "motherId": "", "eyeColor": "Brown", "hairColor": "Black"},
            ],
        )

    people = asyncio.run(_client(handler).search())

    assert seen == {"method": "POST", "url": "http://registry.test/search", "body": {}}
    assert [p.person_id for p in people] == ["P1", "P2"]
    assert people[1].father_id == "P1"
    assert people[1].mother_id is None
    assert people[1].eye_color == "Brown"
    # Unknown registry fields are kept.
    assert people[1].model_extra == {"hairColor": "Black"}


def test_search_accepts_results_envelope() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"count": 1, "results": [{"personId": "P1", "generation": 1}]})

    people = asyncio.run(_client(handler).search({"familyLineId": "F1"}))
    assert [p.person_id for p in people] == ["P1"]


def test_http_error_becomes_empty_list() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"message": "down"})

    assert asyncio.run(_client(handler).search()) == []


def test_network_error_becomes_empty_list() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    assert asyncio.run(_client(handler).search()) == []


def test_unreadable_body_becomes_empty_list() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    assert asyncio.run(_client(handler).search()) == []


def test_unexpected_shape_becomes_empty_list() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": "nope"})

    assert asyncio.run(_client(handler).search()) == []


def test_malformed_records_are_skipped() -> None:
    people = parse_people([
        {"personId": "P1"},
        {"firstName": "no id"},
        {"personId": "P3", "generation": "not-a-number"},
        "garbage",
        {"personId": 42, "fatherId": 7},
    ])
    assert [p.person_id for p in people] == ["P1", "42"]
    assert people[1].father_id == "7"


def test_blank_generation_is_unknown_and_person_stays_a_root() -> None:
    people = parse_people([
        {"personId": "R", "generation": ""},
        {"personId": "C", "generation": "  ", "fatherId": "R"},
        {"personId": "D", "generation": None, "motherId": "R"},
    ])

    assert [p.person_id for p in people] == ["R", "C", "D"]
    assert all(p.generation is None for p in people)

    forest = build_tree(people)
    assert [n.person_id for n in forest] == ["R"]
    assert [c.person_id for c in forest[0].children] == ["C", "D"]


def test_base_url_from_environment() -> None:
    with patch.dict("os.environ", {"KINTREE_REGISTRY_URL": "http://elsewhere.test/api/", "KINTREE_REGISTRY_TIMEOUT": "7"}):
        client = RegistryClient()
    assert client.base_url == "http://elsewhere.test/api"
    assert client.timeout == 7.0
