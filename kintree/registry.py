"""Client for the person registry's search endpoint.

The registry owns every person record; this module only asks it for a flat
list. Failures never propagate: the caller always gets a (possibly empty)
list so the tree view can degrade to a placeholder instead of crashing.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from .config import get_registry_timeout, get_registry_url
from .models import Person

log = logging.getLogger(__name__)


def _records_from_body(body: Any) -> list[Any]:
    # The search endpoint returns a bare array; older deployments wrap it as
    # {"count": n, "results": [...]}.
    if isinstance(body, list):
        return body
    if isinstance(body, dict) and isinstance(body.get("results"), list):
        return body["results"]
    raise ValueError(f"unexpected search response shape: {type(body).__name__}")


def parse_people(records: list[Any]) -> list[Person]:
    """Validate raw records, dropping (and logging) the malformed ones."""

    out: list[Person] = []
    skipped = 0
    for rec in records:
        try:
            out.append(Person.model_validate(rec))
        except ValidationError as e:
            skipped += 1
            log.warning("skipping malformed person record: %s", e.errors(include_url=False))
    if skipped:
        log.info("parsed %d people, skipped %d malformed records", len(out), skipped)
    return out


class RegistryClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or get_registry_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else get_registry_timeout()
        self._transport = transport

    async def search(self, filters: Optional[dict[str, Any]] = None) -> list[Person]:
        """POST ``/search`` with ``filters`` (empty = everyone)."""

        url = f"{self.base_url}/search"
        log.info("fetching people from %s", url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, json=filters or {})
                response.raise_for_status()
                body = response.json()
            records = _records_from_body(body)
        except httpx.HTTPError as e:
            log.warning("person search failed: %s", e)
            return []
        except ValueError:
            log.exception("person search returned an unreadable body")
            return []

        people = parse_people(records)
        log.info("fetched %d people", len(people))
        return people
