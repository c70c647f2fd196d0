"""Skill search using the skills.sh API"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from skiller.config.schema import SearchConfig
from skiller.errors import SearchError, SearchTimeoutError

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    name: str
    source: str = ""  # "owner/repo"
    description: str = ""
    author: str = ""
    tags: list[str] = field(default_factory=list)
    url: str = ""
    id: str = ""

    @property
    def install_source(self) -> str:
        """Identifier to hand to ``skills add``"""
        return self.source or self.name


def _text(item: dict, *keys: str, default: str = "") -> str:
    for key in keys:
        value = item.get(key)
        if value:
            return str(value)
    return default


def normalize_result(item: dict) -> SearchResult:
    tags = item.get("tags")
    return SearchResult(
        name=_text(item, "name", "slug", default="unknown"),
        source=_text(item, "source", "repo", "github"),
        description=_text(item, "description"),
        author=_text(item, "author"),
        tags=[str(t) for t in tags] if isinstance(tags, list) else [],
        url=_text(item, "url"),
        id=_text(item, "id"),
    )


def _result_items(data: Any) -> list:
    # The API may answer with a bare array or wrap it in "results" / "skills"
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        items = data.get("results") or data.get("skills") or []
        return items if isinstance(items, list) else []
    return []


def search_skills(
    query: str,
    limit: Optional[int] = None,
    config: Optional[SearchConfig] = None,
    client: Optional[httpx.Client] = None,
) -> list[SearchResult]:
    """Search skills.sh. Failures raise SearchError; nothing is retried here."""
    config = config or SearchConfig()
    params = {"q": query, "limit": limit or config.limit}

    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=config.timeout)
    try:
        response = client.get(config.url, params=params, headers={"Accept": "application/json"})
    except httpx.TimeoutException as e:
        raise SearchTimeoutError() from e
    except httpx.HTTPError as e:
        raise SearchError(f"Search request failed: {e}") from e
    finally:
        if owns_client:
            client.close()

    if not response.is_success:
        raise SearchError(f"Search API returned {response.status_code}", status_code=response.status_code)

    try:
        data = response.json()
    except ValueError as e:
        raise SearchError(f"Search API returned invalid JSON: {e}") from e

    results = [normalize_result(item) for item in _result_items(data) if isinstance(item, dict)]
    logger.info(f"Search '{query}' returned {len(results)} results")
    return results
