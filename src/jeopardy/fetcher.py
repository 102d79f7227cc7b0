"""Client for the remote trivia service that samples categories and clues."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

import httpx

from .board import (
    CATEGORY_POOL_SIZE,
    NUM_CATEGORIES,
    NUM_CLUES_PER_CATEGORY,
    Category,
    Clue,
)

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://jservice.io"
DEFAULT_TIMEOUT = 10.0

T = TypeVar("T")


class NetworkError(Exception):
    """Non-success status, transport failure or unusable payload."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{reason} ({url})")
        self.url = url
        self.reason = reason


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of a fetch: either ``value`` or a failure ``error``."""

    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> "FetchResult[T]":
        return cls(error=error)


class CategoryFetcher:
    """Over-fetches from the trivia service and samples client-side.

    The service cannot hand out N random items itself, so a pool of
    categories (and every clue of a category) is requested and a uniform
    sample without replacement is taken locally.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rng: Optional[random.Random] = None,
        timeout: float = DEFAULT_TIMEOUT,
        num_categories: int = NUM_CATEGORIES,
        num_clues: int = NUM_CLUES_PER_CATEGORY,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.rng = rng or random.Random()
        self.timeout = timeout
        self.num_categories = num_categories
        self.num_clues = num_clues

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        async with httpx.AsyncClient(
            transport=self.transport, timeout=self.timeout
        ) as client:
            try:
                response = await client.get(url, params=params)
            except httpx.HTTPError as exc:
                raise NetworkError(url, f"transport error: {exc!r}") from exc

        if response.status_code != httpx.codes.OK:
            raise NetworkError(url, f"unexpected status {response.status_code}")
        try:
            return response.json()
        except ValueError as exc:
            raise NetworkError(url, "response body is not JSON") from exc

    async def fetch_category_ids(self) -> FetchResult[List[int]]:
        """Return a random sample of distinct category ids from a large pool."""

        try:
            payload = await self._get_json(
                "/api/categories", {"count": CATEGORY_POOL_SIZE}
            )
            ids = _extract_ids(payload)
        except NetworkError as exc:
            logger.warning("Error in calling categories api: %s", exc)
            return FetchResult.failure(str(exc))

        sample = self.rng.sample(ids, min(self.num_categories, len(ids)))
        logger.debug("Sampled category ids %s from %d", sample, len(ids))
        return FetchResult.success(sample)

    async def fetch_category(self, category_id: int) -> FetchResult[Category]:
        """Return the category title with a random sample of its clues."""

        try:
            payload = await self._get_json("/api/category", {"id": category_id})
            title, clues = _extract_category(payload)
        except NetworkError as exc:
            logger.warning("Error getting category %s: %s", category_id, exc)
            return FetchResult.failure(str(exc))

        chosen = self.rng.sample(clues, min(self.num_clues, len(clues)))
        return FetchResult.success(Category(title=title, clues=chosen))


def _extract_ids(payload: Any) -> List[int]:
    if not isinstance(payload, list):
        raise NetworkError("/api/categories", "expected a list of categories")
    ids = [item["id"] for item in payload if isinstance(item, dict) and "id" in item]
    for ident in ids:
        if isinstance(ident, bool) or not isinstance(ident, (int, str)):
            raise NetworkError("/api/categories", f"unusable category id {ident!r}")
    # dict.fromkeys keeps first-seen order while dropping duplicates
    return list(dict.fromkeys(ids))


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _extract_category(payload: Any) -> Tuple[str, List[Clue]]:
    if not isinstance(payload, dict):
        raise NetworkError("/api/category", "expected a category object")
    raw_clues = payload.get("clues") or []
    if not isinstance(raw_clues, list):
        raise NetworkError("/api/category", "clues is not a list")
    clues = [
        Clue(question=_text(raw.get("question")), answer=_text(raw.get("answer")))
        for raw in raw_clues
        if isinstance(raw, dict)
    ]
    return str(payload.get("title") or ""), clues
