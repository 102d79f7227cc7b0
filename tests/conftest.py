"""Shared fixtures: an in-process stand-in for the remote trivia service."""

from __future__ import annotations

import asyncio
import random
from collections import Counter
from typing import Dict, List, Optional, Set

import httpx
import pytest

from jeopardy.fetcher import CategoryFetcher

BASE_URL = "http://trivia.test"


def make_categories(count: int = 6, clues_per_category: int = 5) -> Dict[int, dict]:
    categories = {}
    for offset in range(count):
        category_id = 100 + offset
        categories[category_id] = {
            "id": category_id,
            "title": f"category {category_id}",
            "clues": [
                {
                    "id": category_id * 100 + n,
                    "question": f"question {category_id}.{n}",
                    "answer": f"answer {category_id}.{n}",
                    "value": 200 * (n + 1),
                }
                for n in range(clues_per_category)
            ],
        }
    return categories


class FakeTriviaService:
    """Serves ``/api/categories`` and ``/api/category`` from a dict."""

    def __init__(
        self,
        categories: Dict[int, dict],
        failing: Optional[Set[int]] = None,
        categories_status: int = 200,
    ):
        self.categories = categories
        self.failing = failing or set()
        self.categories_status = categories_status
        self.calls: Counter = Counter()
        self.requested_ids: List[int] = []
        self.gate: Optional[asyncio.Event] = None

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls[request.url.path] += 1
        if self.gate is not None:
            await self.gate.wait()

        if request.url.path == "/api/categories":
            if self.categories_status != 200:
                return httpx.Response(self.categories_status, json={"error": "down"})
            count = int(request.url.params.get("count", "1"))
            summaries = [
                {"id": c["id"], "title": c["title"], "clues_count": len(c["clues"])}
                for c in self.categories.values()
            ]
            return httpx.Response(200, json=summaries[:count])

        if request.url.path == "/api/category":
            category_id = int(request.url.params["id"])
            self.requested_ids.append(category_id)
            if category_id in self.failing or category_id not in self.categories:
                return httpx.Response(404, json={"error": "not found"})
            return httpx.Response(200, json=self.categories[category_id])

        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def fetcher(self, seed: Optional[int] = None) -> CategoryFetcher:
        rng = random.Random(seed) if seed is not None else None
        return CategoryFetcher(BASE_URL, transport=self.transport, rng=rng)


@pytest.fixture
def service() -> FakeTriviaService:
    return FakeTriviaService(make_categories())
