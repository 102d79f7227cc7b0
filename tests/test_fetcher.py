"""Tests for sampling categories and clues from the trivia service."""

import httpx

from jeopardy.board import RevealState
from jeopardy.fetcher import CategoryFetcher, FetchResult

from conftest import BASE_URL, FakeTriviaService, make_categories


async def test_fetch_category_ids_samples_six_distinct():
    service = FakeTriviaService(make_categories(count=40))
    result = await service.fetcher().fetch_category_ids()

    assert result.ok
    assert len(result.value) == 6
    assert len(set(result.value)) == 6
    assert set(result.value) <= set(service.categories)
    assert service.calls["/api/categories"] == 1


async def test_fetch_category_ids_requests_pool_of_100():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["count"] = request.url.params["count"]
        return httpx.Response(200, json=[{"id": n} for n in range(100)])

    fetcher = CategoryFetcher(BASE_URL, transport=httpx.MockTransport(handler))
    result = await fetcher.fetch_category_ids()
    assert seen["count"] == "100"
    assert len(result.value) == 6


async def test_fetch_category_ids_is_deterministic_for_a_seed():
    service = FakeTriviaService(make_categories(count=40))
    first = await service.fetcher(seed=1234).fetch_category_ids()
    second = await service.fetcher(seed=1234).fetch_category_ids()
    assert first.value == second.value


async def test_fetch_category_ids_failure_status():
    service = FakeTriviaService(make_categories(), categories_status=500)
    result = await service.fetcher().fetch_category_ids()

    assert not result.ok
    assert result.value is None
    assert "500" in result.error


async def test_fetch_category_ids_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = CategoryFetcher(BASE_URL, transport=httpx.MockTransport(handler))
    result = await fetcher.fetch_category_ids()
    assert not result.ok
    assert "transport error" in result.error


async def test_fetch_category_samples_five_hidden_clues():
    service = FakeTriviaService(make_categories(count=1, clues_per_category=12))
    result = await service.fetcher().fetch_category(100)

    assert result.ok
    category = result.value
    assert category.title == "category 100"
    assert len(category.clues) == 5
    questions = [clue.question for clue in category.clues]
    assert len(set(questions)) == 5
    assert all(clue.showing is RevealState.HIDDEN for clue in category.clues)
    served = {c["question"] for c in service.categories[100]["clues"]}
    assert set(questions) <= served


async def test_fetch_category_keeps_all_when_fewer_than_five():
    service = FakeTriviaService(make_categories(count=1, clues_per_category=3))
    result = await service.fetcher().fetch_category(100)
    assert len(result.value.clues) == 3


async def test_fetch_category_coerces_non_string_answers():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"title": "Math", "clues": [{"question": "2+2", "answer": 4}]},
        )

    fetcher = CategoryFetcher(BASE_URL, transport=httpx.MockTransport(handler))
    result = await fetcher.fetch_category(1)
    assert result.value.clues[0].answer == "4"


async def test_fetch_category_failure_status():
    service = FakeTriviaService(make_categories(), failing={101})
    result = await service.fetcher().fetch_category(101)

    assert not result.ok
    assert "404" in result.error


async def test_fetch_category_rejects_non_json_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    fetcher = CategoryFetcher(BASE_URL, transport=httpx.MockTransport(handler))
    result = await fetcher.fetch_category(1)
    assert not result.ok


def test_fetch_result_helpers():
    assert FetchResult.success([1]).ok
    failed = FetchResult.failure("boom")
    assert not failed.ok
    assert failed.error == "boom"


async def test_fetch_category_ids_rejects_unusable_ids():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"id": 1}, {"id": [2, 3]}, {"id": {"x": 4}}])

    fetcher = CategoryFetcher(BASE_URL, transport=httpx.MockTransport(handler))
    result = await fetcher.fetch_category_ids()
    assert not result.ok
    assert "unusable category id" in result.error
