from datetime import date

import pytest

from core.config import ServerConfig
from core.dispatch import Dispatcher
from core.models import SearchResponse, SearchResult

FIXED_TODAY = date(2024, 3, 31)


def make_response(query: str, days: int, n: int, total: int | None = None) -> SearchResponse:
    return SearchResponse(
        total_results=n if total is None else total,
        search_period=f"Last {days} days",
        query=query,
        results=[SearchResult(title=f"Item {i}", link=f"https://www.gov.uk/item-{i}") for i in range(n)],
    )


class FakeGateway:
    """Records every search and answers with `n_results` canned items."""

    def __init__(self, n_results: int = 3, total: int | None = None, fail_on_call: int | None = None):
        self.calls: list[dict] = []
        self.n_results = n_results
        self.total = total
        self.fail_on_call = fail_on_call

    def today(self) -> date:
        return FIXED_TODAY

    async def search(self, query, window_days, departments=None):
        self.calls.append({"query": query, "days": window_days, "departments": list(departments or [])})
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise RuntimeError("connection reset")
        return make_response(query, window_days, self.n_results, self.total)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def config():
    return ServerConfig.from_selection("social-care,education")


@pytest.fixture
def dispatcher(config, gateway):
    return Dispatcher(config, gateway)
