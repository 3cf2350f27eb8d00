# =============================================================================
# core/gateway.py  —  GOV.UK Search Gateway
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Every tool ends up here.  SearchGateway.search() builds a date-windowed,
#   organisation-filtered full-text query against the GOV.UK search API,
#   issues one GET, and normalizes the JSON body into a SearchResponse.
#
# THE SEPARATION OF "FETCH" AND "NORMALIZE":
#   - build_search_params() is pure: same inputs, same parameter list.
#   - normalize_response() is pure: raw JSON in, SearchResponse out.
#   - SearchGateway.search() only glues them around the HTTP call.
#   So the query shape and the field defaults are tested without a network.
#
# RESILIENCE:
#   One request per search.  No retry, no backoff, no cache.  The only guard
#   is the httpx timeout.  A non-2xx status becomes a GatewayError carrying
#   the status code; transport and JSON errors propagate as they are.
# =============================================================================

import logging
from collections.abc import Callable, Sequence
from datetime import date, datetime, timedelta, timezone

import httpx

from core.errors import GatewayError
from core.models import SearchResponse, SearchResult

logger = logging.getLogger(__name__)

GOVUK_BASE_URL = "https://www.gov.uk"
GOVUK_SEARCH_URL = f"{GOVUK_BASE_URL}/api/search.json"

RESULT_COUNT = 50
ORDER_NEWEST_FIRST = "-public_timestamp"
DEFAULT_TIMEOUT_SECONDS = 30.0


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def from_date_for(window_days: int, today: date) -> str:
    """ISO calendar date (no time) for `today` minus `window_days`."""
    return (today - timedelta(days=window_days)).isoformat()


def build_search_params(
    query: str,
    from_date: str,
    departments: Sequence[str] | None = None,
) -> list[tuple[str, str]]:
    """Query parameters for the search endpoint, in the order they are sent.

    A list of pairs rather than a dict because filter_organisations[] is
    repeated once per department.  No departments means an unscoped search.
    """
    params = [
        ("q", query),
        ("count", str(RESULT_COUNT)),
        ("order", ORDER_NEWEST_FIRST),
        ("filter_public_timestamp_from", from_date),
    ]
    for dept in departments or ():
        params.append(("filter_organisations[]", dept))
    return params


def _normalize_result(item: dict) -> SearchResult:
    link = item.get("link")
    org_titles = [o.get("title") for o in item.get("organisations") or [] if o.get("title")]
    return SearchResult(
        title=item.get("title") or "Untitled",
        description=item.get("description") or "",
        link=f"{GOVUK_BASE_URL}{link}" if link else "",
        published=item.get("public_timestamp") or "",
        organisations=", ".join(org_titles) or "Unknown",
        document_type=item.get("content_store_document_type") or "Unknown",
    )


def normalize_response(data: dict, query: str, window_days: int) -> SearchResponse:
    """Turn the raw search.json body into a SearchResponse.

    Missing "total" counts as 0 and a missing "results" array as empty.
    Result order is kept as returned (newest first, per the order param).
    """
    return SearchResponse(
        total_results=data.get("total") or 0,
        search_period=f"Last {window_days} days",
        query=query,
        results=[_normalize_result(item) for item in data.get("results") or []],
    )


class SearchGateway:
    """Stateless client for the GOV.UK search API.

    Args:
        base_url: Search endpoint.  Defaults to the public search.json.
        timeout: Seconds before httpx gives up on a request.
        transport: Optional httpx transport (tests pass httpx.MockTransport).
        today: Clock returning the current date; defaults to UTC today.
    """

    def __init__(
        self,
        base_url: str = GOVUK_SEARCH_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
        today: Callable[[], date] | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport
        self._today = today or _utc_today

    def today(self) -> date:
        return self._today()

    async def search(
        self,
        query: str,
        window_days: int,
        departments: Sequence[str] | None = None,
    ) -> SearchResponse:
        """Search publications from the last `window_days` days."""
        params = build_search_params(query, from_date_for(window_days, self.today()), departments)
        logger.info("GOV.UK search q=%r days=%d orgs=%d", query, window_days, len(departments or ()))

        async with httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            response = await client.get(self.base_url, params=params)

        if not response.is_success:
            logger.warning("GOV.UK search failed with status %d", response.status_code)
            raise GatewayError(response.status_code)

        return normalize_response(response.json(), query, window_days)
