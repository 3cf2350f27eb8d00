from datetime import date

import httpx
import pytest

from core.errors import GatewayError
from core.gateway import (
    GOVUK_SEARCH_URL,
    SearchGateway,
    build_search_params,
    from_date_for,
    normalize_response,
)


def _gateway(handler, seen=None):
    def wrapped(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return handler(request)

    return SearchGateway(transport=httpx.MockTransport(wrapped), today=lambda: date(2024, 3, 31))


def test_from_date_is_plain_iso_date():
    assert from_date_for(30, date(2024, 3, 31)) == "2024-03-01"
    assert from_date_for(0, date(2024, 3, 31)) == "2024-03-31"


def test_build_search_params_fixed_fields_and_repeated_orgs():
    params = build_search_params("safeguarding", "2024-03-01", ["ofsted", "department-for-education"])
    assert params == [
        ("q", "safeguarding"),
        ("count", "50"),
        ("order", "-public_timestamp"),
        ("filter_public_timestamp_from", "2024-03-01"),
        ("filter_organisations[]", "ofsted"),
        ("filter_organisations[]", "department-for-education"),
    ]


def test_build_search_params_without_departments_is_unscoped():
    for departments in (None, []):
        keys = [k for k, _ in build_search_params("x", "2024-03-01", departments)]
        assert "filter_organisations[]" not in keys


def test_normalize_fills_defaults():
    out = normalize_response({"total": 123, "results": [{"title": "A", "link": "/x"}]}, "q", 30)

    assert out.total_results == 123
    assert out.results_shown == 1
    assert out.search_period == "Last 30 days"
    item = out.results[0]
    assert item.title == "A"
    assert item.link == "https://www.gov.uk/x"
    assert item.description == ""
    assert item.published == ""
    assert item.organisations == "Unknown"
    assert item.document_type == "Unknown"


def test_normalize_empty_body():
    out = normalize_response({}, "q", 7)
    assert out.total_results == 0
    assert out.results == []
    assert out.to_payload()["resultsShown"] == 0


def test_normalize_joins_organisation_titles():
    item = {
        "organisations": [{"title": "Ofsted"}, {"title": "Department for Education"}],
        "content_store_document_type": "guidance",
        "public_timestamp": "2024-03-20T10:00:00Z",
    }
    result = normalize_response({"results": [item]}, "q", 30).results[0]
    assert result.title == "Untitled"
    assert result.organisations == "Ofsted, Department for Education"
    assert result.document_type == "guidance"
    assert result.published == "2024-03-20T10:00:00Z"
    assert result.to_payload()["documentType"] == "guidance"


@pytest.mark.asyncio
async def test_search_sends_expected_request():
    seen = []
    body = {"total": 2, "results": [{"title": "B", "link": "/b"}, {"title": "A", "link": "/a"}]}
    gateway = _gateway(lambda request: httpx.Response(200, json=body), seen)

    out = await gateway.search("care homes", 30, ["care-quality-commission", "nhs-england"])

    request = seen[0]
    assert str(request.url).startswith(GOVUK_SEARCH_URL)
    assert request.method == "GET"
    assert request.url.params["q"] == "care homes"
    assert request.url.params["count"] == "50"
    assert request.url.params["order"] == "-public_timestamp"
    assert request.url.params["filter_public_timestamp_from"] == "2024-03-01"
    assert request.url.params.get_list("filter_organisations[]") == [
        "care-quality-commission",
        "nhs-england",
    ]
    assert out.query == "care homes"
    assert [r.title for r in out.results] == ["B", "A"]


@pytest.mark.asyncio
async def test_search_is_repeatable():
    seen = []
    gateway = _gateway(lambda request: httpx.Response(200, json={}), seen)

    await gateway.search("q", 10, ["ofsted"])
    await gateway.search("q", 10, ["ofsted"])

    assert seen[0].url == seen[1].url


@pytest.mark.asyncio
async def test_non_success_status_raises_gateway_error():
    gateway = _gateway(lambda request: httpx.Response(503, text="unavailable"))

    with pytest.raises(GatewayError) as excinfo:
        await gateway.search("q", 30, [])

    assert excinfo.value.status_code == 503
    assert str(excinfo.value) == "Gov.uk API error: 503"


@pytest.mark.asyncio
async def test_transport_errors_propagate():
    def boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(httpx.ConnectError):
        await _gateway(boom).search("q", 30, [])
