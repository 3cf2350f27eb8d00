# =============================================================================
# core/models.py  —  Data Models (search results and responses)
# =============================================================================
#
# These dataclasses define the shape of the data that flows from the GOV.UK
# search API back out through the tools.  They are built per request and
# discarded once the tool response is serialized.
#
# The field names are Pythonic (snake_case); the wire payloads keep the
# camelCase keys the MCP clients already expect, so each model knows how to
# render itself with to_payload().
# =============================================================================

from dataclasses import dataclass, field


# -----------------------------------------------------------------------------
# SearchResult — one normalized item from the upstream "results" array
# -----------------------------------------------------------------------------
@dataclass
class SearchResult:
    """A single GOV.UK publication, with upstream gaps filled by defaults."""

    title: str = "Untitled"
    description: str = ""
    link: str = ""                     # Absolute URL, "" if upstream had none
    published: str = ""                # Raw public_timestamp string
    organisations: str = "Unknown"     # "Ofsted, Department for Education"
    document_type: str = "Unknown"     # content_store_document_type

    def to_payload(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "link": self.link,
            "published": self.published,
            "organisations": self.organisations,
            "documentType": self.document_type,
        }


# -----------------------------------------------------------------------------
# SearchResponse — the gateway's output for a single search call
# -----------------------------------------------------------------------------
@dataclass
class SearchResponse:
    """Aggregate result of one search against the GOV.UK API."""

    total_results: int                 # Count reported by upstream ("total")
    search_period: str                 # "Last 30 days"
    query: str                         # Exact query string sent upstream
    results: list[SearchResult] = field(default_factory=list)

    @property
    def results_shown(self) -> int:
        return len(self.results)

    def to_payload(self) -> dict:
        return {
            "totalResults": self.total_results,
            "resultsShown": self.results_shown,
            "searchPeriod": self.search_period,
            "query": self.query,
            "results": [r.to_payload() for r in self.results],
        }


# -----------------------------------------------------------------------------
# ToolResult — what the dispatcher hands back to the tool layer
# -----------------------------------------------------------------------------
@dataclass
class ToolResult:
    """A tool's payload plus a flag telling the transport it is an error."""

    payload: dict
    is_error: bool = False
