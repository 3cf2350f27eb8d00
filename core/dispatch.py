# =============================================================================
# core/dispatch.py  —  Tool Dispatcher
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns a (tool name, arguments) pair into a typed command, runs it
#   against the SearchGateway, and shapes the payload the tool returns.
#
# HOW IT WORKS (the flow):
#   1. parse_command() looks the name up in COMMANDS and validates the
#      arguments into a frozen dataclass with documented defaults.
#   2. Dispatcher.run() picks the handler for that command type.
#   3. The handler resolves which sectors are in scope (ServerConfig),
#      calls the gateway one to three times in sequence, and builds a dict.
#   4. Dispatcher.dispatch() wraps 1-3 in one failure-scoped region: any
#      exception becomes {"error": message} with is_error=True.
#
# The dispatcher owns no state besides the config and gateway it was given.
# =============================================================================

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from core.config import ServerConfig
from core.errors import (
    InvalidArgumentsError,
    NoSectorsConfiguredError,
    UnconfiguredSectorError,
    UnknownToolError,
)
from core.gateway import SearchGateway
from core.models import SearchResponse, ToolResult
from core.sectors import SectorProfile

logger = logging.getLogger(__name__)

CALENDAR_QUERY = 'consultation OR "upcoming changes" OR deadline'
CALENDAR_WINDOW_DAYS = 90
PARLIAMENTARY_RESULT_LIMIT = 20

DIGEST_WINDOW_DAYS = 30
DIGEST_PARLIAMENTARY_QUERY = "parliamentary care health education legal"
DIGEST_UPCOMING_QUERY = 'consultation OR "upcoming changes"'
DIGEST_UPCOMING_WINDOW_DAYS = 90
DIGEST_PUBLICATIONS_LIMIT = 10
DIGEST_PARLIAMENTARY_LIMIT = 10
DIGEST_UPCOMING_LIMIT = 5

HOW_TO_CHANGE = (
    "Set SECTORS environment variable in Claude Desktop config "
    "(e.g., SECTORS=social-care,education)"
)


# =============================================================================
# Argument validation helpers
# =============================================================================
def _int_arg(arguments: Mapping[str, Any], key: str, default: int) -> int:
    value = arguments.get(key)
    if value is None:
        return default
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgumentsError(f"'{key}' must be a non-negative integer, got {value!r}")
    return value


def _str_arg(arguments: Mapping[str, Any], key: str, default: str | None) -> str | None:
    value = arguments.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise InvalidArgumentsError(f"'{key}' must be a string, got {value!r}")
    return value


def _sector_arg(arguments: Mapping[str, Any]) -> str | None:
    # An empty string means "no override", same as omitting it.
    return _str_arg(arguments, "sector", None) or None


# =============================================================================
# Commands — one per tool, each with its own typed arguments
# =============================================================================
@dataclass(frozen=True)
class SearchPublications:
    name: ClassVar[str] = "search_publications"

    query: str
    days: int = 30
    sector: str | None = None

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "SearchPublications":
        query = _str_arg(arguments, "query", None)
        if query is None:
            raise InvalidArgumentsError("'query' is required")
        return cls(query=query, days=_int_arg(arguments, "days", 30), sector=_sector_arg(arguments))


@dataclass(frozen=True)
class GetParliamentaryQuestions:
    name: ClassVar[str] = "get_parliamentary_questions"

    days: int = 90
    search_term: str = "care"
    sector: str | None = None

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "GetParliamentaryQuestions":
        return cls(
            days=_int_arg(arguments, "days", 90),
            search_term=_str_arg(arguments, "searchTerm", "care"),
            sector=_sector_arg(arguments),
        )


@dataclass(frozen=True)
class GetRegulatoryCalendar:
    name: ClassVar[str] = "get_regulatory_calendar"

    months: int = 6                    # Annotates the response only
    sector: str | None = None

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "GetRegulatoryCalendar":
        return cls(months=_int_arg(arguments, "months", 6), sector=_sector_arg(arguments))


@dataclass(frozen=True)
class GenerateMonthlyDigest:
    name: ClassVar[str] = "generate_monthly_digest"

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "GenerateMonthlyDigest":
        return cls()


@dataclass(frozen=True)
class ListConfiguredSectors:
    name: ClassVar[str] = "list_configured_sectors"

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "ListConfiguredSectors":
        return cls()


Command = (
    SearchPublications
    | GetParliamentaryQuestions
    | GetRegulatoryCalendar
    | GenerateMonthlyDigest
    | ListConfiguredSectors
)

COMMANDS: dict[str, type] = {
    cls.name: cls
    for cls in (
        SearchPublications,
        GetParliamentaryQuestions,
        GetRegulatoryCalendar,
        GenerateMonthlyDigest,
        ListConfiguredSectors,
    )
}

TOOL_NAMES = tuple(COMMANDS)


def parse_command(name: str, arguments: Mapping[str, Any] | None = None) -> Command:
    """Build the typed command for a tool call, validating its arguments."""
    command_cls = COMMANDS.get(name)
    if command_cls is None:
        raise UnknownToolError(name)
    return command_cls.from_arguments(arguments or {})


# =============================================================================
# Dispatcher
# =============================================================================
class Dispatcher:
    """Runs tool commands against a gateway, scoped by a ServerConfig."""

    def __init__(self, config: ServerConfig, gateway: SearchGateway):
        self.config = config
        self.gateway = gateway
        self._handlers = {
            SearchPublications: self._search_publications,
            GetParliamentaryQuestions: self._parliamentary_questions,
            GetRegulatoryCalendar: self._regulatory_calendar,
            GenerateMonthlyDigest: self._monthly_digest,
            ListConfiguredSectors: self._list_configured_sectors,
        }

    async def dispatch(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        """Run a tool by name.  Never raises: failures come back as error results."""
        try:
            command = parse_command(name, arguments)
            payload = await self.run(command)
        except Exception as exc:
            logger.warning("%s failed: %s: %s", name, type(exc).__name__, exc)
            return ToolResult(payload={"error": str(exc)}, is_error=True)
        return ToolResult(payload=payload)

    async def run(self, command: Command) -> dict:
        return await self._handlers[type(command)](command)

    # -------------------------------------------------------------------------
    # Sector scope
    # -------------------------------------------------------------------------
    def _validated_sector(self, sector_id: str) -> SectorProfile:
        """An explicit sector must be known AND configured."""
        profile = self.config.registry.lookup(sector_id)
        if profile is None or not self.config.is_configured(sector_id):
            raise UnconfiguredSectorError(sector_id, self.config.configured_ids())
        return profile

    def _sectors_in_scope(self, sector_id: str | None) -> list[SectorProfile]:
        if sector_id:
            return [self._validated_sector(sector_id)]
        return list(self.config.configured)

    @staticmethod
    def _departments(sectors: list[SectorProfile]) -> list[str]:
        return [dept for s in sectors for dept in s.departments]

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------
    async def _search_publications(self, cmd: SearchPublications) -> dict:
        sectors = self._sectors_in_scope(cmd.sector)

        query = cmd.query
        if len(sectors) == 1:
            query = f"{cmd.query} ({' OR '.join(sectors[0].search_terms[:2])})"

        response = await self.gateway.search(query, cmd.days, self._departments(sectors))

        if len(sectors) == 1:
            note = f"Results filtered for {sectors[0].name} sector"
        else:
            note = f"Results across {len(sectors)} configured sectors"
        return {
            **response.to_payload(),
            "sectorsSearched": [s.name for s in sectors],
            "note": note,
        }

    async def _parliamentary_questions(self, cmd: GetParliamentaryQuestions) -> dict:
        if cmd.sector:
            sector = self._validated_sector(cmd.sector)
        elif self.config.configured:
            sector = self.config.configured[0]
        else:
            raise NoSectorsConfiguredError(self.config.sectors_env)

        query = f"{cmd.search_term} {sector.search_terms[0]} parliamentary"
        response = await self.gateway.search(query, cmd.days, list(sector.departments))
        results = response.results[:PARLIAMENTARY_RESULT_LIMIT]

        return {
            "totalFound": response.total_results,
            "resultsShown": len(results),
            "searchPeriod": f"Last {cmd.days} days",
            "searchTerm": cmd.search_term,
            "sector": sector.name,
            "results": [r.to_payload() for r in results],
            "note": f"Parliamentary questions filtered for {sector.name} sector",
        }

    async def _regulatory_calendar(self, cmd: GetRegulatoryCalendar) -> dict:
        sectors = self._sectors_in_scope(cmd.sector)
        # The window is fixed; `months` is reported back but does not widen it.
        response = await self.gateway.search(
            CALENDAR_QUERY, CALENDAR_WINDOW_DAYS, self._departments(sectors)
        )
        return {
            "note": (
                "Recent publications about upcoming changes and consultations. "
                "Review each for specific deadlines."
            ),
            "searchPeriod": f"Last {CALENDAR_WINDOW_DAYS} days",
            "lookingAhead": f"{cmd.months} months",
            "sectorsSearched": [s.name for s in sectors],
            "upcomingItems": [r.to_payload() for r in response.results],
        }

    async def _monthly_digest(self, cmd: GenerateMonthlyDigest) -> dict:
        sectors = list(self.config.configured)
        departments = self._departments(sectors)
        publications_query = " OR ".join(t for s in sectors for t in s.search_terms[:2])

        # Sequential and fail-fast: the first failing search aborts the digest.
        publications = await self.gateway.search(publications_query, DIGEST_WINDOW_DAYS, departments)
        parliamentary = await self.gateway.search(
            DIGEST_PARLIAMENTARY_QUERY, DIGEST_WINDOW_DAYS, departments
        )
        upcoming = await self.gateway.search(
            DIGEST_UPCOMING_QUERY, DIGEST_UPCOMING_WINDOW_DAYS, departments
        )

        return {
            "generatedDate": self.gateway.today().isoformat(),
            "period": f"Last {DIGEST_WINDOW_DAYS} days",
            "sectorsIncluded": [
                {"id": s.id, "name": s.name, "regulators": list(s.regulators)} for s in sectors
            ],
            "sections": {
                "publications": _section(publications, DIGEST_PUBLICATIONS_LIMIT),
                "parliamentary": _section(parliamentary, DIGEST_PARLIAMENTARY_LIMIT),
                "upcomingChanges": _section(upcoming, DIGEST_UPCOMING_LIMIT),
            },
        }

    async def _list_configured_sectors(self, cmd: ListConfiguredSectors) -> dict:
        return {
            "configuredSectors": [s.detail_payload() for s in self.config.configured],
            "availableSectors": [s.summary_payload() for s in self.config.registry],
            "configuration": {
                "environment": self.config.sectors_env,
                "howToChange": HOW_TO_CHANGE,
            },
        }


def _section(response: SearchResponse, limit: int) -> dict:
    return {
        "total": response.total_results,
        "items": [r.to_payload() for r in response.results[:limit]],
    }
