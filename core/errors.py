# =============================================================================
# core/errors.py  —  Error taxonomy
# =============================================================================
#
# Every failure a tool can report is one of these (or a generic exception
# from httpx / JSON decoding).  The dispatcher catches them all at one
# boundary and turns them into {"error": message} payloads, so each message
# below is written to be read by the calling assistant.
# =============================================================================

from collections.abc import Iterable


class RegulatoryIntelError(Exception):
    """Base class for errors raised by the regulatory intelligence core."""


class GatewayError(RegulatoryIntelError):
    """The GOV.UK search API answered with a non-success status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Gov.uk API error: {status_code}")


class UnconfiguredSectorError(RegulatoryIntelError):
    """An explicit sector is unknown or not in the configured set."""

    def __init__(self, sector: str, configured_ids: Iterable[str]):
        self.sector = sector
        self.configured_ids = list(configured_ids)
        super().__init__(
            f"Sector '{sector}' not configured. "
            f"Available: {', '.join(self.configured_ids)}"
        )


class NoSectorsConfiguredError(RegulatoryIntelError):
    """A tool needs a default sector but the selection resolved to nothing."""

    def __init__(self, sectors_env: str):
        self.sectors_env = sectors_env
        super().__init__(
            f"No known sectors configured (SECTORS={sectors_env!r}). "
            "Use list_configured_sectors to see valid sector ids."
        )


class UnknownToolError(RegulatoryIntelError):
    """The caller asked for a tool that does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidArgumentsError(RegulatoryIntelError):
    """A tool argument is missing or has the wrong type."""
