# =============================================================================
# core/config.py  —  Process configuration
# =============================================================================
#
# The server has exactly one knob: the SECTORS environment variable, a
# comma-separated list of sector ids (e.g. "social-care,education").  It is
# read once at startup into an immutable ServerConfig, which the dispatcher
# receives explicitly.
# =============================================================================

import os
from collections.abc import Mapping
from dataclasses import dataclass

from core.sectors import DEFAULT_REGISTRY, SectorProfile, SectorRegistry, parse_selection

SECTORS_ENV_VAR = "SECTORS"
DEFAULT_SECTORS = "social-care"


@dataclass(frozen=True)
class ServerConfig:
    """Which sectors this process serves, resolved against a registry."""

    registry: SectorRegistry
    sectors_env: str                       # Raw SECTORS value, echoed back to users
    configured: tuple[SectorProfile, ...]  # Resolved, ordered, de-duplicated

    @classmethod
    def from_selection(
        cls,
        sectors_env: str,
        registry: SectorRegistry = DEFAULT_REGISTRY,
    ) -> "ServerConfig":
        configured = registry.resolve_configured(parse_selection(sectors_env))
        return cls(registry=registry, sectors_env=sectors_env, configured=tuple(configured))

    def configured_ids(self) -> list[str]:
        return [s.id for s in self.configured]

    def is_configured(self, sector_id: str) -> bool:
        return any(s.id == sector_id for s in self.configured)


def load_config(
    environ: Mapping[str, str] | None = None,
    registry: SectorRegistry = DEFAULT_REGISTRY,
) -> ServerConfig:
    """Build the ServerConfig from the environment (os.environ by default).

    An unset or empty SECTORS falls back to the single built-in sector.
    """
    env = os.environ if environ is None else environ
    raw = env.get(SECTORS_ENV_VAR) or DEFAULT_SECTORS
    return ServerConfig.from_selection(raw, registry)
