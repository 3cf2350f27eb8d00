# =============================================================================
# core/sectors.py  —  Sector Registry
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds the sector profiles (social care, education, legal, ...) that scope
#   every search: which regulators matter, which phrases disambiguate a
#   query, and which GOV.UK organisations to filter on.
#
# THE REGISTRY IS DATA, NOT GLOBAL STATE:
#   SECTOR_PROFILES is the built-in table.  Nothing reads it directly at
#   request time; a SectorRegistry is built once at startup, stored on the
#   ServerConfig, and passed down.  Tests build registries of their own.
#
# IDEMPOTENCY:
#   Every method here is a pure read.  The registry cannot be mutated after
#   construction.
# =============================================================================

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum


class Priority(str, Enum):
    """How prominent a sector is.  Informational only, never used to rank."""

    HIGH = "high"
    MEDIUM = "medium"


@dataclass(frozen=True)
class SectorProfile:
    """A regulated sector and the hints used to search for it."""

    id: str                            # Stable slug, e.g. "social-care"
    name: str                          # Display name
    description: str
    regulators: tuple[str, ...]        # Display names, informational only
    search_terms: tuple[str, ...]      # First two build disambiguating queries
    departments: tuple[str, ...]       # GOV.UK organisation slugs
    priority: Priority = Priority.MEDIUM

    def summary_payload(self) -> dict:
        """Abbreviated detail, as listed under availableSectors."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "regulators": list(self.regulators),
            "priority": self.priority.value,
        }

    def detail_payload(self) -> dict:
        """Full detail, as listed under configuredSectors."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "regulators": list(self.regulators),
            "searchTerms": list(self.search_terms),
            "departments": list(self.departments),
            "priority": self.priority.value,
        }


# -----------------------------------------------------------------------------
# Built-in sector table
# -----------------------------------------------------------------------------
# Department slugs are the organisation keys the GOV.UK search API accepts
# in filter_organisations[].  Order matters: the first two search terms are
# used for query augmentation and the first one for parliamentary searches.
# -----------------------------------------------------------------------------
SECTOR_PROFILES: tuple[SectorProfile, ...] = (
    SectorProfile(
        id="social-care",
        name="Health, Support & Social Care",
        description="Care homes, domiciliary care, supported living providers",
        regulators=("CQC", "DHSC", "NHS England", "NICE", "Skills for Care"),
        search_terms=(
            "adult social care",
            "care quality",
            "domiciliary care",
            "care homes",
            "CQC guidance",
        ),
        departments=(
            "department-of-health-and-social-care",
            "care-quality-commission",
            "nhs-england",
        ),
        priority=Priority.HIGH,
    ),
    SectorProfile(
        id="education",
        name="Education",
        description="Schools, colleges, universities, training providers",
        regulators=("Ofsted", "DfE", "OfS", "ESFA"),
        search_terms=(
            "schools",
            "colleges",
            "education standards",
            "ofsted inspection",
            "curriculum",
            "SEND",
        ),
        departments=("department-for-education", "ofsted", "office-for-students"),
        priority=Priority.HIGH,
    ),
    SectorProfile(
        id="legal",
        name="Legal Services",
        description="Law firms, solicitors, legal service providers",
        regulators=("SRA", "Law Society", "Legal Services Board"),
        search_terms=(
            "solicitors",
            "legal practice",
            "SRA standards",
            "law firm regulation",
            "AML legal",
        ),
        departments=(
            "solicitors-regulation-authority",
            "legal-services-board",
            "ministry-of-justice",
        ),
        priority=Priority.HIGH,
    ),
    SectorProfile(
        id="charities",
        name="Charities & Not-for-Profit",
        description="Charities, community organizations, foundations",
        regulators=("Charity Commission", "OSCR", "Charity Commission NI"),
        search_terms=(
            "charities",
            "charity governance",
            "fundraising regulation",
            "trustees",
            "charity commission",
        ),
        departments=("charity-commission", "department-for-culture-media-and-sport"),
        priority=Priority.MEDIUM,
    ),
    SectorProfile(
        id="local-authority",
        name="Local Government",
        description="Local councils, public services",
        regulators=("DLUHC", "Local Government Ombudsman"),
        search_terms=(
            "local government",
            "local authorities",
            "council services",
            "public services",
        ),
        departments=(
            "ministry-of-housing-communities-and-local-government",
            "cabinet-office",
        ),
        priority=Priority.MEDIUM,
    ),
    SectorProfile(
        id="recruitment",
        name="Recruitment Agencies",
        description="Staffing agencies, recruitment firms",
        regulators=("Employment Agency Standards Inspectorate", "ICO", "HMRC"),
        search_terms=(
            "recruitment agencies",
            "employment agencies",
            "staffing regulation",
            "agency workers",
        ),
        departments=("department-for-business-and-trade", "hm-revenue-customs"),
        priority=Priority.MEDIUM,
    ),
    SectorProfile(
        id="construction",
        name="Construction",
        description="Construction companies, property developers",
        regulators=("HSE", "Building Safety Regulator"),
        search_terms=(
            "construction safety",
            "building safety",
            "building regulations",
            "HSE construction",
        ),
        departments=(
            "health-and-safety-executive",
            "ministry-of-housing-communities-and-local-government",
        ),
        priority=Priority.MEDIUM,
    ),
)


def parse_selection(raw: str) -> list[str]:
    """Split a comma-separated SECTORS value into trimmed, non-empty ids."""
    return [part.strip() for part in raw.split(",") if part.strip()]


class SectorRegistry:
    """An immutable, ordered lookup of sector profiles by id."""

    def __init__(self, profiles: Iterable[SectorProfile]):
        by_id: dict[str, SectorProfile] = {}
        for profile in profiles:
            if profile.id in by_id:
                raise ValueError(f"Duplicate sector id: {profile.id!r}")
            by_id[profile.id] = profile
        self._by_id = by_id

    def lookup(self, sector_id: str) -> SectorProfile | None:
        """Return the profile for sector_id, or None if it isn't known."""
        return self._by_id.get(sector_id)

    def resolve_configured(self, selection: Iterable[str]) -> list[SectorProfile]:
        """Map a selection list onto registry entries.

        Keeps the selection's order.  Unknown ids and repeats are dropped
        without complaint; nothing is returned that the registry doesn't hold.
        """
        resolved: list[SectorProfile] = []
        seen: set[str] = set()
        for sector_id in selection:
            profile = self._by_id.get(sector_id)
            if profile is None or sector_id in seen:
                continue
            seen.add(sector_id)
            resolved.append(profile)
        return resolved

    def ids(self) -> list[str]:
        return list(self._by_id)

    def __iter__(self) -> Iterator[SectorProfile]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, sector_id: object) -> bool:
        return sector_id in self._by_id


DEFAULT_REGISTRY = SectorRegistry(SECTOR_PROFILES)
