import pytest

from core.sectors import (
    DEFAULT_REGISTRY,
    SECTOR_PROFILES,
    Priority,
    SectorProfile,
    SectorRegistry,
    parse_selection,
)


def test_registry_holds_seven_unique_sectors():
    assert len(DEFAULT_REGISTRY) == 7
    assert DEFAULT_REGISTRY.ids() == [
        "social-care",
        "education",
        "legal",
        "charities",
        "local-authority",
        "recruitment",
        "construction",
    ]


def test_lookup_known_and_unknown():
    education = DEFAULT_REGISTRY.lookup("education")
    assert education is not None
    assert education.name == "Education"
    assert education.priority is Priority.HIGH
    assert DEFAULT_REGISTRY.lookup("aviation") is None


def test_resolve_configured_keeps_input_order_and_drops_unknown():
    out = DEFAULT_REGISTRY.resolve_configured(["legal", "bogus", "social-care", "education"])
    assert [s.id for s in out] == ["legal", "social-care", "education"]


def test_resolve_configured_drops_duplicates():
    out = DEFAULT_REGISTRY.resolve_configured(["education", "education", "legal", "education"])
    assert [s.id for s in out] == ["education", "legal"]


def test_resolve_configured_never_invents_entries():
    assert DEFAULT_REGISTRY.resolve_configured(["nope", "", "SOCIAL-CARE"]) == []


def test_duplicate_ids_rejected():
    with pytest.raises(ValueError, match="social-care"):
        SectorRegistry([SECTOR_PROFILES[0], SECTOR_PROFILES[0]])


def test_alternate_registry_is_isolated():
    custom = SectorProfile(
        id="aviation",
        name="Aviation",
        description="Airlines",
        regulators=("CAA",),
        search_terms=("aviation safety", "airports"),
        departments=("civil-aviation-authority",),
    )
    registry = SectorRegistry([custom])
    assert "aviation" in registry
    assert "education" not in registry
    assert [s.id for s in registry.resolve_configured(["education", "aviation"])] == ["aviation"]


def test_parse_selection_trims_and_skips_empty():
    assert parse_selection(" social-care, education ,,legal,") == ["social-care", "education", "legal"]
    assert parse_selection("") == []


def test_payload_shapes():
    legal = DEFAULT_REGISTRY.lookup("legal")
    summary = legal.summary_payload()
    assert set(summary) == {"id", "name", "description", "regulators", "priority"}
    assert summary["priority"] == "high"

    detail = legal.detail_payload()
    assert detail["searchTerms"][:2] == ["solicitors", "legal practice"]
    assert detail["departments"] == [
        "solicitors-regulation-authority",
        "legal-services-board",
        "ministry-of-justice",
    ]
