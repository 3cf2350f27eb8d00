from core.config import DEFAULT_SECTORS, ServerConfig, load_config
from core.sectors import SECTOR_PROFILES, SectorRegistry


def test_defaults_to_social_care_when_unset():
    config = load_config(environ={})
    assert config.sectors_env == DEFAULT_SECTORS
    assert config.configured_ids() == ["social-care"]


def test_empty_value_falls_back_to_default():
    assert load_config(environ={"SECTORS": ""}).configured_ids() == ["social-care"]


def test_reads_sectors_from_environment():
    config = load_config(environ={"SECTORS": "education, legal,unknown"})
    assert config.sectors_env == "education, legal,unknown"
    assert config.configured_ids() == ["education", "legal"]
    assert config.is_configured("legal")
    assert not config.is_configured("charities")


def test_from_selection_with_alternate_registry():
    registry = SectorRegistry(SECTOR_PROFILES[:2])
    config = ServerConfig.from_selection("legal,education", registry)
    assert config.configured_ids() == ["education"]
    assert len(config.registry) == 2
