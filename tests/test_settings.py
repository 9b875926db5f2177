from config.api_key_manager import APIKeyManager
from config.settings import Settings
from config.analysis_config import get_sector_averages, DEFAULT_SECTOR_AVERAGES


def test_first_of_comma_separated_keys_is_used(monkeypatch):
    monkeypatch.setenv("ALPHAVANTAGE_API_KEY", " key1 , key2 ")
    monkeypatch.setenv("GOOGLE_AI_KEY", "")

    settings = Settings()

    assert settings.ALPHAVANTAGE_API_KEY == "key1"
    assert settings.GOOGLE_AI_KEY is None
    assert settings.missing_keys() == ["GOOGLE_AI_KEY"]


def test_gemini_model_env_override(monkeypatch):
    monkeypatch.setenv("GEMINI_MODEL", "gemini-test")

    assert Settings().GEMINI_MODEL == "gemini-test"


def test_unset_variable_registers_nothing(monkeypatch):
    monkeypatch.delenv("SOME_PROVIDER_KEY", raising=False)
    manager = APIKeyManager()
    manager.register("SOME", "SOME_PROVIDER_KEY")

    assert manager.get("SOME") is None
    assert manager.missing_env_vars() == ["SOME_PROVIDER_KEY"]


def test_mask_api_key():
    assert Settings.mask_api_key("ABCD1234EFGH5678") == "ABCD...5678"
    assert Settings.mask_api_key("short") == "****"


def test_sector_averages_are_copied():
    averages = get_sector_averages()
    averages["pe"] = 1.0

    assert DEFAULT_SECTOR_AVERAGES["pe"] == 25.0
