"""
Tests for environment-driven settings.
"""
import pytest
from pydantic import ValidationError

from headline_sorter.config import PACKAGE_DIR, Settings, get_settings
from headline_sorter.gameplay.constants import GAME_SPEED, MAX_FAILS


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:

    def test_defaults(self):
        settings = Settings()
        assert settings.game_speed == GAME_SPEED
        assert settings.max_fails == MAX_FAILS
        assert settings.seed is None
        assert settings.data_file == PACKAGE_DIR / "data" / "headlines.json"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("HEADLINE_SORTER_MAX_FAILS", "5")
        monkeypatch.setenv("HEADLINE_SORTER_SEED", "42")
        monkeypatch.setenv("HEADLINE_SORTER_START_MUTED", "true")

        settings = Settings()

        assert settings.max_fails == 5
        assert settings.seed == 42
        assert settings.start_muted is True

    def test_invalid_values_rejected(self, monkeypatch):
        monkeypatch.setenv("HEADLINE_SORTER_MAX_FAILS", "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_get_settings_cached(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("HEADLINE_SORTER_FPS", "30")
        assert get_settings() is first

        get_settings.cache_clear()
        assert get_settings().fps == 30
