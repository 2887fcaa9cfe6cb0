"""
Tests for headline data loading.
"""
import json
import random

from headline_sorter.assets import (
    FALLBACK_HEADLINES, HeadlineLoader, HeadlineRecord, load_headlines
)
from headline_sorter.config import PACKAGE_DIR
from headline_sorter.gameplay.game import Game, GamePhase


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestHeadlineRecord:

    def test_file_key_names(self):
        record = HeadlineRecord.model_validate({
            "isTrue": True,
            "headline": "Great Fire Sweeps Through City",
            "year": "1871",
            "imageUrl": "https://example.org/fire.jpg",
            "article": "https://en.wikipedia.org/wiki/Great_Chicago_Fire",
        })
        headline = record.to_headline()

        assert headline.is_true
        assert headline.year == "1871"
        assert headline.image_url == "https://example.org/fire.jpg"
        assert headline.article.endswith("Great_Chicago_Fire")

    def test_optional_fields_default_empty(self):
        headline = HeadlineRecord.model_validate({"isTrue": False, "headline": "x"}).to_headline()
        assert (headline.year, headline.article, headline.image_url) == ("", "", "")


class TestLoadHeadlines:
    """Any load failure falls back to the built-in list."""

    def test_valid_file(self, tmp_path):
        path = write_json(tmp_path / "headlines.json", {"headlines": [
            {"isTrue": False, "headline": "Fish Elected Mayor"},
            {"isTrue": True, "headline": "Man Walks on Moon", "year": "1969"},
        ]})

        headlines = load_headlines(path)

        assert [h.headline for h in headlines] == ["Fish Elected Mayor", "Man Walks on Moon"]
        assert [h.is_true for h in headlines] == [False, True]

    def test_missing_file(self, tmp_path, caplog):
        assert load_headlines(tmp_path / "nope.json") == FALLBACK_HEADLINES
        assert "Failed to load headline data" in caplog.text

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "headlines.json"
        path.write_text("{\"headlines\": [", encoding="utf-8")
        assert load_headlines(path) == FALLBACK_HEADLINES

    def test_missing_required_field(self, tmp_path):
        path = write_json(tmp_path / "headlines.json", {"headlines": [{"headline": "No flag"}]})
        assert load_headlines(path) == FALLBACK_HEADLINES

    def test_empty_list(self, tmp_path):
        path = write_json(tmp_path / "headlines.json", {"headlines": []})
        assert load_headlines(path) == FALLBACK_HEADLINES

    def test_fallback_is_a_copy(self, tmp_path):
        headlines = load_headlines(tmp_path / "nope.json")
        headlines.clear()
        assert len(FALLBACK_HEADLINES) == 3

    def test_bundled_data_file(self):
        headlines = load_headlines(PACKAGE_DIR / "data" / "headlines.json")
        assert headlines != FALLBACK_HEADLINES
        assert any(h.is_true for h in headlines)
        assert any(not h.is_true for h in headlines)


class TestHeadlineLoader:
    """Background loading hands the data straight to the game."""

    def test_loader_finishes_game_loading(self, tmp_path):
        path = write_json(tmp_path / "headlines.json", {"headlines": [
            {"isTrue": False, "headline": "Fish Elected Mayor"},
        ]})
        game = Game(rng=random.Random(0))
        loader = HeadlineLoader(path, on_ready=game.finish_loading)

        assert not loader.ready
        loader.start()
        assert loader.wait(timeout=5.0)

        assert loader.ready
        assert [h.headline for h in loader.headlines] == ["Fish Elected Mayor"]
        assert game.phase == GamePhase.START
        assert game.pool.total == 1

    def test_loader_without_callback(self, tmp_path):
        loader = HeadlineLoader(tmp_path / "nope.json")
        loader.start()
        assert loader.wait(timeout=5.0)
        assert loader.headlines == FALLBACK_HEADLINES
