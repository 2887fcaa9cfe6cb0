"""
Tests for high score persistence.
"""
import json

from headline_sorter.persistence import (
    HIGH_SCORE_KEY, HighScoreStore, JsonHighScoreStore, MemoryHighScoreStore
)


class TestMemoryStore:

    def test_load_and_save(self):
        store = MemoryHighScoreStore(3)
        assert store.load() == 3
        store.save(8)
        assert store.load() == 8
        assert store.saves == 1

    def test_satisfies_protocol(self):
        assert isinstance(MemoryHighScoreStore(), HighScoreStore)
        assert isinstance(JsonHighScoreStore("unused.json"), HighScoreStore)


class TestJsonStore:
    """A bad or missing file never stops the game."""

    def test_missing_file_reads_zero(self, tmp_path):
        assert JsonHighScoreStore(tmp_path / "missing.json").load() == 0

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "nested" / "highscore.json"
        store = JsonHighScoreStore(path)
        store.save(12)

        assert json.loads(path.read_text()) == {HIGH_SCORE_KEY: 12}
        assert JsonHighScoreStore(path).load() == 12

    def test_corrupt_file_reads_zero(self, tmp_path):
        path = tmp_path / "highscore.json"
        path.write_text("{not json")
        assert JsonHighScoreStore(path).load() == 0

    def test_invalid_values_read_zero(self, tmp_path):
        path = tmp_path / "highscore.json"
        for content in ('{"highScore": "lots"}', '{"highScore": -4}', '[1, 2]', '{}'):
            path.write_text(content)
            assert JsonHighScoreStore(path).load() == 0

    def test_numeric_string_accepted(self, tmp_path):
        path = tmp_path / "highscore.json"
        path.write_text('{"highScore": "7"}')
        assert JsonHighScoreStore(path).load() == 7

    def test_unwritable_location_logged(self, tmp_path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        store = JsonHighScoreStore(blocker / "highscore.json")

        store.save(5)

        assert "Could not save high score" in caplog.text
