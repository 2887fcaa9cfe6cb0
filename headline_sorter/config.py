"""
Configuration management for Headline Sorter.
Uses pydantic-settings for environment variable parsing.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from headline_sorter.gameplay.constants import GAME_SPEED, MAX_FAILS, TICKS_PER_SECOND

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Data
    data_file: Path = Field(
        default=PACKAGE_DIR / "data" / "headlines.json",
        description="JSON file with the headline records"
    )
    high_score_file: Path = Field(
        default=Path.home() / ".headline_sorter" / "highscore.json",
        description="Where the high score is persisted"
    )

    # Gameplay
    game_speed: float = Field(
        default=GAME_SPEED,
        gt=0,
        description="Pixels per tick for newspapers and the belt"
    )
    max_fails: int = Field(
        default=MAX_FAILS,
        ge=1,
        description="Fails allowed before game over"
    )
    seed: Optional[int] = Field(
        default=None,
        description="Random seed for shuffling and placement. None means random"
    )

    # Display
    fps: int = Field(
        default=TICKS_PER_SECOND,
        ge=1,
        description="Frame rate of the game loop"
    )

    # Audio
    sounds_dir: Path = Field(
        default=PACKAGE_DIR / "sounds",
        description="Directory holding wrong.wav, correct-bin.wav and background.mp3"
    )
    start_muted: bool = Field(
        default=False,
        description="Start with background music muted"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level"
    )

    class Config:
        env_prefix = "HEADLINE_SORTER_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    """
    return Settings()
