#!/usr/bin/env python3
"""
Headline Sorter - Main Entry Point

Newspapers ride a conveyor belt up the screen. Drag each one into the
right bin before it scrolls away: fake stories to the trash on the left,
real stories to the cart on the right. Three mistakes and the shift is over.

Usage:
    headline-sorter
    python -m headline_sorter.main

Controls:
    Mouse: Drag newspapers
    Space: Pause / resume
    M: Mute music
    Escape: Quit
"""
import logging
import random

import pygame

from headline_sorter.assets import HeadlineLoader
from headline_sorter.config import get_settings
from headline_sorter.gameplay.game import Game
from headline_sorter.persistence import JsonHighScoreStore
from headline_sorter.ui.audio import SoundPlayer
from headline_sorter.ui.input_handler import InputHandler
from headline_sorter.ui.renderer import Renderer

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Headline Sorter - Starting...")

    game = Game(
        high_score_store=JsonHighScoreStore(settings.high_score_file),
        rng=random.Random(settings.seed),
        game_speed=settings.game_speed,
        max_fails=settings.max_fails,
    )

    # Loading screen shows until the data thread hands over the headlines
    loader = HeadlineLoader(settings.data_file, on_ready=game.finish_loading)
    loader.start()

    pygame.init()
    renderer = Renderer(game)
    renderer.init_window()

    sound = SoundPlayer(settings.sounds_dir, muted=settings.start_muted)
    sound.init()
    renderer.muted = sound.muted

    input_handler = InputHandler(game, renderer, sound)
    clock = pygame.time.Clock()

    should_quit = False
    while not should_quit:
        dt = clock.tick(settings.fps) / 1000.0

        # Input is handled between ticks, never during one
        for event in pygame.event.get():
            if input_handler.handle_event(event):
                should_quit = True

        events = game.update(dt)
        sound.handle_events(events)

        renderer.render()

    logger.info("Quitting")
    pygame.quit()


if __name__ == "__main__":
    main()
