"""
Input Handler - Translates pygame events to gameplay commands.
This is a THIN ADAPTER - no game logic here.
"""
import logging
import webbrowser

import pygame

from headline_sorter.gameplay.game import Game, GamePhase
from headline_sorter.ui.audio import SoundPlayer
from headline_sorter.ui.story_list import layout_story_list
from headline_sorter.ui.renderer import (
    INCORRECT_DIALOG, PLAY_AGAIN_BUTTON, START_BUTTON, Renderer
)

logger = logging.getLogger(__name__)


class InputHandler:
    """
    Handles mouse and keyboard input and translates to game commands.

    The input handler:
    - Reads pygame events
    - Updates renderer state (pointer position, mute indicator)
    - Calls game methods to modify game state
    """

    def __init__(self, game: Game, renderer: Renderer, sound: SoundPlayer):
        self.game = game
        self.renderer = renderer
        self.sound = sound

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns True if the game should quit.
        """
        if event.type == pygame.QUIT:
            return True

        if event.type == pygame.KEYDOWN:
            return self.handle_key(event.key)

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.handle_click(*event.pos)
        elif event.type == pygame.MOUSEMOTION:
            self.renderer.pointer = event.pos
            self.game.pointer_move(*event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.game.pointer_up(*event.pos)

        return False

    def handle_key(self, key: int) -> bool:
        """
        Handle a single key press.
        Returns True if the game should quit.
        """
        if key == pygame.K_ESCAPE:
            return True

        if key == pygame.K_SPACE:
            # Game refuses the toggle while a dialog is open
            self.game.toggle_pause()
        elif key == pygame.K_m:
            self.renderer.muted = self.sound.toggle_mute()

        return False

    def handle_click(self, x: int, y: int):
        """Left button pressed: buttons and links first, then grabbing a paper."""
        phase = self.game.phase

        if phase == GamePhase.START:
            if START_BUTTON.collidepoint(x, y):
                self.game.begin()
            return

        if phase == GamePhase.DIALOG_GAME_OVER:
            if PLAY_AGAIN_BUTTON.collidepoint(x, y):
                self.game.restart()
                return
            self._open_story_link(x, y)
            return

        if phase == GamePhase.PAUSED:
            self._open_story_link(x, y)
            return

        if phase == GamePhase.DIALOG_INCORRECT:
            link = self.renderer.article_link
            failure = self.game.failure
            if link is not None and failure is not None and link.collidepoint(x, y):
                self._open(failure.newspaper.headline.article)
                return
            if INCORRECT_DIALOG.collidepoint(x, y):
                self.game.dismiss_incorrect()
            return

        self.game.pointer_down(x, y)

    def _open_story_link(self, x: int, y: int) -> bool:
        """Open the collected story link under the pointer, if there is one."""
        layout = layout_story_list(self.game.get_collected_stories())
        url = layout.link_at(x, y)
        if url is None:
            return False
        self._open(url)
        return True

    def _open(self, url: str):
        logger.info(f"Opening article {url}")
        webbrowser.open(url, new=2)
