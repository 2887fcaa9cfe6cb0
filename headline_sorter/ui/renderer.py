"""
Renderer - Reads gameplay state and draws it with pygame.
This is a THIN ADAPTER - no game logic here.
"""
from typing import List, Optional

import pygame

from headline_sorter.gameplay.game import FailureKind, Game, GamePhase
from headline_sorter.gameplay.entities import Newspaper
from headline_sorter.gameplay.zones import find_drop_zone
from headline_sorter.gameplay.placement import Rect
from headline_sorter.ui.story_list import EMPTY_MESSAGE, layout_story_list
from headline_sorter.gameplay.constants import (
    LANE_LEFT, LANE_RIGHT, SCREEN_HEIGHT, SCREEN_WIDTH, ZONE_WIDTH,
    BELT_SEGMENT_SPACING
)


# Colors
COLOR_PAPER_BG = (240, 224, 190)
COLOR_INK = (0, 0, 0)
COLOR_FRAME = (44, 62, 80)
COLOR_FRAME_INNER = (52, 73, 94)
COLOR_BELT = (139, 69, 19)
COLOR_BELT_SEGMENT = (160, 82, 45)
COLOR_FLOOR_LIGHT = (120, 120, 120)
COLOR_FLOOR_DARK = (100, 100, 100)
COLOR_DISCARD = (170, 60, 50)
COLOR_ARCHIVE = (60, 120, 70)
COLOR_HOVER = (0, 0, 0, 26)
COLOR_OVERLAY = (240, 224, 190, 235)
COLOR_FAIL_USED = (200, 40, 40)
COLOR_FAIL_LEFT = (170, 170, 170)
COLOR_LINK = (30, 60, 160)
COLOR_ROW_EVEN = (225, 208, 172)

# Layout
START_BUTTON = pygame.Rect(SCREEN_WIDTH // 2 - 150, SCREEN_HEIGHT - 375, 300, 100)
INCORRECT_DIALOG = pygame.Rect((SCREEN_WIDTH - 600) // 2, (SCREEN_HEIGHT - 400) // 2, 600, 400)
# Pause and game over sit above the story list panel
GAME_OVER_DIALOG = pygame.Rect((SCREEN_WIDTH - 550) // 2, 40, 550, 300)
PLAY_AGAIN_BUTTON = pygame.Rect(SCREEN_WIDTH // 2 - 100, GAME_OVER_DIALOG.bottom - 80, 200, 60)
PAUSE_MENU = pygame.Rect((SCREEN_WIDTH - 600) // 2, 100, 600, 200)

HEADLINE_MAX_LINES = 4


def wrap_text(font: pygame.font.Font, text: str, max_width: int, max_lines: int) -> List[str]:
    """Greedy word wrap, truncating with an ellipsis past max_lines."""
    lines: List[str] = []
    current = ""
    for word in text.split(" "):
        candidate = f"{current} {word}" if current else word
        if font.size(candidate)[0] <= max_width or not current:
            current = candidate
            continue
        if len(lines) < max_lines - 1:
            lines.append(current)
            current = word
        else:
            current = current[:-3] + "..."
            break
    if current and len(lines) < max_lines:
        lines.append(current)
    return lines


def _to_pygame_rect(rect: Rect) -> pygame.Rect:
    return pygame.Rect(int(rect.x), int(rect.y), int(rect.width), int(rect.height))


class Renderer:
    """
    Renders game state to a pygame surface.

    This class reads from Game but never modifies it. It also owns the
    UI-only state the input handler needs: pointer position, the article
    link hit box and the mute flag shown in the HUD.
    """

    def __init__(self, game: Game):
        self.game = game
        self.screen: Optional[pygame.Surface] = None

        self.pointer = (0, 0)
        self.article_link: Optional[pygame.Rect] = None
        self.muted = False

        self._fonts = {}

    def init_window(self, title: str = "Headline Sorter") -> pygame.Surface:
        """Create the window and fonts. pygame.init() must have run."""
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(title)
        self._fonts = {
            "masthead": pygame.font.SysFont("georgia", 34, bold=True),
            "headline": pygame.font.SysFont("georgia", 20, bold=True),
            "body": pygame.font.SysFont("georgia", 18),
            "title": pygame.font.SysFont("georgia", 36, bold=True),
            "button": pygame.font.SysFont("georgia", 32, bold=True),
            "small": pygame.font.SysFont("georgia", 14),
            "hud": pygame.font.SysFont("georgia", 20, bold=True),
        }
        return self.screen

    def render(self):
        """Render entire game state."""
        phase = self.game.phase

        if phase == GamePhase.LOADING:
            self.render_loading()
        elif phase in (GamePhase.START, GamePhase.RESETTING):
            self.render_start_screen()
        else:
            self.render_belt()
            self.render_zones()
            self.render_hover_overlay()
            for paper in self.game.get_newspapers():
                self._render_newspaper(paper)
            self.render_hud()

            if self.game.success_flash_active():
                self.render_success_flash()
            if phase == GamePhase.RUNNING and self.game.out_of_headlines:
                self.render_out_of_headlines()
            if phase == GamePhase.PAUSED:
                self.render_pause_menu()
                self.render_story_list()
            elif phase == GamePhase.DIALOG_INCORRECT:
                self.render_incorrect_dialog()
            elif phase == GamePhase.DIALOG_GAME_OVER:
                self.render_game_over()
                self.render_story_list()

        pygame.display.flip()

    # =========================================================================
    # PLAYFIELD
    # =========================================================================

    def render_belt(self):
        self.screen.fill(COLOR_PAPER_BG)
        lane = pygame.Rect(LANE_LEFT, 0, LANE_RIGHT - LANE_LEFT, SCREEN_HEIGHT)
        pygame.draw.rect(self.screen, COLOR_BELT, lane)

        # Tracks
        pygame.draw.line(self.screen, COLOR_FRAME, (lane.left + 20, 0), (lane.left + 20, SCREEN_HEIGHT), 4)
        pygame.draw.line(self.screen, COLOR_FRAME, (lane.right - 20, 0), (lane.right - 20, SCREEN_HEIGHT), 4)

        # Segments scroll up with the belt
        y = -int(self.game.belt_offset)
        while y < SCREEN_HEIGHT:
            pygame.draw.rect(self.screen, COLOR_BELT_SEGMENT, (lane.left + 20, y, lane.width - 40, 30))
            y += BELT_SEGMENT_SPACING

    def render_zones(self):
        """Tiled factory floor on both sides, with a labelled bin in each."""
        tile = 40
        for start_x in (0, SCREEN_WIDTH - ZONE_WIDTH):
            for x in range(start_x, start_x + ZONE_WIDTH, tile):
                for y in range(0, SCREEN_HEIGHT, tile):
                    dark = ((x // tile) + (y // tile)) % 2 == 0
                    color = COLOR_FLOOR_DARK if dark else COLOR_FLOOR_LIGHT
                    pygame.draw.rect(self.screen, color, (x, y, tile, tile))

        bins = (
            (pygame.Rect(25, SCREEN_HEIGHT - 250, 150, 225), COLOR_DISCARD, "FAKE"),
            (pygame.Rect(SCREEN_WIDTH - 175, SCREEN_HEIGHT - 250, 150, 225), COLOR_ARCHIVE, "FACT"),
        )
        for rect, color, label in bins:
            pygame.draw.rect(self.screen, color, rect, border_radius=8)
            pygame.draw.rect(self.screen, COLOR_INK, rect, 3, border_radius=8)
            self._blit_centered(label, "title", COLOR_PAPER_BG, rect.centerx, rect.top + 40)

    def render_hover_overlay(self):
        """Darken the zone a dragged paper is over."""
        paper = self.game.dragged
        if paper is None:
            return
        zone = find_drop_zone(paper.rect, self.game.zones)
        if zone is None:
            return
        r = zone.rect
        overlay = pygame.Surface((int(r.width), int(r.height)), pygame.SRCALPHA)
        overlay.fill(COLOR_HOVER)
        self.screen.blit(overlay, (r.x, r.y))

    def _render_newspaper(self, paper: Newspaper):
        rect = pygame.Rect(int(paper.x), int(paper.y), int(paper.width), int(paper.height))
        pygame.draw.rect(self.screen, COLOR_PAPER_BG, rect)
        pygame.draw.rect(self.screen, COLOR_FRAME, rect, 2)

        self._blit_centered("The Daily News", "masthead", COLOR_INK, rect.centerx, rect.top + 40)
        pygame.draw.line(self.screen, COLOR_INK, (rect.left + 20, rect.top + 65), (rect.right - 20, rect.top + 65), 2)

        font = self._fonts["headline"]
        lines = wrap_text(font, paper.headline.headline, rect.width - 60, HEADLINE_MAX_LINES)
        line_height = font.get_linesize()
        y = rect.top + 90
        for line in lines:
            self._blit_centered(line, "headline", COLOR_INK, rect.centerx, y)
            y += line_height

        # Placeholder where the article photo would go
        photo = pygame.Rect(0, 0, rect.width - 80, 150)
        photo.midtop = (rect.centerx, y + 10)
        pygame.draw.rect(self.screen, COLOR_FLOOR_LIGHT, photo)
        pygame.draw.rect(self.screen, COLOR_INK, photo, 2)

        if paper.headline.year:
            self._blit_centered(paper.headline.year, "headline", COLOR_INK, rect.centerx, rect.bottom - 25)

    def render_hud(self):
        score, fails, max_fails, high_score = self.game.get_score_state()

        for i in range(max_fails):
            color = COLOR_FAIL_USED if i < fails else COLOR_FAIL_LEFT
            self._blit_text("X", "hud", color, 12 + i * 35, 12)

        self._boxed_text(f"Score: {score}", SCREEN_WIDTH // 2, 25)
        self._boxed_text(f"High Score: {high_score}", SCREEN_WIDTH - 120, 25)

        if self.muted:
            self._blit_text("muted", "small", COLOR_INK, 12, SCREEN_HEIGHT - 24)

    # =========================================================================
    # OVERLAYS
    # =========================================================================

    def render_loading(self):
        self.screen.fill(COLOR_PAPER_BG)
        dialog = pygame.Rect((SCREEN_WIDTH - 500) // 2, (SCREEN_HEIGHT - 250) // 2, 500, 250)
        self._draw_dialog_frame(dialog, opaque_backdrop=False)
        self._blit_centered("Loading Assets", "title", COLOR_INK, dialog.centerx, dialog.top + 60)
        self._blit_centered("Please wait while game assets load...", "body", COLOR_INK, dialog.centerx, dialog.top + 105)
        dots = "." * (1 + (pygame.time.get_ticks() // 500) % 3)
        self._blit_centered(dots, "title", COLOR_INK, dialog.centerx, dialog.top + 150)

    def render_start_screen(self):
        self.screen.fill(COLOR_PAPER_BG)
        cx = SCREEN_WIDTH // 2
        self._blit_centered("How to Play:", "title", COLOR_INK, cx, 190)
        self._blit_centered("Drag newspapers LEFT to trash fake news", "body", COLOR_INK, cx, 235)
        self._blit_centered("Drag newspapers RIGHT to save real news", "body", COLOR_INK, cx, 265)
        self._blit_centered("Don't let newspapers fall off the top!", "body", COLOR_INK, cx, 295)
        self._blit_centered("SPACE to pause - M to mute music", "small", COLOR_INK, cx, 345)

        hovering = START_BUTTON.collidepoint(self.pointer)
        fill, text = (COLOR_INK, COLOR_PAPER_BG) if hovering else (COLOR_PAPER_BG, COLOR_INK)
        pygame.draw.rect(self.screen, fill, START_BUTTON, border_radius=15)
        pygame.draw.rect(self.screen, COLOR_INK, START_BUTTON, 2, border_radius=15)
        self._blit_centered("START GAME", "button", text, START_BUTTON.centerx, START_BUTTON.centery)

    def render_success_flash(self):
        box = pygame.Rect(0, 0, 200, 120)
        box.center = (SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2)
        pygame.draw.rect(self.screen, COLOR_PAPER_BG, box)
        pygame.draw.rect(self.screen, COLOR_FRAME, box, 3)
        self._blit_centered("SUCCESS!", "title", COLOR_ARCHIVE, box.centerx, box.centery)

    def render_pause_menu(self):
        self._draw_dialog_frame(PAUSE_MENU)
        self._blit_centered("PAUSED", "title", COLOR_INK, PAUSE_MENU.centerx, PAUSE_MENU.top + 70)
        self._blit_centered("Press SPACE to resume", "body", COLOR_INK, PAUSE_MENU.centerx, PAUSE_MENU.top + 130)

    def render_incorrect_dialog(self):
        failure = self.game.failure
        dialog = INCORRECT_DIALOG
        self._draw_dialog_frame(dialog)

        title = "TOO SLOW!" if failure is not None and failure.kind == FailureKind.TIMEOUT else "INCORRECT!"
        self._blit_centered(title, "title", COLOR_INK, dialog.centerx, dialog.top + 50)

        _, fails, max_fails, _ = self.game.get_score_state()
        start_x = dialog.centerx - (max_fails * 60) // 2
        for i in range(max_fails):
            color = COLOR_FAIL_USED if i < fails else COLOR_FAIL_LEFT
            self._blit_centered("X", "title", color, start_x + i * 60 + 30, dialog.top + 130)

        self.article_link = None
        if failure is not None:
            headline = failure.newspaper.headline
            story_type = "True story!" if headline.is_true else "Fake story!"
            self._blit_centered(story_type, "title", COLOR_INK, dialog.centerx, dialog.top + 200)
            for i, line in enumerate(wrap_text(self._fonts["body"], headline.headline, dialog.width - 80, 2)):
                self._blit_centered(line, "body", COLOR_INK, dialog.centerx, dialog.top + 245 + i * 22)

            if headline.is_true and headline.article:
                link = self._fonts["small"].render(headline.article, True, COLOR_LINK)
                self.article_link = pygame.Rect(0, 0, max(link.get_width() + 20, 200), 35)
                self.article_link.midtop = (dialog.centerx, dialog.top + 295)
                pygame.draw.rect(self.screen, COLOR_PAPER_BG, self.article_link, border_radius=8)
                pygame.draw.rect(self.screen, COLOR_INK, self.article_link, 2, border_radius=8)
                self.screen.blit(link, link.get_rect(center=self.article_link.center))

        self._blit_centered("Click anywhere to continue", "small", COLOR_INK, dialog.centerx, dialog.bottom - 25)

    def render_game_over(self):
        dialog = GAME_OVER_DIALOG
        self._draw_dialog_frame(dialog)
        score, _, _, high_score = self.game.get_score_state()

        self._blit_centered("GAME OVER", "title", COLOR_INK, dialog.centerx, dialog.top + 50)
        self._blit_centered(f"Final Score: {score}", "body", COLOR_INK, dialog.centerx, dialog.top + 105)
        if self.game.new_high_score:
            self._blit_centered("NEW HIGH SCORE!", "headline", COLOR_FAIL_USED, dialog.centerx, dialog.top + 140)
        else:
            self._blit_centered(f"High Score: {high_score}", "body", COLOR_INK, dialog.centerx, dialog.top + 140)

        hovering = PLAY_AGAIN_BUTTON.collidepoint(self.pointer)
        fill, text = (COLOR_INK, COLOR_PAPER_BG) if hovering else (COLOR_PAPER_BG, COLOR_INK)
        pygame.draw.rect(self.screen, fill, PLAY_AGAIN_BUTTON, border_radius=12)
        pygame.draw.rect(self.screen, COLOR_INK, PLAY_AGAIN_BUTTON, 2, border_radius=12)
        self._blit_centered("Play Again", "headline", text, PLAY_AGAIN_BUTTON.centerx, PLAY_AGAIN_BUTTON.centery)

    def render_out_of_headlines(self):
        box = pygame.Rect(0, 0, 420, 90)
        box.center = (SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2)
        pygame.draw.rect(self.screen, COLOR_PAPER_BG, box)
        pygame.draw.rect(self.screen, COLOR_FRAME, box, 3)
        self._blit_centered("No more headlines", "title", COLOR_INK, box.centerx, box.centery - 12)
        self._blit_centered("Press SPACE to see your stories", "small", COLOR_INK, box.centerx, box.bottom - 18)

    def render_story_list(self):
        """Collected genuine stories, newest at the bottom, each with its link."""
        layout = layout_story_list(self.game.get_collected_stories())
        panel = _to_pygame_rect(layout.panel)
        self._draw_dialog_frame(panel, opaque_backdrop=False)

        header = "Collected Stories"
        if layout.hidden:
            header += f" (latest {len(layout.rows)} of {layout.total})"
        self._blit_centered(header, "headline", COLOR_INK, panel.centerx, panel.top + 28)

        if layout.is_empty:
            self._blit_centered(EMPTY_MESSAGE, "body", COLOR_INK, panel.centerx, panel.centery)
            return

        for i, row in enumerate(layout.rows):
            rect = _to_pygame_rect(row.rect)
            if i % 2 == 0:
                pygame.draw.rect(self.screen, COLOR_ROW_EVEN, rect)

            story = row.story
            title = f"{story.year} - {story.headline}" if story.year else story.headline
            lines = wrap_text(self._fonts["body"], title, rect.width - 20, 1)
            if lines:
                self._blit_text(lines[0], "body", COLOR_INK, rect.left + 10, rect.top + 6)

            if row.link_rect is not None:
                link = _to_pygame_rect(row.link_rect)
                surface = self._fonts["small"].render(story.link, True, COLOR_LINK)
                # Long URLs are clipped to the link box
                self.screen.blit(surface, link.topleft, area=pygame.Rect(0, 0, link.width, link.height))

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _draw_dialog_frame(self, rect: pygame.Rect, opaque_backdrop: bool = True):
        if opaque_backdrop:
            backdrop = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.SRCALPHA)
            backdrop.fill(COLOR_OVERLAY)
            self.screen.blit(backdrop, (0, 0))
        pygame.draw.rect(self.screen, COLOR_PAPER_BG, rect)
        pygame.draw.rect(self.screen, COLOR_FRAME, rect, 6)
        pygame.draw.rect(self.screen, COLOR_FRAME_INNER, rect.inflate(-20, -20), 2)

    def _boxed_text(self, text: str, center_x: int, center_y: int):
        surface = self._fonts["hud"].render(text, True, COLOR_INK)
        box = surface.get_rect(center=(center_x, center_y)).inflate(20, 8)
        pygame.draw.rect(self.screen, COLOR_PAPER_BG, box)
        pygame.draw.rect(self.screen, COLOR_INK, box, 2)
        self.screen.blit(surface, surface.get_rect(center=box.center))

    def _blit_text(self, text: str, font: str, color, x: int, y: int):
        self.screen.blit(self._fonts[font].render(text, True, color), (x, y))

    def _blit_centered(self, text: str, font: str, color, center_x: int, center_y: int):
        surface = self._fonts[font].render(text, True, color)
        self.screen.blit(surface, surface.get_rect(center=(center_x, center_y)))
