"""
Pygame renderer for the Tetris game.

Draws a GameSnapshot: the board grid (with the falling piece already
overlaid), a sidebar with score / level and the controls, and a
semi-transparent overlay while paused or after game over.
"""

from __future__ import annotations

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from tetris_game.game.board import Board
from tetris_game.game.pieces import COLOR_NAMES
from tetris_game.game.tetris import GameSnapshot, GameStatus


# ── Color constants ───────────────────────────────────────────────────────
BACKGROUND_COLOR = (30, 30, 30)
GRID_LINE_COLOR = (60, 60, 60)
BORDER_COLOR = (200, 200, 200)
TEXT_COLOR = (255, 255, 255)
HINT_COLOR = (170, 170, 170)
SIDEBAR_BG_COLOR = (20, 20, 20)
EMPTY_CELL_COLOR = (40, 40, 40)
OVERLAY_ALPHA = 150

# ── Color name -> RGB (standard Tetris guideline colors) ─────────────────
RGB_BY_NAME: dict[str, tuple[int, int, int]] = {
    "cyan": (0, 255, 255),
    "yellow": (255, 255, 0),
    "purple": (128, 0, 128),
    "green": (0, 255, 0),
    "red": (255, 0, 0),
    "blue": (0, 0, 255),
    "orange": (255, 165, 0),
}

PIECE_COLORS: dict[int, tuple[int, int, int]] = {
    color_id: RGB_BY_NAME[name] for color_id, name in COLOR_NAMES.items()
}

CONTROLS_HELP: tuple[str, ...] = (
    "<- -> : move",
    "down  : soft drop",
    "up    : rotate",
    "space : hard drop",
    "P     : pause",
    "R     : restart",
)


class TetrisRenderer:
    """Pygame-based renderer for game snapshots.

    The window is divided into:
      - Left: board area (cell_size * width) x (cell_size * height)
      - Right: sidebar with score, level and controls

    Attributes:
        cell_size: Pixel size of each grid cell.
        board_pixel_width: Pixel width of the board area.
        board_pixel_height: Pixel height of the board area.
        sidebar_width: Pixel width of the sidebar.
        window_width: Total window width.
        window_height: Total window height.
        screen: Pygame display surface (created on first render).
    """

    SIDEBAR_WIDTH_CELLS: int = 7

    def __init__(self, cell_size: int = 30) -> None:
        """Initialize the renderer.

        Does NOT create the Pygame window yet; that happens on the first
        call to render().

        Args:
            cell_size: Size of each grid cell in pixels.
        """
        if pygame is None:
            raise ImportError("pygame is required for rendering. Install it: pip install pygame")

        self.cell_size = cell_size
        self.board_pixel_width = cell_size * Board.width
        self.board_pixel_height = cell_size * Board.height
        self.sidebar_width = cell_size * self.SIDEBAR_WIDTH_CELLS
        self.window_width = self.board_pixel_width + self.sidebar_width
        self.window_height = self.board_pixel_height

        self.screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._initialized: bool = False

    def render(self, snapshot: GameSnapshot, fps: int = 60) -> None:
        """Draw a snapshot to the screen and wait for the next frame.

        Args:
            snapshot: The state to draw.
            fps: Target frames per second for the display clock.
        """
        if not self._initialized:
            self._init_pygame()

        self.screen.fill(BACKGROUND_COLOR)
        self._draw_board(snapshot)
        self._draw_sidebar(snapshot)

        pygame.draw.rect(
            self.screen,
            BORDER_COLOR,
            (0, 0, self.board_pixel_width, self.board_pixel_height),
            2,
        )

        status = snapshot.status
        if status == GameStatus.GAME_OVER:
            self._draw_overlay("GAME OVER", "Press R to restart", (255, 50, 50))
        elif status == GameStatus.PAUSED:
            self._draw_overlay("PAUSED", "Press P to resume", TEXT_COLOR)

        pygame.display.flip()
        self._clock.tick(fps)

    def _init_pygame(self) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Tetris")
        self._clock = pygame.time.Clock()
        self._font = pygame.font.SysFont("monospace", 20)
        self._small_font = pygame.font.SysFont("monospace", 14)
        self._large_font = pygame.font.SysFont("monospace", 36, bold=True)
        self._initialized = True

    def _draw_board(self, snapshot: GameSnapshot) -> None:
        """Draw every cell of the composite grid plus grid lines."""
        grid = snapshot.grid
        rows, cols = grid.shape

        for row in range(rows):
            for col in range(cols):
                cell_value = int(grid[row, col])
                x = col * self.cell_size
                y = row * self.cell_size

                if cell_value != 0:
                    color = PIECE_COLORS.get(cell_value, (128, 128, 128))
                    pygame.draw.rect(
                        self.screen, color, (x, y, self.cell_size, self.cell_size)
                    )
                    # Slightly darker border for a 3D effect
                    darker = tuple(max(0, c - 40) for c in color)
                    pygame.draw.rect(
                        self.screen, darker, (x, y, self.cell_size, self.cell_size), 1
                    )
                else:
                    pygame.draw.rect(
                        self.screen, EMPTY_CELL_COLOR, (x, y, self.cell_size, self.cell_size)
                    )

                pygame.draw.rect(
                    self.screen, GRID_LINE_COLOR, (x, y, self.cell_size, self.cell_size), 1
                )

    def _draw_sidebar(self, snapshot: GameSnapshot) -> None:
        sidebar_x = self.board_pixel_width
        pygame.draw.rect(
            self.screen,
            SIDEBAR_BG_COLOR,
            (sidebar_x, 0, self.sidebar_width, self.window_height),
        )
        pygame.draw.line(
            self.screen,
            BORDER_COLOR,
            (sidebar_x, 0),
            (sidebar_x, self.window_height),
            2,
        )

        text_x = sidebar_x + 15
        text_y = 20

        self._draw_text("SCORE", text_x, text_y)
        self._draw_text(str(snapshot.score), text_x, text_y + 25)

        text_y += 65
        self._draw_text("LEVEL", text_x, text_y)
        self._draw_text(str(snapshot.level), text_x, text_y + 25)

        text_y += 90
        for line in CONTROLS_HELP:
            surface = self._small_font.render(line, True, HINT_COLOR)
            self.screen.blit(surface, (text_x, text_y))
            text_y += 20

    def _draw_overlay(self, title: str, hint: str, title_color: tuple[int, int, int]) -> None:
        overlay = pygame.Surface(
            (self.board_pixel_width, self.board_pixel_height), pygame.SRCALPHA
        )
        overlay.fill((0, 0, 0, OVERLAY_ALPHA))
        self.screen.blit(overlay, (0, 0))

        text_title = self._large_font.render(title, True, title_color)
        text_hint = self._small_font.render(hint, True, TEXT_COLOR)

        cx = self.board_pixel_width // 2
        cy = self.board_pixel_height // 2
        self.screen.blit(text_title, (cx - text_title.get_width() // 2, cy - 40))
        self.screen.blit(text_hint, (cx - text_hint.get_width() // 2, cy + 10))

    def _draw_text(self, text: str, x: int, y: int, color: tuple[int, int, int] = TEXT_COLOR) -> None:
        surface = self._font.render(text, True, color)
        self.screen.blit(surface, (x, y))

    def close(self) -> None:
        """Shut down Pygame and close the window."""
        if self._initialized:
            pygame.quit()
            self._initialized = False
