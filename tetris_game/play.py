"""
Manual play mode.

Keyboard events are translated into Commands and submitted to a GameLoop;
each frame the loop is updated and the resulting snapshot is drawn by the
TetrisRenderer. No game rules live here.
"""

from __future__ import annotations

import random
from typing import Any

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from tetris_game.game.tetris import Command, GameSession, GameSnapshot
from tetris_game.loop import GameLoop
from tetris_game.renderer import TetrisRenderer


# ── Keyboard mapping for manual play ─────────────────────────────────────
# Arrow keys move/rotate, Space hard drops, P pauses. R (restart) is only
# honoured after game over, see command_for_key().
KEY_MAP: dict[int, Command] = {}
if pygame is not None:
    KEY_MAP = {
        pygame.K_LEFT: Command.MOVE_LEFT,
        pygame.K_RIGHT: Command.MOVE_RIGHT,
        pygame.K_DOWN: Command.SOFT_DROP,
        pygame.K_UP: Command.ROTATE,
        pygame.K_SPACE: Command.HARD_DROP,
        pygame.K_p: Command.TOGGLE_PAUSE,
    }


def command_for_key(key: int, game_over: bool) -> Command | None:
    """Translate a key press into a command, or None if the key is unbound.

    Args:
        key: Pygame key code.
        game_over: Whether the session has ended; restart is only offered then.
    """
    if pygame is not None and key == pygame.K_r:
        return Command.RESTART if game_over else None
    return KEY_MAP.get(key)


def play_manual(config: dict[str, Any]) -> GameSnapshot:
    """Run the game in manual (human) play mode until the window is closed.

    The player uses keyboard controls:
      - Left/Right arrow: move piece
      - Down arrow: soft drop
      - Up arrow: rotate clockwise
      - Space: hard drop
      - P: pause / resume
      - R: restart (after game over)
      - Escape / close window: quit

    Args:
        config: Config dict from tetris_game.config.load_config().

    Returns:
        The last snapshot shown.
    """
    if pygame is None:
        raise ImportError("pygame is required for play mode. Install it: pip install pygame")

    fps = config.get("fps", 60)
    seed = config.get("seed")

    session = GameSession(choose=random.Random(seed).choice)
    renderer = TetrisRenderer(cell_size=config.get("cell_size", 30))
    print(f"Starting game (seed: {seed if seed is not None else 'random'})")

    snapshot = session.snapshot()
    # Force renderer init before the event loop (pygame must be initialized for event.get())
    renderer.render(snapshot, fps)

    try:
        with GameLoop(session, clock=pygame.time.get_ticks) as loop:
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                        break
                    if event.type != pygame.KEYDOWN:
                        continue
                    if event.key == pygame.K_ESCAPE:
                        running = False
                        break
                    command = command_for_key(event.key, snapshot.game_over)
                    if command is not None:
                        loop.submit(command)

                if not running:
                    break

                snapshot = loop.update()
                renderer.render(snapshot, fps)
    finally:
        renderer.close()

    return snapshot
