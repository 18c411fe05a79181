"""
Game loop. Serializes player commands and gravity ticks onto one session.

Commands may be submitted from any thread; they are queued and only applied
inside ``GameLoop.update()``, which also fires whatever gravity ticks have
come due. That single method is the only place the session is mutated, so
no two changes can interleave.

The gravity timer is a small value object. When the level changes the loop
cancels it and schedules a fresh one with the new interval rather than
editing the running timer.
"""

from __future__ import annotations

import dataclasses
import queue as queue_mod
import time
from typing import Any, Callable

from tetris_game.game.tetris import GameSession, GameSnapshot, gravity_interval

Clock = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class LoopClosedError(RuntimeError):
    """Raised when a closed GameLoop is used again."""


@dataclasses.dataclass(slots=True)
class GravityTimer:
    """Periodic deadline for gravity ticks.

    Attributes:
        interval: Milliseconds between ticks.
        next_due: Clock time (ms) of the next tick.
        cancelled: Set once the timer has been released.
    """

    interval: float
    next_due: float
    cancelled: bool = False

    @classmethod
    def start(cls, interval: float, now: float) -> GravityTimer:
        return cls(interval=interval, next_due=now + interval)

    def expired(self, now: float) -> bool:
        return not self.cancelled and now >= self.next_due

    def advance(self) -> None:
        self.next_due += self.interval

    def cancel(self) -> None:
        self.cancelled = True


class GameLoop:
    """Drives a GameSession from a command queue and a gravity timer.

    Usage::

        with GameLoop(GameSession()) as loop:
            loop.submit(Command.ROTATE)
            snapshot = loop.update()

    Attributes:
        session: The session being driven.
        timer: The current gravity timer (replaced on level change).
    """

    # Upper bound on ticks fired by one update() after a long stall.
    MAX_TICKS_PER_UPDATE: int = 20

    def __init__(self, session: GameSession, clock: Clock | None = None) -> None:
        """Create the loop and schedule the first gravity tick.

        Args:
            session: The session to drive.
            clock: Returns the current time in milliseconds. Defaults to a
                monotonic clock.
        """
        self.session = session
        self._clock = clock or monotonic_ms
        self._commands: queue_mod.Queue = queue_mod.Queue()
        self._closed = False
        self.timer = GravityTimer.start(gravity_interval(session.level), self._clock())
        self._timer_level = session.level

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, command: Any) -> None:
        """Queue a command for the next update(). Safe from any thread."""
        if self._closed:
            raise LoopClosedError("GameLoop is closed")
        self._commands.put_nowait(command)

    def update(self) -> GameSnapshot:
        """Apply queued commands, then any gravity ticks that are due.

        Returns:
            Snapshot of the session after all changes.
        """
        if self._closed:
            raise LoopClosedError("GameLoop is closed")

        while True:
            try:
                command = self._commands.get_nowait()
            except queue_mod.Empty:
                break
            self.session.handle(command)
            self._sync_timer()

        ticks = 0
        while self.timer.expired(self._clock()) and ticks < self.MAX_TICKS_PER_UPDATE:
            self.timer.advance()
            self.session.tick()
            ticks += 1
            self._sync_timer()

        if ticks == self.MAX_TICKS_PER_UPDATE and self.timer.expired(self._clock()):
            # Drop the backlog instead of replaying it on the next frame.
            self._reschedule()

        return self.session.snapshot()

    def close(self) -> None:
        """Cancel the gravity timer and discard pending commands."""
        if self._closed:
            return
        self.timer.cancel()
        while True:
            try:
                self._commands.get_nowait()
            except queue_mod.Empty:
                break
        self._closed = True

    def __enter__(self) -> GameLoop:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _sync_timer(self) -> None:
        if self.session.level != self._timer_level:
            self._reschedule()

    def _reschedule(self) -> None:
        self.timer.cancel()
        self.timer = GravityTimer.start(
            gravity_interval(self.session.level), self._clock()
        )
        self._timer_level = self.session.level
