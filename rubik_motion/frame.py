"""Per-frame input handed from the driver to the animation core."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Union


@dataclass(frozen=True)
class PageScroll:
    offset: float


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


FrameEvent = Union[PageScroll, Resize]


@dataclass(frozen=True)
class FrameInput:
    # Milliseconds since the clock started.
    time: float
    # Milliseconds since the previous frame.
    frame_time: float
    events: tuple[FrameEvent, ...] = field(default_factory=tuple)


def _perf_counter_ms() -> float:
    return time.perf_counter() * 1000.0


class FrameClock:
    """Turns a millisecond time source into FrameInput values, one per tick.

    Events posted between ticks are delivered with the next frame.
    """

    def __init__(self, now_ms: Callable[[], float] | None = None):
        self._now_ms = now_ms or _perf_counter_ms
        self._events: deque[FrameEvent] = deque()
        self._last: float | None = None
        self.elapsed = 0.0
        self.frames = 0

    def post(self, event: FrameEvent) -> None:
        self._events.append(event)

    def tick(self) -> FrameInput:
        now = float(self._now_ms())
        frame_time = 0.0 if self._last is None else now - self._last
        self._last = now
        self.elapsed += frame_time
        self.frames += 1

        events = tuple(self._events)
        self._events.clear()
        return FrameInput(time=self.elapsed, frame_time=frame_time, events=events)
