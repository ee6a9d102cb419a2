"""Game time: timestamps, frame delta time and a scalable tic size."""

from __future__ import annotations

import threading
import time
from typing import Callable


class Timeline:
    """Tracks elapsed time and delta time, with pausing and tic scaling.

    A timeline may be anchored to another one, in which case its delta time
    is taken from the anchor.
    """

    SCALE_HALF = 0.5
    SCALE_REAL = 1.0
    SCALE_DOUBLE = 2.0

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._paused = False
        self._tic_size = self.SCALE_REAL
        self._dt = 0.0
        self._anchor: Timeline | None = None
        now = clock()
        self._start = now
        self._last = now

    @property
    def timestamp(self) -> float:
        """Seconds elapsed since the timeline was created."""
        return self._clock() - self._start

    def update_delta_time(self) -> None:
        """Record the time since the previous update as the delta time."""
        if self._anchor is not None:
            self._anchor.update_delta_time()
            return
        with self._lock:
            now = self._clock()
            self._dt = now - self._last
            self._last = now

    @property
    def dt(self) -> float:
        """The latest delta time in seconds."""
        if self._anchor is not None:
            return self._anchor.dt
        return self._dt

    @property
    def tic_size(self) -> float:
        """The time scale; zero while paused."""
        if self._paused:
            return 0.0
        return self._tic_size

    def edit_tic_size(self, scale: float) -> None:
        with self._lock:
            self._tic_size = float(scale)

    @property
    def paused(self) -> bool:
        return self._paused

    def pause(self) -> None:
        """Toggle between paused and running."""
        with self._lock:
            self._paused = not self._paused

    def set_anchor(self, anchor: Timeline | None) -> None:
        self._anchor = anchor