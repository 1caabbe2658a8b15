"""A simple countdown timer driven by frame time steps."""

from __future__ import annotations

__all__ = ["Timer"]


class Timer:
    """Counts time up towards a duration.

    A new timer is not running; call ``start`` to run it.
    """

    def __init__(self, duration: float = 0.0) -> None:
        self._duration = max(0.0, float(duration))
        self._time = self._duration

    def __repr__(self) -> str:
        return f"Timer(duration={self._duration!r}, time={self._time!r})"

    def update(self, dt: float, loop: bool = False) -> bool:
        """Advance the timer; return True if it finished or looped this step."""
        if self._time < self._duration:
            self._time += min(max(dt, 0.0), self._duration)
            if self._time >= self._duration:
                if loop:
                    self._time -= self._duration
                else:
                    self._time = self._duration
                return True
        return False

    def start(self) -> None:
        self._time = 0.0

    def stop(self) -> None:
        self._time = self._duration

    def finish(self) -> None:
        self._time = self._duration

    @property
    def running(self) -> bool:
        return self._time < self._duration

    @property
    def finished(self) -> bool:
        return self._time == self._duration

    @property
    def progress(self) -> float:
        """0.0 when just started, 1.0 when finished."""
        return self._time / self._duration if self._duration else 1.0

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def time(self) -> float:
        return self._time

    @property
    def time_left(self) -> float:
        return self._duration - self._time