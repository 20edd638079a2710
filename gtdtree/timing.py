"""Elapsed-time counter for working on a single task."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ExecutionCounter:
    """Counter state for the task execution screen.

    The counter has no clock of its own: the caller calls ``tick`` once per
    interval, and ticks only count while the counter is running.

    Example:
        >>> counter = ExecutionCounter("Write report", target_minutes=25)
        >>> counter.tick()
        >>> counter.toggle_break()  # paused
        >>> counter.tick()          # ignored
        >>> counter.complete()
        >>> format_clock(counter.total_seconds)
        '00:00:01'
    """

    title: str
    target_minutes: Optional[int] = None
    elapsed_seconds: int = 0
    total_seconds: int = 0
    running: bool = True

    def tick(self, seconds: int = 1) -> None:
        """Advance the elapsed time if running."""
        if self.running:
            self.elapsed_seconds += seconds

    def toggle_break(self) -> bool:
        """Pause or resume counting.

        Returns:
            True if the counter is now running.
        """
        self.running = not self.running
        return self.running

    def complete(self) -> int:
        """Stop, fold the elapsed time into the total and reset it.

        Returns:
            The new total in seconds.
        """
        self.running = False
        self.total_seconds += self.elapsed_seconds
        self.elapsed_seconds = 0
        return self.total_seconds

    @property
    def remaining_seconds(self) -> Optional[int]:
        """Seconds left until the target, or None without a target."""
        if self.target_minutes is None:
            return None
        return max(self.target_minutes * 60 - self.elapsed_seconds, 0)


def format_clock(seconds: int) -> str:
    """Format seconds as HH:MM:SS.

    Example:
        >>> format_clock(3725)
        '01:02:05'
    """
    hours, rest = divmod(max(seconds, 0), 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
