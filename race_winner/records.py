"""Timing records and per-participant summaries."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

TIME_FORMAT = "%H:%M:%S"


def format_duration(value: timedelta) -> str:
    """Render a duration as HH:MM:SS; hours are not wrapped at 24."""
    total = int(value.total_seconds())
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


@dataclass(frozen=True)
class TimingRecord:
    """One participant's attempt at one race leg."""

    id: int
    name: str
    start_time: time
    finish_time: time
    race: str

    @property
    def duration(self) -> timedelta:
        return datetime.combine(date.min, self.finish_time) - datetime.combine(
            date.min, self.start_time
        )

    def __str__(self) -> str:
        return (
            f"{self.id} - {self.name} - {self.start_time.strftime(TIME_FORMAT)} - "
            f"{self.finish_time.strftime(TIME_FORMAT)} - {self.race}"
        )


@dataclass(frozen=True)
class ParticipantSummary:
    id: int
    name: str
    legs_completed: frozenset[str]
    missing_legs: tuple[str, ...]
    race_count: int
    total_time: timedelta
    is_qualified: bool

    def __str__(self) -> str:
        return f"Name: {self.name} - ID: {self.id} - Total Time: {format_duration(self.total_time)}"
