"""Race scheme and runtime settings.

The scheme (required legs, row layout, delimiter) is immutable and passed
explicitly to the parser, aggregator and pipeline. ``Settings`` only exists
for the entry points: it reads environment overrides once at startup and
builds the scheme from them.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_LEGS: tuple[str, ...] = ("sackRace", "1000m", "eggRace")

# Positional row layout: name, id, start, finish, race leg.
ROW_FIELDS: tuple[str, ...] = ("name", "id", "start_time", "finish_time", "race")


@dataclass(frozen=True)
class RaceScheme:
    legs: tuple[str, ...] = DEFAULT_LEGS
    delimiter: str = ","

    def __post_init__(self) -> None:
        if not self.legs:
            raise ValueError("a race scheme needs at least one leg")
        if len(set(self.legs)) != len(self.legs):
            raise ValueError(f"duplicate legs in race scheme: {self.legs}")
        if not self.delimiter:
            raise ValueError("delimiter cannot be empty")

    @property
    def column_count(self) -> int:
        return len(ROW_FIELDS)

    @property
    def leg_set(self) -> frozenset[str]:
        return frozenset(self.legs)


DEFAULT_SCHEME = RaceScheme()


def parse_legs(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated leg list; blank input means the default legs."""
    if not raw or not raw.strip():
        return DEFAULT_LEGS
    legs: list[str] = []
    for part in raw.split(","):
        leg = part.strip()
        if leg and leg not in legs:
            legs.append(leg)
    return tuple(legs) or DEFAULT_LEGS


class Settings(BaseSettings):
    # Console default input file
    results_path: str = "race-results.txt"
    # Comma-separated leg override; empty keeps DEFAULT_LEGS
    races: str = ""
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="RACE_WINNER_", env_file=".env", extra="ignore")

    def scheme(self) -> RaceScheme:
        return RaceScheme(legs=parse_legs(self.races))


@lru_cache
def get_settings() -> Settings:
    return Settings()
