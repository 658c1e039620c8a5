"""Per-participant aggregation and winner selection.

- Records are grouped by (id, name); the batch checks guarantee that pair
  is consistent by the time records reach this module.
- A participant qualifies with exactly one record for every scheme leg.
- Winners are all qualified participants sharing the minimum total time.
  "Nobody qualified" is its own outcome, so a zero total is still a win.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Literal, Sequence, Union

from .config import DEFAULT_SCHEME, RaceScheme
from .records import ParticipantSummary, TimingRecord


@dataclass(frozen=True)
class NoValidEntries:
    kind: Literal["no_valid_entries"] = "no_valid_entries"


@dataclass(frozen=True)
class NoQualifiedWinners:
    kind: Literal["no_qualified_winners"] = "no_qualified_winners"


@dataclass(frozen=True)
class Winners:
    winners: tuple[ParticipantSummary, ...]
    kind: Literal["winners"] = "winners"


WinnerOutcome = Union[NoValidEntries, NoQualifiedWinners, Winners]


def _summarize_group(
    participant_id: int,
    name: str,
    group: Sequence[TimingRecord],
    scheme: RaceScheme,
) -> ParticipantSummary:
    legs_completed = frozenset(record.race for record in group)
    total_time = timedelta(0)
    for record in group:
        total_time += record.duration
    return ParticipantSummary(
        id=participant_id,
        name=name,
        legs_completed=legs_completed,
        missing_legs=tuple(leg for leg in scheme.legs if leg not in legs_completed),
        race_count=len(group),
        total_time=total_time,
        is_qualified=len(group) == len(scheme.legs) and legs_completed == scheme.leg_set,
    )


def summarize_participants(
    records: Sequence[TimingRecord],
    scheme: RaceScheme = DEFAULT_SCHEME,
) -> tuple[ParticipantSummary, ...]:
    """Build one summary per (id, name) pair, in first-seen order."""
    groups: dict[tuple[int, str], list[TimingRecord]] = {}
    for record in records:
        groups.setdefault((record.id, record.name), []).append(record)
    return tuple(
        _summarize_group(participant_id, name, group, scheme)
        for (participant_id, name), group in groups.items()
    )


def find_winners(summaries: Sequence[ParticipantSummary]) -> Union[NoQualifiedWinners, Winners]:
    qualified = [summary for summary in summaries if summary.is_qualified]
    if not qualified:
        return NoQualifiedWinners()
    best = min(summary.total_time for summary in qualified)
    return Winners(winners=tuple(s for s in qualified if s.total_time == best))
