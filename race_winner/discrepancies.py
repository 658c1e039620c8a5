"""Whole-batch identity checks.

A batch is consistent when every id carries one name, every name carries one
id, and no id appears twice in the same leg. Three passes run over the same
input; anything flagged by any pass is dropped from the batch.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Sequence

from .records import TimingRecord

logger = logging.getLogger(__name__)

DiscrepancyKind = Literal[
    "multiple_names_per_id",
    "multiple_ids_per_name",
    "duplicate_leg_participation",
]

_MESSAGES: dict[str, str] = {
    "multiple_names_per_id": "Some IDs are associated with multiple names. The entries will be removed",
    "multiple_ids_per_name": "Some Names are associated with multiple IDs. The entries will be removed",
    "duplicate_leg_participation": (
        "Some people have participated more than once in a race. The entries will be removed"
    ),
}


@dataclass(frozen=True)
class BatchDiscrepancy:
    kind: DiscrepancyKind
    offenders: tuple[int | str, ...]

    @property
    def message(self) -> str:
        return f"{_MESSAGES[self.kind]}: " + ", ".join(str(o) for o in self.offenders)


@dataclass(frozen=True)
class CleanedRecords:
    records: tuple[TimingRecord, ...]
    discrepancies: tuple[BatchDiscrepancy, ...]


def _ids_with_multiple_names(records: Sequence[TimingRecord]) -> list[int]:
    names_by_id: dict[int, set[str]] = {}
    for record in records:
        names_by_id.setdefault(record.id, set()).add(record.name)
    return [rid for rid, names in names_by_id.items() if len(names) > 1]


def _names_with_multiple_ids(records: Sequence[TimingRecord]) -> list[str]:
    ids_by_name: dict[str, set[int]] = {}
    for record in records:
        ids_by_name.setdefault(record.name, set()).add(record.id)
    return [name for name, ids in ids_by_name.items() if len(ids) > 1]


def _ids_with_repeated_legs(records: Sequence[TimingRecord]) -> list[int]:
    counts: dict[tuple[int, str], int] = {}
    for record in records:
        key = (record.id, record.race)
        counts[key] = counts.get(key, 0) + 1
    flagged: list[int] = []
    for (rid, _race), count in counts.items():
        if count > 1 and rid not in flagged:
            flagged.append(rid)
    return flagged


def remove_discrepancies(records: Sequence[TimingRecord]) -> CleanedRecords:
    """Drop every record whose id or name is flagged by any identity check.

    Offenders are reported in first-seen order; surviving records keep their
    input order.
    """
    bad_ids = _ids_with_multiple_names(records)
    bad_names = _names_with_multiple_ids(records)
    repeated = _ids_with_repeated_legs(records)

    discrepancies: list[BatchDiscrepancy] = []
    for kind, offenders in (
        ("multiple_names_per_id", bad_ids),
        ("multiple_ids_per_name", bad_names),
        ("duplicate_leg_participation", repeated),
    ):
        if offenders:
            discrepancy = BatchDiscrepancy(kind=kind, offenders=tuple(offenders))
            logger.warning(discrepancy.message)
            discrepancies.append(discrepancy)

    flagged_ids = set(bad_ids) | set(repeated)
    flagged_names = set(bad_names)
    kept = tuple(
        record
        for record in records
        if record.id not in flagged_ids and record.name not in flagged_names
    )
    return CleanedRecords(records=kept, discrepancies=tuple(discrepancies))
