"""Winner pipeline (pure batch, no HTTP/console).

Stages:
- import_records(): raw lines -> TimingRecords; bad rows are logged and skipped
- remove_discrepancies(): drops identities that are ambiguous across the batch
- summarize_participants(): one ParticipantSummary per (id, name)
- find_winners(): qualified participants with the minimum total time

Error policy:
- MalformedRow -> warning, UnexpectedRowError -> error; the row is skipped
- BatchDiscrepancy -> warning, offending records dropped
- SourceUnavailable -> critical; rows parsed before the failure are still used
- evaluate()/run_pipeline() always return an outcome, they never raise for
  data problems
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .config import DEFAULT_SCHEME, RaceScheme
from .discrepancies import CleanedRecords, remove_discrepancies
from .records import ParticipantSummary, TimingRecord
from .sources import SourceUnavailable
from .standings import NoValidEntries, WinnerOutcome, find_winners, summarize_participants
from .validation import MalformedRow, RowFailure, parse_row

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportResult:
    records: tuple[TimingRecord, ...]
    failures: tuple[RowFailure, ...]
    source_error: Optional[str] = None


@dataclass(frozen=True)
class PipelineReport:
    """Everything one run produced, stage by stage."""

    imported: ImportResult
    cleaned: CleanedRecords
    summaries: tuple[ParticipantSummary, ...]
    outcome: WinnerOutcome


def _log_failure(failure: RowFailure) -> None:
    if isinstance(failure, MalformedRow):
        logger.warning(failure.message)
    else:
        logger.error(failure.message)


def import_records(lines: Iterable[str], scheme: RaceScheme = DEFAULT_SCHEME) -> ImportResult:
    """Parse every line of a source, keeping the good rows.

    Line numbers are 1-based and count blank lines. If the source fails
    part-way, the rows read so far are returned with ``source_error`` set.
    """
    records: list[TimingRecord] = []
    failures: list[RowFailure] = []
    source_error: Optional[str] = None
    line_number = 0
    try:
        for line in lines:
            line_number += 1
            parsed = parse_row(line, line_number, scheme)
            if parsed is None:
                continue
            if isinstance(parsed, TimingRecord):
                records.append(parsed)
            else:
                _log_failure(parsed)
                failures.append(parsed)
    except (SourceUnavailable, OSError) as e:
        source_error = str(e)
        logger.critical(source_error)

    logger.info(
        f"Imported {len(records)} record(s) from {line_number} line(s), "
        f"{len(failures)} rejected"
    )
    return ImportResult(records=tuple(records), failures=tuple(failures), source_error=source_error)


def evaluate(lines: Iterable[str], scheme: RaceScheme = DEFAULT_SCHEME) -> PipelineReport:
    imported = import_records(lines, scheme)
    cleaned = remove_discrepancies(imported.records)
    if not cleaned.records:
        logger.info("There are no valid entries.")
        return PipelineReport(
            imported=imported, cleaned=cleaned, summaries=(), outcome=NoValidEntries()
        )
    summaries = summarize_participants(cleaned.records, scheme)
    return PipelineReport(
        imported=imported,
        cleaned=cleaned,
        summaries=summaries,
        outcome=find_winners(summaries),
    )


def run_pipeline(lines: Iterable[str], scheme: RaceScheme = DEFAULT_SCHEME) -> WinnerOutcome:
    """Run the whole batch and return NoValidEntries, NoQualifiedWinners or Winners."""
    return evaluate(lines, scheme).outcome
