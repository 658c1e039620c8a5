from .config import DEFAULT_LEGS, DEFAULT_SCHEME, RaceScheme, Settings, get_settings
from .discrepancies import BatchDiscrepancy, CleanedRecords, remove_discrepancies
from .pipeline import ImportResult, PipelineReport, evaluate, import_records, run_pipeline
from .records import ParticipantSummary, TimingRecord, format_duration
from .sources import SourceUnavailable, outcome_to_payload, read_lines, rows_from_payload
from .standings import (
    NoQualifiedWinners,
    NoValidEntries,
    WinnerOutcome,
    Winners,
    find_winners,
    summarize_participants,
)
from .validation import MalformedRow, RowFailure, UnexpectedRowError, parse_row

__all__ = [
    "DEFAULT_LEGS",
    "DEFAULT_SCHEME",
    "RaceScheme",
    "Settings",
    "get_settings",
    "TimingRecord",
    "ParticipantSummary",
    "format_duration",
    "MalformedRow",
    "UnexpectedRowError",
    "RowFailure",
    "parse_row",
    "BatchDiscrepancy",
    "CleanedRecords",
    "remove_discrepancies",
    "summarize_participants",
    "find_winners",
    "NoValidEntries",
    "NoQualifiedWinners",
    "Winners",
    "WinnerOutcome",
    "ImportResult",
    "PipelineReport",
    "import_records",
    "evaluate",
    "run_pipeline",
    "SourceUnavailable",
    "read_lines",
    "rows_from_payload",
    "outcome_to_payload",
]
