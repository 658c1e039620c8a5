"""Line sources and the JSON envelope.

Sources hand the pipeline a lazy iterable of raw rows. A source that cannot
be opened or decoded raises ``SourceUnavailable``; everything below the
source level is handled per row by the pipeline.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator, List, Optional, Union

from pydantic import BaseModel, ValidationError, field_validator

from .config import DEFAULT_SCHEME, RaceScheme
from .records import ParticipantSummary, format_duration
from .standings import NoQualifiedWinners, NoValidEntries, WinnerOutcome
from .types import RowsEnvelope, WinnerPayload

logger = logging.getLogger(__name__)

NO_QUALIFIED_WINNERS = "There are no qualified winners."
NO_VALID_ENTRIES = "There are no valid entries."


class SourceUnavailable(Exception):
    """The row source could not be opened or read at all."""


def read_lines(path: Union[str, Path]) -> Iterator[str]:
    """Yield the lines of a results file without trailing newlines."""
    logger.info(f"Starting import of results from: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            for line in f:
                yield line.rstrip("\r\n")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailable(f"Could not read results from '{path}': {e}") from e


class RowsRequest(BaseModel):
    data: Optional[List[str]] = None

    @field_validator("data", mode="before")
    @classmethod
    def coerce_rows(cls, v: Any) -> Any:
        """Null rows become blank lines; other non-string rows are kept as text
        so the row parser rejects them one by one."""
        if not isinstance(v, list):
            return v
        rows = []
        for row in v:
            if row is None:
                rows.append("")
            elif isinstance(row, str):
                rows.append(row)
            else:
                rows.append(json.dumps(row))
        return rows


def rows_from_payload(body: Union[bytes, str, RowsEnvelope, None]) -> List[str]:
    """Extract the row list from a ``{"data": [...]}`` envelope."""
    if body is None or body == b"" or body == "":
        return []
    try:
        if isinstance(body, dict):
            request = RowsRequest.model_validate(body)
        else:
            request = RowsRequest.model_validate_json(body)
    except ValidationError as e:
        raise SourceUnavailable(f"Invalid request body: {e.error_count()} error(s)") from e
    return request.data or []


def summary_to_payload(
    summary: ParticipantSummary, scheme: RaceScheme = DEFAULT_SCHEME
) -> WinnerPayload:
    # Legs outside the scheme never reach a summary
    return {
        "id": summary.id,
        "name": summary.name,
        "races": [leg for leg in scheme.legs if leg in summary.legs_completed],
        "missingRaces": list(summary.missing_legs),
        "raceCount": summary.race_count,
        "totalTime": format_duration(summary.total_time),
        "isQualified": summary.is_qualified,
    }


def outcome_to_payload(
    outcome: WinnerOutcome, scheme: RaceScheme = DEFAULT_SCHEME
) -> Union[List[WinnerPayload], str]:
    """JSON-ready form of an outcome: a winner list or a status sentence."""
    if isinstance(outcome, NoValidEntries):
        return NO_VALID_ENTRIES
    if isinstance(outcome, NoQualifiedWinners):
        return NO_QUALIFIED_WINNERS
    return [summary_to_payload(w, scheme) for w in outcome.winners]


def dumps(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False)
