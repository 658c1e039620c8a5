"""
Row parsing and validation using Pydantic v2.
Turns one delimited text line into a TimingRecord or a row failure value.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, time
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator

from .config import DEFAULT_SCHEME, ROW_FIELDS, RaceScheme
from .records import TIME_FORMAT, TimingRecord

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"^[A-Za-z \-]+$")
CLOCK_PATTERN = re.compile(r"^\d{2}:\d{2}:\d{2}$")
ID_PATTERN = re.compile(r"^[+-]?\d+$")

_TIME_LABELS = {"start_time": "Start Time", "finish_time": "Finish Time"}


# ==================== ROW FAILURES ====================


@dataclass(frozen=True)
class MalformedRow:
    """A line that broke one or more row rules (recoverable)."""

    line_number: int
    violations: tuple[str, ...]
    kind: Literal["malformed_row"] = "malformed_row"

    @property
    def message(self) -> str:
        return f"Line {self.line_number}: " + " ".join(self.violations)


@dataclass(frozen=True)
class UnexpectedRowError:
    """A line that failed for a reason the row rules do not cover."""

    line_number: int
    detail: str
    kind: Literal["unexpected_row_error"] = "unexpected_row_error"

    @property
    def message(self) -> str:
        return f"Line {self.line_number}: {self.detail}"


RowFailure = Union[MalformedRow, UnexpectedRowError]


# ==================== VALIDATOR FUNCTIONS ====================


def normalize_name(value: str) -> str:
    """Lower-case then title-case, e.g. 'jOHN doe' -> 'John Doe'."""
    return value.strip().lower().title()


def parse_clock(value: str) -> Optional[time]:
    """Parse an exact two-digit HH:MM:SS wall-clock time, or return None."""
    if not CLOCK_PATTERN.match(value):
        return None
    try:
        return datetime.strptime(value, TIME_FORMAT).time()
    except ValueError:
        return None


class ValidatedRow(BaseModel):
    """One row's fields after normalization.

    Field order matters: pydantic validates in declaration order, so the
    finish-time validator can see an already valid start time. Every field
    is checked even when an earlier one fails, which gives the caller the
    full list of problems for the line.
    """

    name: str
    race: str
    id: int
    start_time: time
    finish_time: time

    model_config = ConfigDict(frozen=True)

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> str:
        name = normalize_name(str(v))
        if not NAME_PATTERN.match(name):
            raise ValueError(f"Invalid format for Name: '{name}'.")
        return name

    @field_validator("race", mode="before")
    @classmethod
    def validate_race(cls, v: Any, info: ValidationInfo) -> str:
        scheme = (info.context or {}).get("scheme", DEFAULT_SCHEME)
        if v not in scheme.leg_set:
            raise ValueError(f"Invalid race name: '{v}'.")
        return v

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v: Any) -> int:
        text = str(v).strip()
        if not ID_PATTERN.match(text) or int(text) <= 0:
            raise ValueError(f"Invalid format for ID: '{v}'.")
        return int(text)

    @field_validator("start_time", "finish_time", mode="before")
    @classmethod
    def validate_clock(cls, v: Any, info: ValidationInfo) -> time:
        parsed = parse_clock(str(v))
        if parsed is None:
            raise ValueError(f"Invalid format for {_TIME_LABELS[info.field_name]}: '{v}'.")
        if info.field_name == "finish_time":
            start = info.data.get("start_time")
            if start is not None and start > parsed:
                raise ValueError("Start Time is after Finish Time.")
        return parsed

    def to_record(self) -> TimingRecord:
        return TimingRecord(
            id=self.id,
            name=self.name,
            start_time=self.start_time,
            finish_time=self.finish_time,
            race=self.race,
        )


def _violations(exc: ValidationError) -> tuple[str, ...]:
    messages = []
    for err in exc.errors():
        cause = (err.get("ctx") or {}).get("error")
        messages.append(str(cause) if cause is not None else err["msg"])
    return tuple(messages)


def parse_row(
    line: str, line_number: int, scheme: RaceScheme = DEFAULT_SCHEME
) -> Union[TimingRecord, RowFailure, None]:
    """
    Parse one raw line into a TimingRecord.

    Returns:
        None for blank lines, a TimingRecord on success, otherwise a
        MalformedRow (every violated rule, in field order) or an
        UnexpectedRowError. Failures are returned, never raised.
    """
    if not line or not line.strip():
        return None

    try:
        fields = [part.strip() for part in line.split(scheme.delimiter)]
        if len(fields) != scheme.column_count:
            return MalformedRow(
                line_number=line_number,
                violations=(
                    f"Invalid number of columns. Expected '{scheme.column_count}' "
                    f"but found '{len(fields)}'.",
                ),
            )
        row = ValidatedRow.model_validate(
            dict(zip(ROW_FIELDS, fields)), context={"scheme": scheme}
        )
        return row.to_record()
    except ValidationError as e:
        return MalformedRow(line_number=line_number, violations=_violations(e))
    except Exception as e:
        logger.debug(f"Unexpected failure parsing line {line_number}", exc_info=True)
        return UnexpectedRowError(line_number=line_number, detail=str(e) or type(e).__name__)


# ==================== EXPORT ====================

__all__ = [
    "MalformedRow",
    "UnexpectedRowError",
    "RowFailure",
    "ValidatedRow",
    "normalize_name",
    "parse_clock",
    "parse_row",
]
