"""Type definitions for the JSON payloads exchanged with the entry points."""
from __future__ import annotations

from typing import List, Optional, TypedDict


class RowsEnvelope(TypedDict, total=False):
    """
    Request body accepted by the HTTP endpoint.

    ``data`` is optional; a missing list is treated as no rows. A null row
    counts as a blank line.
    """
    data: List[Optional[str]]


class WinnerPayload(TypedDict):
    """One winner as serialized in responses and ``--json`` console output."""
    id: int
    name: str
    races: List[str]  # Legs completed, in scheme order
    missingRaces: List[str]
    raceCount: int
    totalTime: str  # HH:MM:SS
    isQualified: bool
