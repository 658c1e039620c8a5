from __future__ import annotations

import logging
from datetime import timedelta

from race_winner import (
    MalformedRow,
    NoQualifiedWinners,
    NoValidEntries,
    RaceScheme,
    SourceUnavailable,
    Winners,
    evaluate,
    import_records,
    run_pipeline,
)

JOHN = [
    "john doe,1,09:00:00,09:05:00,1000m",
    "john doe,1,10:00:00,10:03:00,sackRace",
    "john doe,1,11:00:00,11:02:00,eggRace",
]
JANE = [
    "Jane Roe,2,09:00:00,09:04:00,1000m",
    "JANE ROE,2,10:00:00,10:02:00,sackRace",
    "jane roe,2,11:00:00,11:01:00,eggRace",
]


def _broken_source(lines, error):
    def _gen():
        for line in lines:
            yield line
        raise error

    return _gen()


def test_single_qualified_participant_wins():
    outcome = run_pipeline(JOHN)
    assert isinstance(outcome, Winners)
    (winner,) = outcome.winners
    assert (winner.id, winner.name) == (1, "John Doe")
    assert winner.total_time == timedelta(minutes=10)


def test_shorter_total_wins_outright():
    outcome = run_pipeline(JOHN + JANE)
    assert isinstance(outcome, Winners)
    assert [w.name for w in outcome.winners] == ["Jane Roe"]
    assert outcome.winners[0].total_time == timedelta(minutes=7)


def test_equal_totals_are_joint_winners():
    tied = [line.replace("john doe,1", "ann lee,3") for line in JOHN]
    outcome = run_pipeline(JOHN + tied)
    assert [w.id for w in outcome.winners] == [1, 3]


def test_no_lines_means_no_valid_entries():
    assert run_pipeline([]) == NoValidEntries()
    assert run_pipeline(["", "   "]) == NoValidEntries()


def test_only_invalid_rows_means_no_valid_entries(caplog):
    with caplog.at_level(logging.INFO):
        outcome = run_pipeline(["garbage", "x,y,z,w,v"])
    assert outcome == NoValidEntries()
    assert "There are no valid entries." in caplog.text


def test_discrepancies_can_empty_the_batch():
    lines = ["ann lee,1,09:00:00,09:05:00,1000m", "bob ray,1,09:00:00,09:05:00,eggRace"]
    assert run_pipeline(lines) == NoValidEntries()


def test_incomplete_participants_mean_no_qualified_winners():
    outcome = run_pipeline(JOHN[:2] + JANE[1:])
    assert outcome == NoQualifiedWinners()


def test_bad_rows_are_logged_and_skipped(caplog):
    lines = [JOHN[0], "john doe,1,10:00:00,09:00:00,sackRace", "", JOHN[1], JOHN[2]]
    with caplog.at_level(logging.WARNING):
        report = evaluate(lines)
    assert isinstance(report.outcome, Winners)
    assert len(report.imported.records) == 3
    (failure,) = report.imported.failures
    assert isinstance(failure, MalformedRow)
    assert failure.line_number == 2
    assert "Line 2: Start Time is after Finish Time." in caplog.text


def test_line_numbers_count_blank_lines():
    result = import_records(["", JOHN[0], "", "broken"])
    assert [f.line_number for f in result.failures] == [4]


def test_source_failure_keeps_parsed_prefix(caplog):
    source = _broken_source(JOHN, SourceUnavailable("disk went away"))
    with caplog.at_level(logging.CRITICAL):
        report = evaluate(source)
    assert report.imported.source_error == "disk went away"
    assert isinstance(report.outcome, Winners)
    assert report.outcome.winners[0].id == 1
    assert any(r.levelno == logging.CRITICAL for r in caplog.records)


def test_source_failure_before_any_row_yields_no_valid_entries():
    report = evaluate(_broken_source([], SourceUnavailable("missing")))
    assert report.imported.source_error == "missing"
    assert report.outcome == NoValidEntries()


def test_report_exposes_every_stage():
    lines = JOHN + JANE + ["eve park,1,09:00:00,09:01:00,1000m"]
    report = evaluate(lines)
    assert len(report.imported.records) == 7
    assert [d.kind for d in report.cleaned.discrepancies] == [
        "multiple_names_per_id",
        "duplicate_leg_participation",
    ]
    assert [s.id for s in report.summaries] == [2]
    assert report.outcome.winners[0].name == "Jane Roe"


def test_scheme_is_passed_through_every_stage():
    scheme = RaceScheme(legs=("swim", "run"))
    lines = [
        "ann lee,1,08:00:00,08:20:00,swim",
        "ann lee,1,09:00:00,09:30:00,run",
        "bob ray,2,08:00:00,08:10:00,swim",
        "bob ray,2,09:00:00,09:05:00,1000m",
    ]
    outcome = run_pipeline(lines, scheme)
    assert [w.name for w in outcome.winners] == ["Ann Lee"]
