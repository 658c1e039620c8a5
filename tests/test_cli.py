from __future__ import annotations

import json

from race_winner.cli import main

ROWS = [
    "john doe,1,09:00:00,09:05:00,1000m",
    "john doe,1,10:00:00,10:03:00,sackRace",
    "john doe,1,11:00:00,11:02:00,eggRace",
    "jane roe,2,09:00:00,09:04:00,1000m",
    "jane roe,2,10:00:00,10:02:00,sackRace",
    "jane roe,2,11:00:00,11:01:00,eggRace",
]


def _write(tmp_path, lines):
    path = tmp_path / "race-results.txt"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(path)


def test_prints_winner(tmp_path, capsys):
    assert main([_write(tmp_path, ROWS)]) == 0
    out = capsys.readouterr().out
    assert " - The winner is: 2 - Jane Roe - 00:07:00 - " in out
    assert "John Doe" not in out


def test_prints_every_tied_winner(tmp_path, capsys):
    tied = [row.replace("jane roe,2,11:00:00,11:01:00", "jane roe,2,11:00:00,11:04:00") for row in ROWS]
    assert main([_write(tmp_path, tied)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        " - The winner is: 1 - John Doe - 00:10:00 - ",
        " - The winner is: 2 - Jane Roe - 00:10:00 - ",
    ]


def test_no_qualified_winners(tmp_path, capsys):
    assert main([_write(tmp_path, ROWS[:2])]) == 0
    assert capsys.readouterr().out.strip() == "There are no qualified winners."


def test_no_valid_entries(tmp_path, capsys):
    assert main([_write(tmp_path, ["nonsense"])]) == 0
    assert capsys.readouterr().out.strip() == "There are no valid entries."


def test_missing_file_exits_non_zero(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert capsys.readouterr().out.strip() == "There are no valid entries."


def test_races_override(tmp_path, capsys):
    lines = ["ann lee,1,08:00:00,08:20:00,swim", "bob ray,2,08:00:00,08:10:00,1000m"]
    assert main([_write(tmp_path, lines), "--races", "swim"]) == 0
    assert "1 - Ann Lee - 00:20:00" in capsys.readouterr().out


def test_json_output(tmp_path, capsys):
    assert main([_write(tmp_path, ROWS), "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [w["name"] for w in payload] == ["Jane Roe"]
    assert payload[0]["totalTime"] == "00:07:00"
