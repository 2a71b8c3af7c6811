"""
tests/test_cli.py
=================

Unit tests for the `milestones` command‑line front end.
"""

import pytest

from milestones.cli import main


def test_calc_prints_breakdown_and_next(capsys):
    assert main(["calc", "2024-01-01", "--now", "2024-01-02T00:00"]) == 0
    out = capsys.readouterr().out
    assert "1 day sober (1 day)" in out
    assert "24 Hours — achieved January 2, 2024" in out
    assert "1 Week — 6 days away — January 8, 2024" in out
    assert "that's 1 days!" in out


def test_calc_past_catalog_has_no_next(capsys):
    assert main(["calc", "1990-01-01", "--now", "2024-01-01T00:00"]) == 0
    out = capsys.readouterr().out
    assert "25 Years" in out
    assert "Next:" not in out


def test_catalog_lists_every_milestone(capsys):
    assert main(["catalog"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 15
    assert "Shop 24-Hour Tokens" in lines[0]


def test_circle_next(capsys):
    assert main(["circle-next", "2024-01-01", "--now", "2024-01-11T00:00"]) == 0
    assert capsys.readouterr().out.strip() == "20d to 30 Days"


def test_invalid_date_exits_with_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["calc", "2024-13-01"])
    assert exc.value.code == 2
