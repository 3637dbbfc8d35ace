"""
Tests for the command line interface.
"""

import json
import logging

import pytest
from typer.testing import CliRunner

from freetimefinder import __version__
from freetimefinder.cli.app import app

runner = CliRunner()


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """A directory with an events file and a config naming two colleagues."""
    events = {
        "2024-11-25": [
            {"name": "Planning", "start": "00:00", "end": "09:00", "attendees": ["alice@example.com"]},
            {"name": "Offsite", "start": "10:00", "end": "24:00", "attendees": ["alice@example.com"]},
            {"name": "Focus", "start": "00:00", "end": "24:00", "attendees": ["bob@example.com"]},
        ]
    }
    (tmp_path / "events.json").write_text(json.dumps(events), encoding="utf-8")
    (tmp_path / "config.yaml").write_text(
        "events_file: events.json\n"
        "colleagues:\n"
        "  - name: alice\n"
        "    email: alice@example.com\n"
        "  - name: bob\n"
        "    email: bob@example.com\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_find_prints_ranges(workspace):
    """Mandatory attendee ranges are printed when the optional one never fits."""
    result = runner.invoke(app, ["find", "alice", "-o", "bob", "--date", "2024-11-25"])

    assert result.exit_code == 0, result.output
    assert "09:00 - 10:00 Uhr (60 Min.)" in result.output


def test_find_with_explicit_duration(workspace):
    """A meeting longer than the free range finds nothing."""
    result = runner.invoke(app, ["find", "alice", "--duration", "90", "--date", "2024-11-25"])

    assert result.exit_code == 0, result.output
    assert "Keine verfügbaren Zeiträume gefunden" in result.output


def test_find_optional_only_without_fallback(workspace):
    """Only optional attendees who cannot meet get no range at all."""
    result = runner.invoke(app, ["find", "-o", "bob", "--date", "2024-11-25"])

    assert result.exit_code == 0, result.output
    assert "Keine verfügbaren Zeiträume gefunden" in result.output


def test_find_free_day(workspace):
    """A day without events in the file is free until the end of the day."""
    result = runner.invoke(app, ["find", "alice", "--date", "2024-11-26"])

    assert result.exit_code == 0, result.output
    assert "00:00 - 24:00 Uhr (1440 Min.) (bis Tagesende)" in result.output


def test_find_without_participants(workspace):
    """At least one participant is required."""
    result = runner.invoke(app, ["find", "--date", "2024-11-25"])

    assert result.exit_code == 1
    assert "Keine Teilnehmer angegeben" in result.output


def test_find_unknown_participant(workspace):
    """Unknown names are reported and exit with an error."""
    result = runner.invoke(app, ["find", "mallory", "--date", "2024-11-25"])

    assert result.exit_code == 1
    assert "mallory" in result.output


def test_find_negative_duration(workspace):
    """Negative durations are rejected at the boundary."""
    result = runner.invoke(app, ["find", "alice", "--duration", "-5", "--date", "2024-11-25"])

    assert result.exit_code == 1
    assert "must not be negative" in result.output


def test_find_invalid_date(workspace):
    """Dates must be YYYY-MM-DD."""
    result = runner.invoke(app, ["find", "alice", "--date", "25.11.2024"])

    assert result.exit_code == 1
    assert "Ungültiges Datum" in result.output


def test_find_missing_events_file(workspace):
    """A missing events file is an error, not an empty day."""
    result = runner.invoke(app, ["find", "alice", "--events", str(workspace / "nope.json")])

    assert result.exit_code == 1
    assert "Event file not found" in result.output


def test_find_with_missing_config(tmp_path, monkeypatch):
    """An explicitly named config file must exist."""
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(
        app,
        ["find", "alice@example.com", "--config", str(tmp_path / "missing.yaml")],
    )

    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_list_colleagues(workspace):
    """Configured colleagues are listed."""
    result = runner.invoke(app, ["list-colleagues"])

    assert result.exit_code == 0, result.output
    assert "alice@example.com" in result.output
    assert "bob@example.com" in result.output


def test_version():
    """The package version is shown."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_find_without_events_file(tmp_path, monkeypatch):
    """Without an events file in the config or on the command line there is nothing to search."""
    (tmp_path / "config.yaml").write_text("log_level: INFO\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["find", "alice@example.com"])

    assert result.exit_code == 1
    assert "Keine Termin-Datei angegeben" in result.output


def test_find_summary_names_colleagues(workspace):
    """Configured colleagues are shown by name next to their email."""
    result = runner.invoke(
        app,
        ["find", "alice", "-o", "carol@example.com", "--date", "2024-11-25"],
    )

    assert result.exit_code == 0, result.output
    assert "alice (alice@example.com)" in result.output
    assert "Optionale Teilnehmer: carol@example.com" in result.output


def test_log_level_is_reconfigured_between_runs(workspace):
    """Each run applies its own log level, even in the same process."""
    verbose = runner.invoke(app, ["find", "alice", "--verbose", "--date", "2024-11-25"])
    assert verbose.exit_code == 0, verbose.output
    assert logging.getLogger().level == logging.DEBUG

    quiet = runner.invoke(app, ["find", "alice", "--date", "2024-11-25"])
    assert quiet.exit_code == 0, quiet.output
    assert logging.getLogger().level == logging.WARNING
