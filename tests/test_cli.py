"""Tests for CLI commands."""

import asyncio
import json

import pytest
from typer.testing import CliRunner

from tipjar.config import settings as settings_module
from tipjar.main import app
from tipjar.services.storage import SqliteStorage

from conftest import ALWAYS_SHOWS, STORAGE_KEY


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point tipjar at a temporary config dir with a small catalog."""
    for var in ("TIPJAR_DB_PATH", "TIPJAR_CATALOG", "TIPJAR_SHOW_PROBABILITY", "TIPJAR_DEBUG_TIP"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("TIPJAR_CONFIG_DIR", str(tmp_path))
    settings_module.reset_settings()

    tips = [
        ALWAYS_SHOWS,
        {"id": "linkTip", "text": "Read the docs.", "requiredShowCount": 0, "requiredTriggers": 0,
         "actionButton": {"text": "Open docs", "action": "https://example.com/docs"}},
    ]
    (tmp_path / "tips.json").write_text(json.dumps(tips))

    yield tmp_path
    settings_module.reset_settings()


def read_record(config_dir):
    return asyncio.run(SqliteStorage(config_dir / "settings.db").get(STORAGE_KEY))


# =============================================================================
# Tests
# =============================================================================


def test_version(runner):
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "tipjar version" in result.stdout


def test_show_displays_and_records_tip(runner, config_dir):
    result = runner.invoke(app, ["show", "--context", "cli"])

    assert result.exit_code == 0
    assert "A tip to always show." in result.stdout

    record = read_record(config_dir)
    assert record["tips"]["alwaysShowsTip"]["shownCount"] == 1
    assert record["tips"]["alwaysShowsTip"]["shownContext"] == {"cli": 1}


def test_show_with_trigger_counts_trigger(runner, config_dir, monkeypatch):
    monkeypatch.setenv("TIPJAR_SHOW_PROBABILITY", "0")
    settings_module.reset_settings()

    result = runner.invoke(app, ["show", "--trigger"])

    assert result.exit_code == 0
    assert "A tip to always show." not in result.stdout
    assert read_record(config_dir)["triggeredOpen"] == 1


def test_show_missing_catalog_fails(runner, config_dir):
    result = runner.invoke(app, ["show", "--catalog", str(config_dir / "nope.json")])

    assert result.exit_code == 1
    assert "not found" in result.stdout


def test_show_rejects_malformed_catalog_counts(runner, config_dir):
    (config_dir / "tips.json").write_text(json.dumps([{"id": "a", "text": "x", "requiredTriggers": "0"}]))

    result = runner.invoke(app, ["show", "--trigger"])

    assert result.exit_code == 1
    assert "requiredTriggers" in result.stdout
    assert not isinstance(result.exception, TypeError)
    assert read_record(config_dir) is None


def test_stats_lists_tips(runner, config_dir):
    runner.invoke(app, ["show"])

    result = runner.invoke(app, ["stats"])

    assert result.exit_code == 0
    assert "alwaysShowsTip" in result.stdout
    assert "linkTip" in result.stdout
    assert "shown enough" in result.stdout


def test_reset_clears_counters(runner, config_dir):
    runner.invoke(app, ["show"])
    assert read_record(config_dir) is not None

    result = runner.invoke(app, ["reset", "--yes"])

    assert result.exit_code == 0
    assert read_record(config_dir) is None


def test_reset_can_be_aborted(runner, config_dir):
    runner.invoke(app, ["show"])

    result = runner.invoke(app, ["reset"], input="n\n")

    assert read_record(config_dir) is not None
    assert "cleared" not in result.stdout


def test_chat_session(runner, config_dir):
    result = runner.invoke(app, ["chat"], input="/context home\n/tip\n/dismiss\n/stats\nquit\n")

    assert result.exit_code == 0
    assert "A tip to always show." in result.stdout
    assert "Tip dismissed." in result.stdout

    tip = read_record(config_dir)["tips"]["alwaysShowsTip"]
    assert tip["shownCount"] == 1
    assert tip["dismissedCount"] == 1
    assert tip["shownContext"] == {"home": 1}
