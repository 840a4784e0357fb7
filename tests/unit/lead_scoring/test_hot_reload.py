"""
Unit tests for scoring rules hot reload
"""
from unittest.mock import MagicMock, patch

import pytest
from watchdog.events import FileModifiedEvent, FileMovedEvent

from core.config import Settings, get_settings
from lead_scoring.hot_reload import ScoringRulesFileHandler, ScoringRulesWatcher, watch_if_enabled
from lead_scoring.rules_loader import FileScoringSource

pytestmark = pytest.mark.unit

RULES_YAML = """
version: "1.0"
teams:
  sales:
    config:
      weights: {jobRole: 45}
"""


@pytest.fixture
def source(rules_file):
    return FileScoringSource(rules_file(RULES_YAML))


class TestScoringRulesFileHandler:
    """Test suite for ScoringRulesFileHandler"""

    def test_init(self, source):
        handler = ScoringRulesFileHandler(source, debounce_seconds=5.0)

        assert handler.source is source
        assert handler.debounce_seconds == 5.0
        assert handler._reload_timer is None

    def test_modified_target_schedules_reload(self, source):
        handler = ScoringRulesFileHandler(source)

        with patch.object(handler, "_schedule_reload") as mock_schedule:
            handler.on_modified(FileModifiedEvent(str(source.path)))

        mock_schedule.assert_called_once()

    def test_other_files_ignored(self, source):
        handler = ScoringRulesFileHandler(source)

        with patch.object(handler, "_schedule_reload") as mock_schedule:
            handler.on_modified(FileModifiedEvent(str(source.path.parent / "notes.txt")))

        mock_schedule.assert_not_called()

    def test_moved_onto_target_schedules_reload(self, source):
        handler = ScoringRulesFileHandler(source)
        tmp_name = str(source.path.parent / ".scoring_rules.yaml.swp")

        with patch.object(handler, "_schedule_reload") as mock_schedule:
            handler.on_moved(FileMovedEvent(tmp_name, str(source.path)))

        mock_schedule.assert_called_once()

    def test_schedule_reload_debounces(self, source):
        handler = ScoringRulesFileHandler(source, debounce_seconds=60)

        handler._schedule_reload()
        first_timer = handler._reload_timer
        handler._schedule_reload()
        second_timer = handler._reload_timer
        handler.cancel()

        assert first_timer is not second_timer
        assert first_timer.finished.is_set()
        assert handler._reload_timer is None

    def test_perform_reload_success(self, source):
        handler = ScoringRulesFileHandler(source)
        source.path.write_text(RULES_YAML.replace("sales", "marketing"), encoding="utf-8")

        with patch("lead_scoring.hot_reload.metrics") as mock_metrics:
            assert handler.perform_reload() is True

        assert source.team_ids() == ["marketing"]
        assert mock_metrics.track_config_reload.call_args.kwargs["status"] == "success"

    def test_perform_reload_failure_keeps_snapshot(self, source):
        handler = ScoringRulesFileHandler(source)
        source.path.write_text("teams: [", encoding="utf-8")

        with patch("lead_scoring.hot_reload.metrics") as mock_metrics:
            assert handler.perform_reload() is False

        assert source.team_ids() == ["sales"]
        assert mock_metrics.track_config_reload.call_args.kwargs["status"] == "failure"


    def test_perform_reload_unreadable_file(self, source):
        handler = ScoringRulesFileHandler(source)
        source.path.unlink()
        source.path.mkdir()

        with patch("lead_scoring.hot_reload.metrics") as mock_metrics:
            assert handler.perform_reload() is False

        assert source.team_ids() == ["sales"]
        assert mock_metrics.track_config_reload.call_args.kwargs["status"] == "failure"


class TestScoringRulesWatcher:
    """Test suite for ScoringRulesWatcher"""

    def test_debounce_from_settings(self, source):
        watcher = ScoringRulesWatcher(source)

        assert watcher.debounce_seconds == 2.0
        assert watcher.handler.debounce_seconds == 2.0

    def test_start_and_stop(self, source):
        watcher = ScoringRulesWatcher(source, debounce_seconds=0.1)

        watcher.start()
        assert watcher.is_running
        watcher.start()  # second start is a no-op
        watcher.stop()

        assert not watcher.is_running

    def test_context_manager(self, source):
        with ScoringRulesWatcher(source, debounce_seconds=0.1) as watcher:
            assert watcher.is_running

        assert not watcher.is_running

    def test_stop_without_start(self, source):
        watcher = ScoringRulesWatcher(source, debounce_seconds=0.1)
        watcher.observer = MagicMock()

        watcher.stop()

        watcher.observer.stop.assert_not_called()


class TestWatchIfEnabled:
    """Test the settings-driven watcher start"""

    def test_disabled(self, source):
        assert watch_if_enabled(source, Settings(_env_file=None, hot_reload_enabled=False)) is None

    def test_enabled(self, source):
        settings = Settings(_env_file=None, hot_reload_enabled=True, hot_reload_debounce_seconds=0.5)

        watcher = watch_if_enabled(source, settings)
        try:
            assert watcher.is_running
            assert watcher.debounce_seconds == 0.5
        finally:
            watcher.stop()

    def test_reads_environment(self, source, monkeypatch):
        monkeypatch.setenv("HOT_RELOAD_ENABLED", "true")
        get_settings.cache_clear()

        with patch("lead_scoring.hot_reload.ScoringRulesWatcher") as watcher_cls:
            watcher = watch_if_enabled(source)

        assert watcher is watcher_cls.return_value
        watcher.start.assert_called_once()
