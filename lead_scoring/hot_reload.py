"""
Hot reload for the scoring rules YAML

Watches the directory holding the rules file and reloads the
``FileScoringSource`` after a debounce period. A reload that fails to
validate leaves the previous snapshot in place.
"""

import threading
import time
from pathlib import Path
from typing import Optional

from watchdog.events import FileModifiedEvent, FileMovedEvent, FileSystemEventHandler
from watchdog.observers import Observer

from core.config import Settings, get_settings
from core.exceptions import LeadScoreError
from core.logging import get_logger
from core.metrics import metrics

from .rules_loader import FileScoringSource

logger = get_logger(__name__, domain="lead_scoring")

CONFIG_TYPE = "scoring_rules"


class ScoringRulesFileHandler(FileSystemEventHandler):
    """Schedules a debounced reload when the watched file changes"""

    def __init__(self, source: FileScoringSource, debounce_seconds: float = 2.0):
        self.source = source
        self.debounce_seconds = debounce_seconds
        self._reload_timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    def _is_target(self, path) -> bool:
        return Path(path).name == self.source.path.name

    def on_modified(self, event):
        if isinstance(event, FileModifiedEvent) and self._is_target(event.src_path):
            logger.info("Detected change in scoring rules", extra={"path": event.src_path})
            self._schedule_reload()

    def on_moved(self, event):
        # Editors that save via rename
        if isinstance(event, FileMovedEvent) and self._is_target(event.dest_path):
            logger.info("Detected replacement of scoring rules", extra={"path": event.dest_path})
            self._schedule_reload()

    def _schedule_reload(self):
        with self._lock:
            if self._reload_timer and self._reload_timer.is_alive():
                self._reload_timer.cancel()

            self._reload_timer = threading.Timer(self.debounce_seconds, self.perform_reload)
            self._reload_timer.daemon = True
            self._reload_timer.start()

    def cancel(self):
        with self._lock:
            if self._reload_timer:
                self._reload_timer.cancel()
                self._reload_timer = None

    def perform_reload(self) -> bool:
        """Reload the source now; returns True on success"""
        start_time = time.perf_counter()
        try:
            self.source.load()
        except LeadScoreError as e:
            metrics.track_config_reload(CONFIG_TYPE, time.perf_counter() - start_time, status="failure")
            logger.error(
                "Failed to reload scoring rules, keeping previous snapshot",
                extra={"event": "rules_reload", "status": "failure", "error": e.message},
            )
            return False

        metrics.track_config_reload(CONFIG_TYPE, time.perf_counter() - start_time, status="success")
        logger.info("Scoring rules reloaded", extra={"event": "rules_reload", "status": "success"})
        return True


class ScoringRulesWatcher:
    """Watches the scoring rules file for changes and triggers reloads"""

    def __init__(self, source: FileScoringSource, debounce_seconds: Optional[float] = None):
        if debounce_seconds is None:
            debounce_seconds = get_settings().hot_reload_debounce_seconds
        self.source = source
        self.debounce_seconds = debounce_seconds
        self.observer = Observer()
        self.handler = ScoringRulesFileHandler(source, debounce_seconds)
        self._started = False

    @property
    def is_running(self) -> bool:
        return self._started

    def start(self):
        if self._started:
            logger.warning("Watcher already started")
            return

        self.observer.schedule(self.handler, str(self.source.path.parent.resolve()), recursive=False)
        self.observer.start()
        self._started = True
        logger.info("Started watching scoring rules", extra={"path": str(self.source.path)})

    def stop(self):
        if not self._started:
            return

        self.handler.cancel()
        self.observer.stop()
        self.observer.join()
        self._started = False
        logger.info("Stopped watching scoring rules")

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()


def watch_if_enabled(
    source: FileScoringSource, settings: Optional[Settings] = None
) -> Optional[ScoringRulesWatcher]:
    """Start watching ``source`` when ``HOT_RELOAD_ENABLED`` is set

    Returns the running watcher, or None when hot reload is disabled.
    """
    settings = settings or get_settings()
    if not settings.hot_reload_enabled:
        logger.debug("Hot reload disabled", extra={"path": str(source.path)})
        return None

    watcher = ScoringRulesWatcher(source, settings.hot_reload_debounce_seconds)
    watcher.start()
    return watcher
