"""Dependency injection container.

Lazy: the history file is not touched until a service loads it.
Configurable: call configure() to override default settings (e.g. in tests).
"""

from __future__ import annotations

from functools import cached_property
from pathlib import Path

import structlog

from zox.config import (
    HomeDirectoryError,
    Settings,
    discover_home,
    get_settings,
    resolve_data_file,
)
from zox.services.query_service import QueryService
from zox.services.visit_service import VisitService
from zox.storage.history import HistoryFile

log = structlog.get_logger()


class Container:
    """Wires the history store into the visit and query services."""

    def __init__(self, settings: Settings, home: Path | None = None) -> None:
        self.settings = settings
        self.home = home

    @cached_property
    def data_file(self) -> Path:
        """Resolve the history file location on first access."""
        path = resolve_data_file(self.settings, self.home)
        log.debug("data_file_resolved", path=str(path))
        return path

    @cached_property
    def store(self) -> HistoryFile:
        return HistoryFile(self.data_file)

    def create_visit_service(self) -> VisitService:
        """Create a VisitService with the configured aging policy."""
        return VisitService(
            store=self.store,
            home=str(self.home) if self.home is not None else None,
            exclude=self.settings.exclude_dirs,
            max_total=self.settings.max_total_rank,
            decay=self.settings.decay_factor,
            min_rank=self.settings.min_rank,
        )

    def create_query_service(self) -> QueryService:
        """Create a QueryService using the configured match mode."""
        return QueryService(store=self.store, match_mode=self.settings.match_mode)


# --- Global container lifecycle ---

_container: Container | None = None


def configure(settings: Settings, home: Path | None = None) -> Container:
    """Initialize the global container with explicit settings (e.g. tests)."""
    global _container
    _container = Container(settings, home)
    return _container


def get_container() -> Container:
    """Get the global container, auto-configuring with default Settings if needed."""
    global _container
    if _container is None:
        try:
            home = discover_home()
        except HomeDirectoryError:
            home = None
        _container = Container(get_settings(), home)
    return _container
