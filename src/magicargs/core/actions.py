"""
Magic actions.

A magic action is run in place of the host program when its keyword follows
the magic prefix in the program's arguments, e.g. "workflow:log". They exist
mostly to make supporting users easier: instead of walking someone through
digging a log file out of ~/Library, ask them to enter "workflow:log".

Built-in keywords:

    Keyword     Action
    ----------  ---------------------------------------------------------
    log         Open the log file in the default app
    cache       Open the cache directory in the default app
    delcache    Delete everything in the cache directory
    data        Open the data directory in the default app
    deldata     Delete everything in the data directory
    reset       Delete everything in the data and cache directories
    help        Open the help URL in the default browser
                (only registered when a help URL is configured)
    update      Check for and install a newer version
                (only registered when an updater is supplied)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import structlog

from magicargs.core.workspace import Workspace

log = structlog.get_logger()


class MagicAction(Protocol):
    """Anything with a keyword, two strings of text and a run() method."""

    @property
    def keyword(self) -> str:
        """What follows the prefix to trigger the action."""
        ...

    @property
    def description(self) -> str:
        """Shown when listing actions because the query matched no keyword."""
        ...

    @property
    def run_text(self) -> str:
        """Shown to the user and logged when the action runs."""
        ...

    def run(self) -> None:
        """Perform the action. Raises on failure."""
        ...


class Updater(Protocol):
    """Checks for and installs new releases of the host program."""

    @property
    def update_available(self) -> bool: ...

    def check_for_update(self) -> None: ...

    def install(self) -> None: ...


@dataclass(frozen=True)
class WorkspaceAction:
    """A built-in action backed by a single Workspace operation."""

    keyword: str
    description: str
    run_text: str
    operation: Callable[[], None]

    def run(self) -> None:
        self.operation()


@dataclass(frozen=True)
class HelpAction:
    url: str
    workspace: Workspace
    keyword: str = "help"
    description: str = "Open workflow help URL in default browser"
    run_text: str = "Opening help in your browser…"

    def run(self) -> None:
        self.workspace.open_url(self.url)


@dataclass(frozen=True)
class UpdateAction:
    updater: Updater
    keyword: str = "update"
    description: str = "Check for updates, and install if one is available"
    run_text: str = "Fetching update…"

    def run(self) -> None:
        self.updater.check_for_update()
        if self.updater.update_available:
            self.updater.install()
            return
        log.info("no_update_available")


def default_actions(workspace: Workspace) -> list[WorkspaceAction]:
    """The built-in actions every registry starts with."""
    return [
        WorkspaceAction(
            "log", "Open workflow's log file", "Opening log file…", workspace.open_log
        ),
        WorkspaceAction(
            "cache",
            "Open workflow's cache directory",
            "Opening cache directory…",
            workspace.open_cache,
        ),
        WorkspaceAction(
            "delcache",
            "Delete workflow's cached data",
            "Deleted workflow's cached data",
            workspace.clear_cache,
        ),
        WorkspaceAction(
            "data",
            "Open workflow's data directory",
            "Opening data directory…",
            workspace.open_data,
        ),
        WorkspaceAction(
            "deldata",
            "Delete workflow's saved data",
            "Deleted workflow's saved data",
            workspace.clear_data,
        ),
        WorkspaceAction(
            "reset",
            "Delete all saved and cached workflow data",
            "Deleted workflow saved and cached data",
            workspace.reset,
        ),
    ]
