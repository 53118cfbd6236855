"""Workflow data directory, cache directory and log file."""

from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from magicargs.core.config import BASE_DIR, LOG_NAME, Config
from magicargs.core.errors import WorkspaceError

log = structlog.get_logger()


def default_opener() -> str:
    """Command that opens a file or URL in its default application."""
    return "open" if sys.platform == "darwin" else "xdg-open"


@dataclass
class Workspace:
    """The files a workflow owns, plus how to open them."""

    data_dir: Path
    cache_dir: Path
    log_file: Path
    # May carry arguments, e.g. "open -a Finder"
    opener: str = field(default_factory=default_opener)

    @classmethod
    def from_config(cls, config: Config) -> Workspace:
        """Resolve directories from config, defaulting to ~/.magicargs/<bundle id>/."""
        root = BASE_DIR / (config.bundle_id or "default")
        data_dir = config.data_dir or root / "data"
        cache_dir = config.cache_dir or root / "cache"
        return cls(
            data_dir=data_dir,
            cache_dir=cache_dir,
            log_file=config.log or cache_dir / LOG_NAME,
            opener=config.opener or default_opener(),
        )

    # === Opening ===

    def open_log(self) -> None:
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        self.log_file.touch()
        self._open(str(self.log_file))

    def open_data(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._open(str(self.data_dir))

    def open_cache(self) -> None:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self._open(str(self.cache_dir))

    def open_url(self, url: str) -> None:
        self._open(url)

    def _open(self, target: str) -> None:
        try:
            subprocess.run(
                [*self.opener.split(), target], check=True, capture_output=True
            )
        except FileNotFoundError as e:
            raise WorkspaceError(f"opener not found: {self.opener}") from e
        except subprocess.CalledProcessError as e:
            raise WorkspaceError(
                f"{self.opener} exited with status {e.returncode}"
            ) from e
        log.info("opened", target=target)

    # === Clearing ===

    def clear_data(self) -> None:
        self._clear(self.data_dir)

    def clear_cache(self) -> None:
        self._clear(self.cache_dir)

    def reset(self) -> None:
        """Clear cache and data. Both are attempted; the first failure is raised."""
        errors: list[WorkspaceError] = []
        for clear in (self.clear_cache, self.clear_data):
            try:
                clear()
            except WorkspaceError as e:
                errors.append(e)
        if errors:
            raise errors[0]

    def _clear(self, directory: Path) -> None:
        """Delete everything inside directory, keeping the directory and the log file."""
        if not directory.is_dir():
            return
        log_file = self.log_file.resolve()
        try:
            for child in directory.iterdir():
                if child.resolve() == log_file:
                    continue
                if child.is_dir() and not child.is_symlink():
                    shutil.rmtree(child)
                else:
                    child.unlink()
        except OSError as e:
            raise WorkspaceError(f"could not clear {directory}: {e}") from e
        log.info("cleared", path=str(directory))
