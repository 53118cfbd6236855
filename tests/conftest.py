"""
Shared test fixtures for magicargs tests.
"""

import io
import json
from dataclasses import dataclass, field

import pytest
import structlog

from magicargs.core.feedback import Feedback
from magicargs.core.registry import MagicActions


@dataclass
class RecordingAction:
    """Magic action that counts its runs and optionally fails."""

    keyword: str
    description: str = "recording action"
    run_text: str = "Running…"
    error: Exception | None = None
    runs: list[int] = field(default_factory=list)

    def run(self) -> None:
        self.runs.append(1)
        if self.error is not None:
            raise self.error


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Keep tests away from the real home directory, environment and log config."""
    monkeypatch.setattr("magicargs.core.config.USER_CONFIG", tmp_path / "no-user-config")
    monkeypatch.setattr("magicargs.core.workspace.BASE_DIR", tmp_path / "magicargs-home")
    for var in (
        "MAGICARGS_CONFIG",
        "alfred_workflow_data",
        "alfred_workflow_cache",
        "alfred_workflow_bundleid",
    ):
        monkeypatch.delenv(var, raising=False)
    yield
    structlog.reset_defaults()


@pytest.fixture
def action():
    """Factory for recording actions."""

    def _make(keyword: str, **kwargs) -> RecordingAction:
        return RecordingAction(keyword, **kwargs)

    return _make


@pytest.fixture
def registry(action):
    """Registry with "log" and "data" recording actions."""
    return MagicActions(
        action("log", description="Open log"),
        action("data", description="Open data"),
    )


@pytest.fixture
def feedback():
    """Feedback writing to an in-memory stream."""
    return Feedback(io.StringIO())


def sent_items(feedback: Feedback) -> list[dict]:
    """Items written by Feedback.send(), or [] if nothing was sent."""
    output = feedback.stream.getvalue()
    if not output:
        return []
    return json.loads(output)["items"]
