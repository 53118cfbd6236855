"""Tests for workspace file operations."""

import subprocess

import pytest

from magicargs.core.config import Config
from magicargs.core.errors import MagicError, WorkspaceError
from magicargs.core.workspace import Workspace, default_opener


@pytest.fixture
def workspace(tmp_path):
    return Workspace(
        data_dir=tmp_path / "data",
        cache_dir=tmp_path / "cache",
        log_file=tmp_path / "cache" / "magicargs.log",
        opener="true",
    )


@pytest.fixture
def opened(monkeypatch):
    """Record commands passed to subprocess.run instead of running them."""
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr("magicargs.core.workspace.subprocess.run", fake_run)
    return calls


def populate(directory):
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "file.txt").write_text("x")
    (directory / "nested" / "deeper").mkdir(parents=True)
    (directory / "nested" / "deeper" / "f").write_text("y")


class TestFromConfig:
    def test_defaults_under_base_dir(self, tmp_path, monkeypatch):
        monkeypatch.setattr("magicargs.core.workspace.BASE_DIR", tmp_path)
        ws = Workspace.from_config(Config())
        assert ws.data_dir == tmp_path / "default" / "data"
        assert ws.cache_dir == tmp_path / "default" / "cache"
        assert ws.log_file == tmp_path / "default" / "cache" / "magicargs.log"
        assert ws.opener == default_opener()

    def test_bundle_id_names_directory(self, tmp_path, monkeypatch):
        monkeypatch.setattr("magicargs.core.workspace.BASE_DIR", tmp_path)
        ws = Workspace.from_config(Config(bundle_id="net.example.wf"))
        assert ws.data_dir == tmp_path / "net.example.wf" / "data"

    def test_explicit_paths(self, tmp_path):
        config = Config(
            data_dir=tmp_path / "d",
            cache_dir=tmp_path / "c",
            log=tmp_path / "wf.log",
            opener="xdg-open",
        )
        ws = Workspace.from_config(config)
        assert ws == Workspace(tmp_path / "d", tmp_path / "c", tmp_path / "wf.log", "xdg-open")

    def test_log_follows_cache_dir(self, tmp_path):
        ws = Workspace.from_config(Config(cache_dir=tmp_path / "c"))
        assert ws.log_file == tmp_path / "c" / "magicargs.log"


class TestOpen:
    def test_open_log_creates_file(self, workspace, opened):
        workspace.open_log()
        assert workspace.log_file.is_file()
        assert opened == [["true", str(workspace.log_file)]]

    def test_open_data_creates_dir(self, workspace, opened):
        workspace.open_data()
        assert workspace.data_dir.is_dir()
        assert opened == [["true", str(workspace.data_dir)]]

    def test_open_cache_creates_dir(self, workspace, opened):
        workspace.open_cache()
        assert workspace.cache_dir.is_dir()
        assert opened == [["true", str(workspace.cache_dir)]]

    def test_open_url(self, workspace, opened):
        workspace.open_url("https://example.com")
        assert opened == [["true", "https://example.com"]]

    def test_real_opener_succeeds(self, workspace):
        workspace.open_data()

    def test_opener_failure(self, workspace):
        workspace.opener = "false"
        with pytest.raises(WorkspaceError, match="false exited with status 1"):
            workspace.open_data()

    def test_missing_opener(self, workspace):
        workspace.opener = "definitely-not-a-real-opener"
        with pytest.raises(WorkspaceError, match="opener not found"):
            workspace.open_cache()

    def test_error_is_magic_error(self, workspace):
        workspace.opener = "false"
        with pytest.raises(MagicError):
            workspace.open_url("x")


class TestClear:
    def test_clear_data_empties_directory(self, workspace):
        populate(workspace.data_dir)
        workspace.clear_data()
        assert workspace.data_dir.is_dir()
        assert list(workspace.data_dir.iterdir()) == []

    def test_clear_cache_keeps_log(self, workspace):
        populate(workspace.cache_dir)
        workspace.log_file.write_text("log line\n")
        workspace.clear_cache()
        assert list(workspace.cache_dir.iterdir()) == [workspace.log_file]

    def test_clear_cache_keeps_log_through_symlink(self, tmp_path):
        real = tmp_path / "cache-real"
        real.mkdir()
        link = tmp_path / "cache-link"
        link.symlink_to(real)
        log_file = real / "magicargs.log"
        log_file.write_text("log line\n")
        (real / "stale.json").write_text("{}")

        Workspace(tmp_path / "data", link, log_file, "true").clear_cache()

        assert list(real.iterdir()) == [log_file]

    def test_missing_directory_is_noop(self, workspace):
        workspace.clear_cache()
        assert not workspace.cache_dir.exists()

    def test_symlinked_directory_not_followed(self, workspace, tmp_path):
        outside = tmp_path / "outside"
        populate(outside)
        workspace.data_dir.mkdir()
        (workspace.data_dir / "link").symlink_to(outside)
        workspace.clear_data()
        assert (outside / "file.txt").exists()
        assert list(workspace.data_dir.iterdir()) == []

    def test_reset_clears_both(self, workspace):
        populate(workspace.data_dir)
        populate(workspace.cache_dir)
        workspace.reset()
        assert list(workspace.data_dir.iterdir()) == []
        assert list(workspace.cache_dir.iterdir()) == []

    def test_reset_attempts_both(self, workspace, monkeypatch):
        populate(workspace.data_dir)

        def broken():
            raise WorkspaceError("cache is stuck")

        monkeypatch.setattr(workspace, "clear_cache", broken)
        with pytest.raises(WorkspaceError, match="cache is stuck"):
            workspace.reset()
        assert list(workspace.data_dir.iterdir()) == []


def test_opener_with_arguments(workspace, opened):
    workspace.opener = "open -a Finder"
    workspace.open_data()
    assert opened == [["open", "-a", "Finder", str(workspace.data_dir)]]
