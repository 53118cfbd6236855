"""magicargs configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

DEFAULT_PREFIX = "workflow:"

BASE_DIR = Path.home() / ".magicargs"
USER_CONFIG = BASE_DIR / "config"
ENV_CONFIG = "MAGICARGS_CONFIG"
LOG_NAME = "magicargs.log"

# Variables Alfred exports to every workflow process
ENV_DATA_DIR = "alfred_workflow_data"
ENV_CACHE_DIR = "alfred_workflow_cache"
ENV_BUNDLE_ID = "alfred_workflow_bundleid"


@dataclass
class Config:
    """Parsed configuration."""

    prefix: str | None = None  # None = DEFAULT_PREFIX
    data_dir: Path | None = None
    cache_dir: Path | None = None
    log: Path | None = None  # None = <cache_dir>/magicargs.log
    help_url: str | None = None
    opener: str | None = None  # None = platform default
    bundle_id: str | None = None
    disabled: bool = False

    disabled_actions: list[str] = field(default_factory=list)
    """Keywords of built-in actions to unregister, in load order."""

    @property
    def magic_prefix(self) -> str:
        return self.prefix if self.prefix is not None else DEFAULT_PREFIX


# === Config Loading ===


def _merge_configs(base: Config, overlay: Config) -> Config:
    """Merge overlay config into base. Disabled actions accumulate, settings override."""
    return replace(
        base,
        disabled_actions=base.disabled_actions + overlay.disabled_actions,
        prefix=overlay.prefix if overlay.prefix is not None else base.prefix,
        data_dir=overlay.data_dir if overlay.data_dir is not None else base.data_dir,
        cache_dir=overlay.cache_dir
        if overlay.cache_dir is not None
        else base.cache_dir,
        log=overlay.log if overlay.log is not None else base.log,
        help_url=overlay.help_url if overlay.help_url is not None else base.help_url,
        opener=overlay.opener if overlay.opener is not None else base.opener,
        bundle_id=overlay.bundle_id
        if overlay.bundle_id is not None
        else base.bundle_id,
        disabled=overlay.disabled if overlay.disabled else base.disabled,
    )


def _config_from_environment() -> Config:
    """Pick up the directories Alfred hands to a running workflow."""
    data_dir = os.environ.get(ENV_DATA_DIR)
    cache_dir = os.environ.get(ENV_CACHE_DIR)
    return Config(
        data_dir=Path(data_dir).expanduser() if data_dir else None,
        cache_dir=Path(cache_dir).expanduser() if cache_dir else None,
        bundle_id=os.environ.get(ENV_BUNDLE_ID) or None,
    )


def load_config() -> Config:
    """Load config from ~/.magicargs/config, $MAGICARGS_CONFIG and Alfred's environment."""
    config = Config()

    # 1. User config (lowest priority)
    if USER_CONFIG.is_file():
        config = _merge_configs(config, parse_config(USER_CONFIG.read_text()))

    # 2. Env override
    env_path = os.environ.get(ENV_CONFIG)
    if env_path:
        env_config_path = Path(env_path).expanduser()
        if env_config_path.is_file():
            config = _merge_configs(config, parse_config(env_config_path.read_text()))

    # 3. Alfred (highest priority)
    return _merge_configs(config, _config_from_environment())


def parse_config(text: str) -> Config:
    """Parse config text into Config object. Raises ValueError on syntax errors."""
    disabled_actions: list[str] = []
    settings: dict[str, bool | str | Path] = {}

    for lineno, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        parts = line.split(None, 1)
        directive = parts[0].lower()
        rest = parts[1].strip() if len(parts) > 1 else ""

        try:
            if directive == "disable":
                if not rest:
                    raise ValueError("requires a keyword")
                disabled_actions.append(rest)

            elif directive == "set":
                _apply_setting(settings, rest)

            else:
                raise ValueError(f"unknown directive '{directive}'")

        except ValueError as e:
            raise ValueError(f"line {lineno}: {e}") from None

    return Config(
        prefix=settings.get("prefix"),
        data_dir=settings.get("data_dir"),
        cache_dir=settings.get("cache_dir"),
        log=settings.get("log"),
        help_url=settings.get("help_url"),
        opener=settings.get("opener"),
        disabled=settings.get("disabled", False),
        disabled_actions=disabled_actions,
    )


def _apply_setting(settings: dict[str, bool | str | Path], rest: str) -> None:
    """Parse and apply a 'set' directive. Raises ValueError on invalid setting."""
    if not rest:
        raise ValueError("'set' requires a setting name")

    parts = rest.split(None, 1)
    key = parts[0].lower()
    value = parts[1] if len(parts) > 1 else None
    key_normalized = key.replace("-", "_")

    # Boolean settings (no value required)
    if key_normalized == "disabled":
        if value is not None:
            raise ValueError(f"'{key}' takes no value")
        settings[key_normalized] = True

    # String settings
    elif key_normalized in ("prefix", "help_url", "opener"):
        if value is None:
            raise ValueError(f"'{key}' requires a value")
        settings[key_normalized] = value

    # Path settings
    elif key_normalized in ("data_dir", "cache_dir", "log"):
        if value is None:
            raise ValueError(f"'{key}' requires a path")
        settings[key_normalized] = Path(value).expanduser()

    else:
        raise ValueError(f"unknown setting '{key}'")
