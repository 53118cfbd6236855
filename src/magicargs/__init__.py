"""
magicargs - Maintenance actions hidden behind a command-line prefix.

Pass "workflow:log", "workflow:reset" and friends to any program that reads
its arguments through magicargs.args().
"""

from __future__ import annotations

__version__ = "0.1.0"

from magicargs.core.actions import MagicAction, Updater
from magicargs.core.config import DEFAULT_PREFIX, Config, load_config
from magicargs.core.interceptor import Outcome, find_magic, intercept
from magicargs.core.registry import MagicActions
from magicargs.magic import args, build_registry

__all__ = [
    "DEFAULT_PREFIX",
    "Config",
    "MagicAction",
    "MagicActions",
    "Outcome",
    "Updater",
    "__version__",
    "args",
    "build_registry",
    "find_magic",
    "intercept",
    "load_config",
]
