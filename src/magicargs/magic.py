"""
Host entry points for magic arguments.

Programs call args() instead of reading sys.argv[1:] directly. If one of the
arguments starts with the magic prefix ("workflow:" by default), magicargs
takes over: it runs the matching action or lists the available ones as
Alfred Script Filter feedback, then exits 0. The host's own code never runs.

Exit codes:
- 0: a magic action ran (even if it failed; failures go to the log) or the
  action list was shown, or `magicargs` passed its arguments through.
- 1: the configuration could not be loaded. stderr says why.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence
from typing import TextIO

from magicargs.core.actions import HelpAction, UpdateAction, Updater
from magicargs.core.config import Config, load_config
from magicargs.core.feedback import Feedback
from magicargs.core.interceptor import find_magic, intercept
from magicargs.core.logs import configure_logging
from magicargs.core.registry import MagicActions
from magicargs.core.workspace import Workspace


def build_registry(
    config: Config, workspace: Workspace, updater: Updater | None = None
) -> MagicActions:
    """Built-in actions, plus help/update when configured, minus disabled keywords."""
    actions = MagicActions.with_defaults(workspace)
    if config.help_url:
        actions.register(HelpAction(config.help_url, workspace))
    if updater is not None:
        actions.register(UpdateAction(updater))
    actions.unregister(*config.disabled_actions)
    return actions


def args(
    argv: Sequence[str] | None = None,
    *,
    config: Config | None = None,
    actions: MagicActions | None = None,
    updater: Updater | None = None,
    stream: TextIO | None = None,
) -> list[str]:
    """Return the program's arguments, or run magic mode and exit.

    Args:
        argv: Arguments to check. Defaults to sys.argv[1:].
        config: Defaults to load_config().
        actions: Registry to use instead of build_registry().
        updater: Enables the "update" action when building the registry.
        stream: Where feedback is written. Defaults to stdout.

    Raises SystemExit(0) when a magic argument was found.
    """
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)
    if config is None:
        config = load_config()
    prefix = config.magic_prefix
    if config.disabled or find_magic(argv, prefix) is None:
        return argv

    workspace = Workspace.from_config(config)
    configure_logging(workspace.log_file)
    if actions is None:
        actions = build_registry(config, workspace, updater)

    outcome = intercept(argv, actions, Feedback(stream), prefix)
    if outcome.terminates:
        sys.exit(outcome.exit_code)
    return list(outcome.args)


# === Entry point ===


def main() -> None:
    try:
        config = load_config()
    except ValueError as e:
        print(f"magicargs: {e}", file=sys.stderr)
        sys.exit(1)

    remaining = args(sys.argv[1:], config=config)
    print(json.dumps(remaining))
    sys.exit(0)


if __name__ == "__main__":
    main()
