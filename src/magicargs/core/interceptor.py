"""
Argument interceptor.

Scans a program's arguments for the first one carrying the magic prefix.
An exact keyword runs that action; anything else after the prefix lists the
registered actions, filtered by what was typed. Either way the host program
is expected to stop. Arguments without the prefix are never examined beyond
the prefix check.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

import structlog

from magicargs.core.actions import MagicAction
from magicargs.core.config import DEFAULT_PREFIX
from magicargs.core.feedback import ICON_INFO, Feedback
from magicargs.core.logs import ensure_logging, finish_log
from magicargs.core.registry import MagicActions

log = structlog.get_logger()


@dataclass(frozen=True)
class Outcome:
    """Result of intercepting arguments.

    - continue: no magic argument, args are handed back untouched
    - run: an action was run, the program should exit with exit_code
    - fallback: actions were listed, the program should exit with exit_code
    """

    action: Literal["continue", "run", "fallback"]
    args: Sequence[str] = ()
    exit_code: int | None = None
    query: str | None = None

    @property
    def terminates(self) -> bool:
        return self.action != "continue"


def intercept(
    args: Sequence[str],
    actions: MagicActions,
    feedback: Feedback,
    prefix: str = DEFAULT_PREFIX,
) -> Outcome:
    """Run a magic action or list actions if args contain the prefix.

    Only the first prefixed argument is honoured.
    """
    arg = find_magic(args, prefix)
    if arg is None:
        return Outcome("continue", args=args)

    query = arg[len(prefix) :]
    action = actions.get(query)
    if action is not None:
        return _run_action(action, feedback)
    return _list_actions(query, actions, feedback, prefix)


def find_magic(args: Sequence[str], prefix: str = DEFAULT_PREFIX) -> str | None:
    """The first argument starting with prefix, whitespace-trimmed, or None."""
    for arg in args:
        arg = arg.strip()
        if arg.startswith(prefix):
            return arg
    return None


def _run_action(action: MagicAction, feedback: Feedback) -> Outcome:
    ensure_logging()
    log.info("magic_run", keyword=action.keyword, text=action.run_text)
    feedback.new_item(action.run_text, icon=ICON_INFO, valid=False)
    feedback.send()

    try:
        action.run()
    except Exception as e:
        # Reported in the log only; the run still exits 0
        log.error("magic_failed", description=action.description, error=str(e))
        finish_log(True)
    finish_log(False)
    return Outcome("run", exit_code=0, query=action.keyword)


def _list_actions(
    query: str, actions: MagicActions, feedback: Feedback, prefix: str
) -> Outcome:
    for action in actions:
        feedback.new_item(
            action.keyword,
            subtitle=action.description,
            valid=False,
            icon=ICON_INFO,
            uid=action.description,
            autocomplete=prefix + action.keyword,
            match=f"{action.keyword} {action.description}",
        )
    feedback.filter(query)
    feedback.warn_empty("No matching action", "Try another query?")
    feedback.send()
    return Outcome("fallback", exit_code=0, query=query)
