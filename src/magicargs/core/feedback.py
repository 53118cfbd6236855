"""
Script Filter feedback for Alfred.

Items are buffered, optionally fuzzy-filtered against a query, and written
to the output stream as a single JSON document.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any, TextIO

ICON_ROOT = "/System/Library/CoreServices/CoreTypes.bundle/Contents/Resources"


@dataclass(frozen=True)
class Icon:
    """An item icon: an image path, a file whose icon to use, or a UTI."""

    path: str
    type: str = ""  # "" | "fileicon" | "filetype"

    def to_dict(self) -> dict[str, str]:
        result = {"path": self.path}
        if self.type:
            result["type"] = self.type
        return result


def system_icon(name: str) -> Icon:
    """Return one of the macOS system icons by file stem."""
    return Icon(f"{ICON_ROOT}/{name}.icns")


ICON_INFO = system_icon("ToolbarInfo")
ICON_WARNING = system_icon("AlertCautionIcon")


@dataclass
class Item:
    """A single result row shown by Alfred."""

    title: str
    subtitle: str | None = None
    valid: bool = False
    uid: str | None = None
    autocomplete: str | None = None
    match: str | None = None
    icon: Icon | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"title": self.title, "valid": self.valid}
        for key in ("subtitle", "uid", "autocomplete", "match"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.icon is not None:
            result["icon"] = self.icon.to_dict()
        return result


# === Filtering ===


def fuzzy_score(query: str, text: str) -> float | None:
    """Score text against query, or None if the query characters aren't all in it.

    Query characters must appear in text in order (case-insensitive).
    Whitespace in the query is ignored. Consecutive hits and hits at the
    start of a word score higher.
    """
    text = text.lower()
    score = 0.0
    pos = 0
    prev = -2
    for ch in query.lower():
        if ch.isspace():
            continue
        idx = text.find(ch, pos)
        if idx == -1:
            return None
        score += 1
        if idx == prev + 1:
            score += 2
        if idx == 0 or not text[idx - 1].isalnum():
            score += 3
        prev = idx
        pos = idx + 1
    return score


class Feedback:
    """Buffer of items destined for Alfred."""

    def __init__(self, stream: TextIO | None = None):
        self.items: list[Item] = []
        self.stream = stream
        self.sent = False

    def new_item(self, title: str, **attrs: Any) -> Item:
        """Create an item, add it to the buffer and return it."""
        item = Item(title, **attrs)
        self.items.append(item)
        return item

    def filter(self, query: str) -> list[Item]:
        """Drop items not matching query and sort the rest best-first.

        Items are matched on their match string, falling back to the title.
        Ties keep their original order. An empty query keeps everything.
        """
        if not query.strip():
            return self.items
        scored = []
        for item in self.items:
            score = fuzzy_score(query, item.match if item.match is not None else item.title)
            if score is not None:
                scored.append((score, item))
        scored.sort(key=lambda pair: -pair[0])
        self.items = [item for _, item in scored]
        return self.items

    def warn_empty(self, title: str, subtitle: str = "") -> None:
        """Add a warning item if there are no items to show."""
        if self.items:
            return
        self.new_item(title, subtitle=subtitle, valid=False, icon=ICON_WARNING)

    def to_dict(self) -> dict[str, Any]:
        return {"items": [item.to_dict() for item in self.items]}

    def send(self) -> None:
        """Write the buffered items as JSON. Only the first call writes anything."""
        if self.sent:
            return
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(json.dumps(self.to_dict(), ensure_ascii=False) + "\n")
        stream.flush()
        self.sent = True
