"""Exceptions raised by magic actions and their collaborators."""

from __future__ import annotations


class MagicError(Exception):
    """Base class for magicargs errors."""


class WorkspaceError(MagicError):
    """A workspace file or directory operation failed."""
