#!/usr/bin/env python3
"""Exceptions raised by the peripatos tree walker."""

from typing import Optional


class WalkError(Exception):
    """Base exception for everything that aborts a walk."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ConfigError(WalkError):
    """Raised when a walk configuration is invalid."""


class TraversalError(WalkError):
    """Raised when a directory cannot be listed or an entry cannot be stat'ed."""


class DeleteError(WalkError):
    """Raised when a matched file cannot be removed."""


class ArchiveError(WalkError):
    """Raised when the archive bundle cannot be opened or written."""


class OutputError(WalkError):
    """Raised when list output or the deletion log cannot be written."""
