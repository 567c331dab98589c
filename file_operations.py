#!/usr/bin/env python3
"""
File Operations Module

Actions applied to files picked by the filter: list, archive and delete.
The action for a run is chosen once from the configuration, in fixed
priority order, and every matched entry goes through exactly that action.
"""

import logging
import os
from enum import Enum
from typing import Optional, TextIO

from file_archiver import TreeArchiver
from file_filter import FileEntry
from walk_config import WalkConfig
from walk_errors import DeleteError, OutputError

logger = logging.getLogger(__name__)


class Action(Enum):
    """Action applied to a matched entry"""

    LIST = "list"
    ARCHIVE = "archive"
    DELETE = "delete"
    NONE = "none"


def select_action(config: WalkConfig) -> Action:
    """Pick the action for a run: list, then archive, then delete"""
    if config.list_files:
        return Action.LIST
    if config.archive_dir:
        return Action.ARCHIVE
    if config.delete:
        return Action.DELETE
    return Action.NONE


def list_file(path: str, out: TextIO):
    """Write *path* on its own line to *out*"""
    try:
        out.write(f"{path}\n")
    except (OSError, UnicodeError, ValueError) as e:
        raise OutputError(f"Cannot write {path!r} to the output: {e}", path) from e


def delete_file(path: str):
    """Remove the single file at *path*"""
    try:
        os.remove(path)
    except OSError as e:
        raise DeleteError(f"Cannot delete {path}: {e}", path) from e


def record_deletion(path: str, sink: TextIO):
    """Append the bare *path* as one line to the deletion log"""
    try:
        sink.write(f"{path}\n")
    except (OSError, UnicodeError, ValueError) as e:
        raise DeleteError(f"Deleted {path!r} but could not record it in the deletion log: {e}", path) from e


class ActionDispatcher:
    """Applies the run's action to matched entries.

    Owns the archive bundle for the run and finishes it on close. The list
    output and the deletion log belong to the caller and are only flushed.
    """

    def __init__(self, root: str, out: TextIO, config: WalkConfig):
        self.root = root
        self.out = out
        self.config = config
        self.action = select_action(config)

        self.archiver: Optional[TreeArchiver] = None
        if self.action is Action.ARCHIVE:
            self.archiver = TreeArchiver(config.archive_dir, root)

    def __enter__(self) -> "ActionDispatcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def bundle_path(self) -> Optional[str]:
        return self.archiver.bundle_path if self.archiver else None

    def dispatch(self, entry: FileEntry) -> Action:
        """Apply the run's action to *entry* and return it"""
        if self.action is Action.LIST:
            list_file(entry.path, self.out)
        elif self.action is Action.ARCHIVE:
            self.archiver.add(entry)
        elif self.action is Action.DELETE:
            delete_file(entry.path)
            logger.debug("Deleted %r", entry.path)
            if self.config.log_sink is not None:
                record_deletion(entry.path, self.config.log_sink)
        return self.action

    def close(self):
        """Finish the archive bundle and flush the deletion log"""
        try:
            if self.archiver:
                self.archiver.close()
        finally:
            if self.action is Action.DELETE and self.config.log_sink is not None:
                try:
                    self.config.log_sink.flush()
                except (OSError, ValueError) as e:
                    raise OutputError(f"Cannot flush the deletion log: {e}") from e
