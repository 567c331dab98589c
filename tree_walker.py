#!/usr/bin/env python3
"""
Tree Walker

Walks a directory tree depth-first in name order, filters every visited
entry and hands matches to the action dispatcher. Any error aborts the
walk; actions already applied are not undone.
"""

import logging
import os
from typing import Callable, Iterator, Optional, TextIO

from file_filter import FileEntry, matches
from file_operations import Action, ActionDispatcher
from walk_config import WalkConfig
from walk_errors import TraversalError

logger = logging.getLogger(__name__)


def _list_directory(path: str) -> list[os.DirEntry]:
    try:
        with os.scandir(path) as it:
            return sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise TraversalError(f"Cannot read directory {path}: {e}", path) from e


def _walk_directory(path: str) -> Iterator[FileEntry]:
    for dir_entry in _list_directory(path):
        try:
            entry = FileEntry.from_dir_entry(dir_entry)
        except OSError as e:
            raise TraversalError(f"Cannot stat {dir_entry.path}: {e}", dir_entry.path) from e
        yield entry
        if entry.is_dir:
            yield from _walk_directory(entry.path)


def walk_entries(root: str) -> Iterator[FileEntry]:
    """Yield *root* and everything below it.

    Each directory is yielded before its contents; siblings come in name
    order. Symlinks below the root are not followed.
    """
    try:
        root_entry = FileEntry.from_path(root)
    except OSError as e:
        raise TraversalError(f"Cannot stat {root}: {e}", root) from e
    yield root_entry
    if root_entry.is_dir:
        yield from _walk_directory(root)


def run(
    root: str,
    out: TextIO,
    config: WalkConfig,
    progress_callback: Optional[Callable[[FileEntry, Action], None]] = None,
):
    """Walk *root* and apply the configured action to every matching file.

    List output goes to *out*. Deletions are recorded in ``config.log_sink``.
    Raises a WalkError subclass on the first failure.
    """
    with ActionDispatcher(root, out, config) as dispatcher:
        logger.debug("Walking %s (action: %s)", root, dispatcher.action.value)
        for entry in walk_entries(root):
            if not matches(entry, config.ext, config.min_size):
                continue
            if dispatcher.bundle_path and os.path.abspath(entry.path) == dispatcher.bundle_path:
                continue
            action = dispatcher.dispatch(entry)
            if progress_callback:
                progress_callback(entry, action)
