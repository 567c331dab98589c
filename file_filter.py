#!/usr/bin/env python3
"""
File entries and the filter predicate

A FileEntry is the transient view of one visited path. The filter decides
whether an entry is picked up for an action based on its extension and size.
"""

import os
import stat
from dataclasses import dataclass


def file_extension(name: str) -> str:
    """Return the extension of *name* from its last dot, dot included.

    A name without a dot has no extension. Dot-files such as ``.bashrc`` are
    their own extension.
    """
    base = os.path.basename(name)
    index = base.rfind(".")
    if index < 0:
        return ""
    return base[index:]


@dataclass
class FileEntry:
    """A path produced by the traversal"""

    path: str
    is_dir: bool
    size: int

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def ext(self) -> str:
        return file_extension(self.path)

    @classmethod
    def from_dir_entry(cls, entry: os.DirEntry) -> "FileEntry":
        """Build from an os.scandir entry without following symlinks"""
        is_dir = entry.is_dir(follow_symlinks=False)
        size = entry.stat(follow_symlinks=False).st_size
        return cls(path=entry.path, is_dir=is_dir, size=size)

    @classmethod
    def from_path(cls, path: str) -> "FileEntry":
        """Build from a bare path, following a symlinked walk root"""
        st = os.stat(path)
        return cls(path=path, is_dir=stat.S_ISDIR(st.st_mode), size=st.st_size)


def matches(entry: FileEntry, ext: str, min_size: int) -> bool:
    """Return True if *entry* should be actioned.

    Directories never match. A non-empty *ext* must equal the entry's
    extension exactly, and a positive *min_size* must be strictly exceeded.
    """
    if entry.is_dir:
        return False
    if ext and entry.ext != ext:
        return False
    if min_size > 0 and entry.size <= min_size:
        return False
    return True
