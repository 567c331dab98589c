#!/usr/bin/env python3
"""
Tree Archiver

Copies matched files into a single gzip-compressed tar bundle, keeping their
paths relative to the walked root. The bundle is named after the root
directory and lives in the archive destination. Each run appends a new gzip
member, so bundles written by several runs are read with ``ignore_zeros=True``.
"""

import logging
import os
import tarfile
from typing import BinaryIO, Optional

from file_filter import FileEntry
from walk_errors import ArchiveError

logger = logging.getLogger(__name__)

BUNDLE_SUFFIX = ".tar.gz"


def bundle_name(root: str) -> str:
    """Return the bundle file name derived from the base name of *root*"""
    base = os.path.basename(os.path.normpath(os.path.abspath(root)))
    return f"{base or 'root'}{BUNDLE_SUFFIX}"


def archive_member_name(root: str, path: str) -> str:
    """Return the tar member name for *path*, relative to *root* with / separators"""
    rel = os.path.relpath(path, root)
    if rel == os.curdir:
        # the root itself is a file
        rel = os.path.basename(path)
    return rel.replace(os.sep, "/")


class TreeArchiver:
    """Appends files from one walk into the bundle for that walk's root.

    The bundle is opened on the first call to :meth:`add` and closed by
    :meth:`close`. If nothing was added, no bundle is created.
    """

    def __init__(self, destination_dir: str, root: str):
        self.destination_dir = destination_dir
        self.root = root
        self.bundle_path = os.path.abspath(os.path.join(destination_dir, bundle_name(root)))
        self.added = 0
        self._file: Optional[BinaryIO] = None
        self._tar: Optional[tarfile.TarFile] = None

    def __enter__(self) -> "TreeArchiver":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def is_open(self) -> bool:
        return self._tar is not None

    def _open(self):
        try:
            os.makedirs(self.destination_dir, exist_ok=True)
            self._file = open(self.bundle_path, "ab")
        except OSError as e:
            raise ArchiveError(f"Cannot open archive {self.bundle_path}: {e}", self.bundle_path) from e
        try:
            self._tar = tarfile.open(fileobj=self._file, mode="w:gz")
        except (OSError, tarfile.TarError) as e:
            self._file.close()
            self._file = None
            raise ArchiveError(f"Cannot start archive {self.bundle_path}: {e}", self.bundle_path) from e
        logger.debug("Opened archive bundle %s", self.bundle_path)

    def add(self, entry: FileEntry):
        """Write one entry (header and content) into the bundle"""
        if self._tar is None:
            self._open()

        arcname = archive_member_name(self.root, entry.path)
        try:
            info = self._tar.gettarinfo(entry.path, arcname=arcname)
        except OSError as e:
            raise ArchiveError(f"Cannot read {entry.path}: {e}", entry.path) from e

        try:
            if info.isreg():
                with open(entry.path, "rb") as src:
                    self._tar.addfile(info, src)
            else:
                self._tar.addfile(info)
        except (OSError, tarfile.TarError) as e:
            raise ArchiveError(f"Cannot archive {entry.path}: {e}", entry.path) from e

        self.added += 1
        logger.debug("Archived %s as %s", entry.path, arcname)

    def close(self):
        """Flush and close the tar and compression layers, then the bundle file"""
        if self._tar is None:
            return
        tar, raw = self._tar, self._file
        self._tar = None
        self._file = None
        try:
            try:
                tar.close()
            finally:
                raw.close()
        except OSError as e:
            raise ArchiveError(f"Cannot finish archive {self.bundle_path}: {e}", self.bundle_path) from e
        logger.debug("Closed archive bundle %s (%d entries)", self.bundle_path, self.added)
