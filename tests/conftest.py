"""Pytest bootstrap and shared fixtures.

The ``pytest`` console script can run with a sys.path that excludes the
repository root. Ensure the top-level modules resolve to the local copies.
"""

import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PROJECT_ROOT_STR = str(PROJECT_ROOT)

if PROJECT_ROOT_STR not in sys.path:
    sys.path.insert(0, PROJECT_ROOT_STR)


@pytest.fixture
def testdata(tmp_path, monkeypatch):
    """The reference tree, walked as the relative root 'testdata'"""
    root = tmp_path / "testdata"
    (root / "dir2").mkdir(parents=True)
    (root / "dir.log").write_text("Log file 1\n")
    (root / "dir2" / "script.sh").write_text("#!/bin/sh\necho hello\n")
    (root / "log.gz").write_bytes(b"\x1f\x8b fake gzip")
    monkeypatch.chdir(tmp_path)
    return "testdata"


@pytest.fixture
def make_tree(tmp_path):
    """Build a flat directory of dummy files: {extension: count}"""

    def _make(files: dict, name: str = "walktest") -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        for ext, count in files.items():
            for i in range(1, count + 1):
                (root / f"file{i}{ext}").write_text("dummy")
        return root

    return _make


UNDECODABLE_NAME = b"bad\xff.log"


@pytest.fixture
def undecodable_tree(tmp_path):
    """A directory holding one file whose name is not valid UTF-8"""
    root = tmp_path / "rawnames"
    root.mkdir()
    target = os.path.join(str(root), os.fsdecode(UNDECODABLE_NAME))
    try:
        with open(target, "w") as f:
            f.write("dummy")
    except (OSError, UnicodeError):
        pytest.skip("file system does not accept non-UTF-8 file names")
    return root
