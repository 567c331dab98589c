#!/usr/bin/env python3
"""
Configuration for a single peripatos run

Describes which files to pick (extension, minimum size) and what to do with
them (list, archive, delete). Built once by the caller and never mutated.
"""

from dataclasses import dataclass
from typing import Optional, TextIO

from walk_errors import ConfigError


@dataclass(frozen=True)
class WalkConfig:
    """Immutable description of one walk"""

    ext: str = ""
    min_size: int = 0
    list_files: bool = False
    delete: bool = False
    archive_dir: str = ""
    log_sink: Optional[TextIO] = None

    def __post_init__(self):
        if self.min_size < 0:
            raise ConfigError(f"Minimum size must not be negative (got {self.min_size})")

    @property
    def requested_actions(self) -> list[str]:
        """Action flags that are set, in the order they take priority"""
        actions = []
        if self.list_files:
            actions.append("list")
        if self.archive_dir:
            actions.append("archive")
        if self.delete:
            actions.append("delete")
        return actions

    def validate_exclusive(self):
        """Reject configurations that request more than one action"""
        actions = self.requested_actions
        if len(actions) > 1:
            raise ConfigError(f"Only one action may be requested, got: {', '.join(actions)}")
