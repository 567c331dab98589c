#!/usr/bin/env python3
"""
Persistent statistics for Peripatos

Keeps running totals across invocations in the ``peripatos`` section of the
shared kosmos configuration.
"""

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Optional

from kosmos_config import SharedConfigManager

TOOL_NAME = "peripatos"


@dataclass
class PeripatosStats:
    """Totals over all recorded runs"""

    total_runs: int = 0
    deleted_files: int = 0
    archived_files: int = 0
    reclaimed_bytes: int = 0
    last_run: Optional[str] = None

    def record_run(self, deleted: int = 0, archived: int = 0, reclaimed_bytes: int = 0):
        """Add one run's outcome and stamp the run time"""
        self.total_runs += 1
        self.deleted_files += deleted
        self.archived_files += archived
        self.reclaimed_bytes += reclaimed_bytes
        self.last_run = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "PeripatosStats":
        return cls(
            total_runs=int(data.get("total_runs", 0)),
            deleted_files=int(data.get("deleted_files", 0)),
            archived_files=int(data.get("archived_files", 0)),
            reclaimed_bytes=int(data.get("reclaimed_bytes", 0)),
            last_run=data.get("last_run"),
        )


class StatsStore:
    """Reads and writes PeripatosStats through the shared config manager"""

    def __init__(self, manager: Optional[SharedConfigManager] = None):
        self.manager = manager or SharedConfigManager()

    def load(self) -> PeripatosStats:
        section = self.manager.load().get_tool_config(TOOL_NAME)
        try:
            return PeripatosStats.from_dict(section.get("stats", {}))
        except (AttributeError, TypeError, ValueError):
            return PeripatosStats()

    def save(self, stats: PeripatosStats):
        config = self.manager.load()
        section = dict(config.get_tool_config(TOOL_NAME))
        section["stats"] = stats.to_dict()
        config.set_tool_config(TOOL_NAME, section)
        self.manager.save(config)
