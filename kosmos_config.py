#!/usr/bin/env python3
"""
Kosmos Configuration Manager

Shared configuration store for the kosmos tools. Every tool owns one
top-level section of ``config.json`` inside the .kosmos directory, which is
``$KOSMOS_HOME`` when set and ``~/.kosmos`` otherwise.
"""

import json
import os
import pathlib
import tempfile
from dataclasses import dataclass, field
from typing import Optional

CONFIG_VERSION = "1.0"


@dataclass
class KosmosConfig:
    """Version plus one settings section per tool"""

    version: str = CONFIG_VERSION
    tools: dict[str, dict] = field(default_factory=dict)

    def get_tool_config(self, tool_name: str) -> dict:
        return self.tools.get(tool_name, {})

    def set_tool_config(self, tool_name: str, config: dict):
        self.tools[tool_name] = config

    def to_dict(self) -> dict:
        """Flatten to the on-disk layout: tool sections sit next to the version"""
        data: dict = {"version": self.version}
        data.update(self.tools)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "KosmosConfig":
        tools = {name: section for name, section in data.items() if isinstance(section, dict)}
        return cls(version=str(data.get("version", CONFIG_VERSION)), tools=tools)


def default_kosmos_dir() -> pathlib.Path:
    override = os.environ.get("KOSMOS_HOME")
    if override:
        return pathlib.Path(override)
    return pathlib.Path.home() / ".kosmos"


class SharedConfigManager:
    """Loads and saves the shared kosmos configuration file"""

    def __init__(self, kosmos_dir: Optional[pathlib.Path] = None):
        self.kosmos_dir = kosmos_dir or default_kosmos_dir()
        self.config_file = self.kosmos_dir / "config.json"
        self.kosmos_dir.mkdir(parents=True, exist_ok=True)

    def load(self) -> KosmosConfig:
        """Load the configuration; a missing or unreadable file yields defaults"""
        if not self.config_file.exists():
            return KosmosConfig()
        try:
            with self.config_file.open(encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError:
            return KosmosConfig()
        if not isinstance(data, dict):
            return KosmosConfig()
        return KosmosConfig.from_dict(data)

    def save(self, config: KosmosConfig):
        """Write the configuration through a temporary file so readers never see half a file"""
        fd, tmp_name = tempfile.mkstemp(dir=self.kosmos_dir, prefix=".config-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(config.to_dict(), f, indent=2)
            os.replace(tmp_name, self.config_file)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
