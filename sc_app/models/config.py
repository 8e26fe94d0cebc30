"""On-disk shape of the command store."""

from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field

from sc_app.models.commands import StoredCommand

# Bump when ConfigFile changes shape.
CONFIG_VERSION = "1.0"


class ConfigFile(BaseModel):
    version: str = Field(default=CONFIG_VERSION)
    commands: List[StoredCommand] = Field(default_factory=list)

    def save(self, filepath: Path) -> None:
        filepath.write_text(self.model_dump_json(indent=2))

    @classmethod
    def load(cls, filepath: Path) -> "ConfigFile":
        return cls.model_validate_json(filepath.read_text())
