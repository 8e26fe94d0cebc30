"""Persist and query stored SSM commands."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from sc_app.models.commands import StoredCommand
from sc_app.models.config import CONFIG_VERSION, ConfigFile
from sc_common.errors import (
    CommandNotFoundError,
    ConfigurationError,
    DuplicateCommandError,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = ".ssm-commander"
DEFAULT_CONFIG_NAME = "config.json"
CONFIG_PATH_ENV = "SSMC_CONFIG_PATH"


class ConfigService:
    """Read and mutate the JSON command store."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        env_path = os.environ.get(CONFIG_PATH_ENV)
        if config_path is not None:
            self.config_path = Path(config_path).expanduser()
        elif env_path:
            self.config_path = Path(env_path).expanduser()
        else:
            self.config_path = Path.home() / DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_NAME

    def ensure_home(self) -> None:
        """Create the directory holding the store."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

    def write(self, content: ConfigFile) -> None:
        self.ensure_home()
        content.save(self.config_path)

    def read(self) -> ConfigFile:
        """Load the store, creating an empty one on first use."""
        if not self.config_path.exists():
            empty = ConfigFile(version=CONFIG_VERSION, commands=[])
            self.write(empty)
            logger.info("Created empty command store at %s", self.config_path)
            return empty

        try:
            content = ConfigFile.load(self.config_path)
        except (OSError, UnicodeDecodeError, ValidationError) as exc:
            raise ConfigurationError(
                f"Unable to read command store {self.config_path}",
                context={"path": self.config_path},
                cause=exc,
            ) from exc

        if content.version != CONFIG_VERSION:
            raise ConfigurationError(
                f"Unsupported command store version {content.version} (expected {CONFIG_VERSION})",
                context={"path": self.config_path, "version": content.version},
            )
        return content

    def list_commands(self) -> List[StoredCommand]:
        return list(self.read().commands)

    def command_name_exists(self, name: str) -> bool:
        return any(command.name == name for command in self.read().commands)

    def get_command(self, name: str) -> StoredCommand:
        for command in self.read().commands:
            if command.name == name:
                return command
        raise CommandNotFoundError(f'Command "{name}" not found.', context={"name": name})

    def add_command(self, command: StoredCommand) -> None:
        content = self.read()
        if any(existing.name == command.name for existing in content.commands):
            raise DuplicateCommandError(
                f'Command "{command.name}" already exists.', context={"name": command.name}
            )
        content.commands.append(command)
        self.write(content)
        logger.info("Stored command %s", command.name)

    def remove_command(self, name: str) -> StoredCommand:
        content = self.read()
        for idx, command in enumerate(content.commands):
            if command.name == name:
                removed = content.commands.pop(idx)
                self.write(content)
                logger.info("Removed command %s", name)
                return removed
        raise CommandNotFoundError(f'Command "{name}" not found.', context={"name": name})
