"""Workflow for re-running a stored command."""

from __future__ import annotations

from enum import Enum
from typing import Optional

import structlog
from pydantic import ValidationError

from sc_app.api import (
    AwsCliService,
    CommandType,
    ConfigService,
    SessionRunner,
    StoredCommand,
    TransferDirection,
    TransferRequest,
    build_command,
    render_command,
)
from sc_ui.flows.errors import UIFlowError
from sc_ui.flows.selection import select_from_strings, select_stored_command
from sc_ui.presenters.commands import show_command
from sc_ui.tui.system.protocols import UI

logger = structlog.get_logger(__name__)


def ask_transfer(ui: UI) -> TransferRequest:
    """Ask which way to copy and which paths to use for this run."""
    direction = select_from_strings(
        ui,
        "Select transfer direction",
        [d.value for d in TransferDirection],
        "transfer direction",
    )
    local_path = ui.form.ask("Local path").strip()
    remote_path = ui.form.ask("Remote path").strip()
    try:
        return TransferRequest(
            direction=TransferDirection(direction),
            local_path=local_path,
            remote_path=remote_path,
        )
    except ValidationError as exc:
        raise UIFlowError("Local and remote paths are required.") from exc


def resolve_command(ui: UI, config_service: ConfigService, name: Optional[str]) -> StoredCommand:
    if name is not None:
        return config_service.get_command(name)
    commands = config_service.list_commands()
    if not commands:
        raise UIFlowError("No stored commands. Create one with 'ssmc create'.")
    return select_stored_command(ui, commands)


def run_stored_command(
    ui: UI,
    aws: AwsCliService,
    config_service: ConfigService,
    runner: SessionRunner,
    *,
    name: Optional[str] = None,
    dry_run: bool = False,
) -> int:
    """Resolve and execute a stored command; returns the child's exit code."""
    command = resolve_command(ui, config_service, name)
    show_command(ui, command)
    return execute_command(ui, aws, runner, command, dry_run=dry_run)


def execute_command(
    ui: UI,
    aws: AwsCliService,
    runner: SessionRunner,
    command: StoredCommand,
    *,
    dry_run: bool = False,
) -> int:
    """Build the argv for ``command`` and run it, or only print it."""
    transfer = ask_transfer(ui) if command.command_type is CommandType.FILE_TRANSFER else None
    argv = build_command(command, transfer)
    rendered = render_command(argv)

    if dry_run:
        ui.present.info(rendered)
        return 0

    aws.ensure_installed()
    aws.ensure_session_manager_plugin()
    ui.present.info(f"Running '{command.name}': {rendered}")
    logger.info("run_command", name=command.name, kind=command.command_type.value)
    return runner.run(argv)


class CommandAction(str, Enum):
    RUN = "Run"
    DELETE = "Delete"


def manage_stored_commands(
    ui: UI,
    aws: AwsCliService,
    config_service: ConfigService,
    runner: SessionRunner,
) -> int:
    """Pick a stored command, then run or delete it."""
    commands = config_service.list_commands()
    if not commands:
        raise UIFlowError("No stored commands. Create one with 'ssmc create'.")
    command = select_stored_command(ui, commands, "Select a stored command")
    show_command(ui, command)
    action = select_from_strings(
        ui,
        "What would you like to do with this command?",
        [a.value for a in CommandAction],
        "action",
    )
    if CommandAction(action) is CommandAction.DELETE:
        config_service.remove_command(command.name)
        ui.present.success(f"Deleted command '{command.name}'.")
        return 0
    return execute_command(ui, aws, runner, command)
