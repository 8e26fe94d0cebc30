"""Presenters for stored commands."""

from __future__ import annotations

from typing import Sequence

from sc_app.api import ConnectSpec, FileTransferSpec, PortForwardSpec, StoredCommand
from sc_ui.tui.core import theme
from sc_ui.tui.system.models import TableModel
from sc_ui.tui.system.protocols import UI


def describe_spec(command: StoredCommand) -> str:
    """One-line summary of the kind-specific settings."""
    spec = command.spec
    if isinstance(spec, PortForwardSpec):
        target = spec.remote_host or "instance"
        return f"localhost:{spec.local_port} -> {target}:{spec.remote_port}"
    if isinstance(spec, FileTransferSpec):
        key = f", key {spec.identity_file}" if spec.identity_file else ""
        return f"scp as {spec.ssh_user} on port {spec.ssh_port}{key}"
    if isinstance(spec, ConnectSpec):
        return "shell session"
    return ""


def build_commands_table(commands: Sequence[StoredCommand]) -> TableModel:
    rows = [
        [
            command.name,
            theme.command_type_text(command.command_type.value),
            command.profile,
            command.region,
            command.target_label,
            describe_spec(command),
        ]
        for command in commands
    ]
    return TableModel(
        title="Stored SSM commands",
        columns=["Name", "Type", "Profile", "Region", "Target", "Details"],
        rows=rows,
    )


def describe_command(command: StoredCommand) -> str:
    """Multi-line summary shown before saving or acting on a command."""
    lines = [
        ("Name", command.name),
        ("Type", theme.command_type_text(command.command_type.value)),
        ("Profile", command.profile),
        ("Region", command.region),
        ("Target", command.target_label),
        ("Details", describe_spec(command)),
    ]
    return "\n".join(f"{label + ':':<9}{value}" for label, value in lines)


def show_command(ui: UI, command: StoredCommand, title: str = "SSM command") -> None:
    ui.present.panel(describe_command(command), title=title)
