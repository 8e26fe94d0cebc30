"""Workflow for interactively creating a stored SSM command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, TypeVar

from pydantic import ValidationError

from sc_app.api import (
    AwsCliService,
    CommandType,
    ConfigService,
    ConnectSpec,
    FileTransferSpec,
    PortForwardSpec,
    Instance,
    Profile,
    StoredCommand,
)
from sc_common.api import InvalidProfileError
from sc_ui.flows.errors import UIFlowError
from sc_ui.flows.selection import (
    select_command_type,
    select_instance,
    select_profile,
    select_region,
)
from sc_ui.presenters.commands import show_command
from sc_ui.tui.system.protocols import UI

T = TypeVar("T")

MAX_ATTEMPTS = 3


@dataclass
class CreateOutcome:
    """What the wizard built and what the user chose to do with it."""

    command: StoredCommand
    saved: bool
    run_now: bool


def _ask_validated(
    ui: UI,
    prompt: str,
    parse: Callable[[str], T],
    *,
    default: Optional[str] = None,
    description: Optional[str] = None,
) -> T:
    """Ask until ``parse`` accepts the answer, giving up after ``MAX_ATTEMPTS``."""
    for _ in range(MAX_ATTEMPTS):
        raw = ui.form.ask(prompt, default=default, description=description)
        try:
            return parse(raw.strip())
        except ValueError as exc:
            ui.present.warning(str(exc))
    raise UIFlowError(f"Too many invalid answers for '{prompt}'.")


def parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"'{raw}' is not a number.") from None
    if not 0 < port <= 65535:
        raise ValueError("Port must be between 1 and 65535.")
    return port


def _choose_profile(ui: UI, aws: AwsCliService, profile: Optional[str]) -> str:
    with ui.progress.status("Loading AWS CLI profiles"):
        profiles = aws.list_profiles()
    if not profiles:
        raise UIFlowError("No AWS CLI profiles configured. Run 'aws configure' first.")
    if profile is None:
        return select_profile(ui, profiles)
    if profile not in profiles:
        raise InvalidProfileError(
            f"Unknown AWS CLI profile: {profile}", context={"profile": profile}
        )
    return profile


def _choose_region(
    ui: UI,
    aws: AwsCliService,
    profile: Profile,
    region: Optional[str],
) -> str:
    regions = aws.list_regions()
    if region is not None:
        if region not in regions:
            raise UIFlowError(f"Unknown AWS region: {region}")
        return region
    if profile.region:
        ui.present.info(f"Using region {profile.region} from profile {profile.name}.")
        return profile.region
    return select_region(ui, regions)


def default_command_name(profile: str, command_type: CommandType, instance: Instance) -> str:
    return f"{profile}-{command_type.value}-{instance.name or instance.instance_id}"


def _ask_name(
    ui: UI,
    config_service: ConfigService,
    name: Optional[str],
    suggestion: Optional[str] = None,
) -> str:
    def parse(raw: str) -> str:
        if not raw:
            raise ValueError("Name cannot be empty.")
        if config_service.command_name_exists(raw):
            raise ValueError(f"A command named '{raw}' already exists.")
        return raw

    if name is not None:
        try:
            return parse(name.strip())
        except ValueError as exc:
            raise UIFlowError(str(exc)) from exc
    if suggestion and config_service.command_name_exists(suggestion):
        suggestion = None
    return _ask_validated(ui, "Command name", parse, default=suggestion)


def ask_port_forward(ui: UI) -> PortForwardSpec:
    remote_port = _ask_validated(
        ui,
        "Remote port",
        parse_port,
        description="Port of the service on the instance (or on the remote host).",
    )
    local_port = _ask_validated(
        ui,
        "Local port",
        parse_port,
        default=str(remote_port),
        description="Port opened on this machine.",
    )
    remote_host = ui.form.ask(
        "Remote host (blank for the instance itself)",
        default="",
        description="Use the instance as a bastion to reach another host.",
    )
    return PortForwardSpec(
        local_port=local_port,
        remote_port=remote_port,
        remote_host=remote_host or None,
    )


def ask_file_transfer(ui: UI) -> FileTransferSpec:
    ssh_user = ui.form.ask("SSH user", default="ec2-user").strip() or "ec2-user"
    ssh_port = _ask_validated(ui, "SSH port", parse_port, default="22")
    identity = ui.form.ask("SSH private key path (blank for agent/default)", default="").strip()
    return FileTransferSpec(
        ssh_user=ssh_user,
        ssh_port=ssh_port,
        identity_file=Path(identity) if identity else None,
    )


def _ask_spec(ui: UI, command_type: CommandType):
    if command_type is CommandType.PORT_FORWARD:
        return ask_port_forward(ui)
    if command_type is CommandType.FILE_TRANSFER:
        return ask_file_transfer(ui)
    return ConnectSpec()


def run_create_wizard(
    ui: UI,
    aws: AwsCliService,
    config_service: ConfigService,
    *,
    profile: Optional[str] = None,
    region: Optional[str] = None,
    name: Optional[str] = None,
) -> CreateOutcome:
    """Walk the user through building a command, then save and/or run it."""
    aws.ensure_installed()

    chosen_profile = _choose_profile(ui, aws, profile)
    with ui.progress.status(f"Validating profile {chosen_profile}"):
        resolved = aws.get_profile(chosen_profile)
    chosen_region = _choose_region(ui, aws, resolved, region)

    command_type = select_command_type(ui)

    with ui.progress.status(f"Listing EC2 instances in {chosen_region}"):
        instances = aws.list_instances(chosen_profile, chosen_region)
    if not instances:
        raise UIFlowError(f"No EC2 instances found in {chosen_region} for {chosen_profile}.")
    instance = select_instance(ui, instances)

    spec = _ask_spec(ui, command_type)
    command_name = _ask_name(
        ui,
        config_service,
        name,
        suggestion=default_command_name(chosen_profile, command_type, instance),
    )

    try:
        command = StoredCommand(
            name=command_name,
            profile=chosen_profile,
            region=chosen_region,
            instance_id=instance.instance_id,
            instance_name=instance.name,
            spec=spec,
        )
    except ValidationError as exc:
        raise UIFlowError(f"Invalid command: {exc}") from exc
    show_command(ui, command, title="Review your new SSM command")
    saved = ui.form.confirm("Save this command?", default=True)
    if saved:
        config_service.add_command(command)
        ui.present.success(f"Saved command '{command.name}'.")
    else:
        ui.present.warning("Command not saved.")
    run_now = ui.form.confirm("Execute this command now?", default=True)
    return CreateOutcome(command=command, saved=saved, run_now=run_now)
