"""Build AWS CLI / scp argument vectors for stored commands."""

from __future__ import annotations

import shlex
from typing import List, Optional, Sequence

from sc_app.models.commands import (
    ConnectSpec,
    FileTransferSpec,
    PortForwardSpec,
    StoredCommand,
    TransferDirection,
    TransferRequest,
)
from sc_common.errors import ConfigurationError

PORT_FORWARD_DOCUMENT = "AWS-StartPortForwardingSession"
REMOTE_PORT_FORWARD_DOCUMENT = "AWS-StartPortForwardingSessionToRemoteHost"
SSH_DOCUMENT = "AWS-StartSSHSession"


def _session_scope(command: StoredCommand) -> List[str]:
    return ["--profile", command.profile, "--region", command.region]


def build_connect(command: StoredCommand) -> List[str]:
    return ["aws", "ssm", "start-session", "--target", command.instance_id, *_session_scope(command)]


def build_port_forward(command: StoredCommand, spec: PortForwardSpec) -> List[str]:
    if spec.remote_host:
        document = REMOTE_PORT_FORWARD_DOCUMENT
        parameters = (
            f"host={spec.remote_host},portNumber={spec.remote_port},"
            f"localPortNumber={spec.local_port}"
        )
    else:
        document = PORT_FORWARD_DOCUMENT
        parameters = f"portNumber={spec.remote_port},localPortNumber={spec.local_port}"
    return [
        "aws",
        "ssm",
        "start-session",
        "--target",
        command.instance_id,
        "--document-name",
        document,
        "--parameters",
        parameters,
        *_session_scope(command),
    ]


def build_proxy_command(command: StoredCommand) -> str:
    """ProxyCommand that tunnels SSH through an SSM session (%h/%p filled by ssh)."""
    return " ".join(
        [
            "aws ssm start-session --target %h",
            f"--document-name {SSH_DOCUMENT}",
            "--parameters portNumber=%p",
            f"--profile {shlex.quote(command.profile)}",
            f"--region {shlex.quote(command.region)}",
        ]
    )


def build_file_transfer(
    command: StoredCommand,
    spec: FileTransferSpec,
    request: TransferRequest,
) -> List[str]:
    remote = f"{spec.ssh_user}@{command.instance_id}:{request.remote_path}"
    if request.direction is TransferDirection.UPLOAD:
        source, destination = request.local_path, remote
    else:
        source, destination = remote, request.local_path

    argv = ["scp", "-P", str(spec.ssh_port)]
    if spec.identity_file is not None:
        argv.extend(["-i", str(spec.identity_file.expanduser())])
    argv.extend(["-o", f"ProxyCommand={build_proxy_command(command)}"])
    argv.extend([source, destination])
    return argv


def build_command(command: StoredCommand, transfer: Optional[TransferRequest] = None) -> List[str]:
    """Return the argv that executes ``command``.

    File transfers need a ``TransferRequest`` because paths are chosen per run.
    """
    spec = command.spec
    if isinstance(spec, ConnectSpec):
        return build_connect(command)
    if isinstance(spec, PortForwardSpec):
        return build_port_forward(command, spec)
    if isinstance(spec, FileTransferSpec):
        if transfer is None:
            raise ConfigurationError(
                "File transfer requires a direction and paths.",
                context={"name": command.name},
            )
        return build_file_transfer(command, spec, transfer)
    raise ConfigurationError(f"Unsupported command kind: {spec!r}", context={"name": command.name})


def render_command(argv: Sequence[str]) -> str:
    """Shell-quoted form of ``argv`` for display."""
    return shlex.join(argv)
