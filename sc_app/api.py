"""Stable application-layer API surface."""

from sc_app.models import (
    CommandType,
    ConfigFile,
    ConnectSpec,
    FileTransferSpec,
    Instance,
    InstanceState,
    PortForwardSpec,
    Profile,
    StoredCommand,
    TransferDirection,
    TransferRequest,
)
from sc_app.services.aws_service import AwsCliService
from sc_app.services.command_builder import build_command, render_command
from sc_app.services.config_service import ConfigService
from sc_app.services.doctor_service import (
    DoctorCheckGroup,
    DoctorCheckItem,
    DoctorReport,
    DoctorService,
)
from sc_app.services.session_runner import SessionRunner

__all__ = [
    "AwsCliService",
    "ConfigService",
    "DoctorService",
    "DoctorCheckGroup",
    "DoctorCheckItem",
    "DoctorReport",
    "SessionRunner",
    "build_command",
    "render_command",
    "CommandType",
    "ConfigFile",
    "ConnectSpec",
    "FileTransferSpec",
    "PortForwardSpec",
    "Instance",
    "InstanceState",
    "Profile",
    "StoredCommand",
    "TransferDirection",
    "TransferRequest",
]
