"""Domain models for ssm-commander."""

from sc_app.models.aws import Instance, InstanceState, Profile
from sc_app.models.commands import (
    CommandSpec,
    CommandType,
    ConnectSpec,
    FileTransferSpec,
    PortForwardSpec,
    StoredCommand,
    TransferDirection,
    TransferRequest,
)
from sc_app.models.config import CONFIG_VERSION, ConfigFile

__all__ = [
    "Profile",
    "Instance",
    "InstanceState",
    "CommandType",
    "CommandSpec",
    "ConnectSpec",
    "PortForwardSpec",
    "FileTransferSpec",
    "StoredCommand",
    "TransferDirection",
    "TransferRequest",
    "ConfigFile",
    "CONFIG_VERSION",
]
