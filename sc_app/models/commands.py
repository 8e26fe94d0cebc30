"""Stored SSM command models.

Each command kind carries its own payload; ``kind`` is the discriminator so the
JSON store round-trips into the right model.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class CommandType(str, Enum):
    CONNECT = "connect"
    PORT_FORWARD = "port-forward"
    FILE_TRANSFER = "file-transfer"


class ConnectSpec(BaseModel):
    """Interactive shell on the instance."""

    kind: Literal["connect"] = "connect"


class PortForwardSpec(BaseModel):
    """Forward a local port to the instance, or through it to a remote host."""

    kind: Literal["port-forward"] = "port-forward"
    local_port: int = Field(gt=0, le=65535, description="Port opened on this machine")
    remote_port: int = Field(gt=0, le=65535, description="Port on the instance or remote host")
    remote_host: Optional[str] = Field(
        default=None,
        description="Host reached through the instance; None forwards to the instance itself",
    )

    @field_validator("remote_host")
    @classmethod
    def _blank_host_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


class FileTransferSpec(BaseModel):
    """SCP over an SSM-tunnelled SSH session. Paths are asked at run time."""

    kind: Literal["file-transfer"] = "file-transfer"
    ssh_user: str = Field(default="ec2-user", min_length=1)
    ssh_port: int = Field(default=22, gt=0, le=65535)
    identity_file: Optional[Path] = Field(default=None, description="Private key passed to scp -i")


CommandSpec = Annotated[
    Union[ConnectSpec, PortForwardSpec, FileTransferSpec],
    Field(discriminator="kind"),
]


class StoredCommand(BaseModel):
    """A named, re-runnable SSM command."""

    name: str = Field(min_length=1)
    profile: str
    region: str
    instance_id: str
    instance_name: Optional[str] = None
    spec: CommandSpec
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def command_type(self) -> CommandType:
        return CommandType(self.spec.kind)

    @property
    def target_label(self) -> str:
        if self.instance_name:
            return f"{self.instance_name} ({self.instance_id})"
        return self.instance_id


class TransferDirection(str, Enum):
    UPLOAD = "upload"
    DOWNLOAD = "download"


class TransferRequest(BaseModel):
    """Run-time half of a file transfer: which way and which paths."""

    direction: TransferDirection
    local_path: str = Field(min_length=1)
    remote_path: str = Field(min_length=1)
