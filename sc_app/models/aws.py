"""Models for AWS CLI profiles and EC2 instances."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class InstanceState(str, Enum):
    """EC2 instance lifecycle states as reported by describe-instances."""

    PENDING = "pending"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting-down"
    TERMINATED = "terminated"
    STOPPING = "stopping"
    STOPPED = "stopped"


class Profile(BaseModel):
    """An AWS CLI profile resolved through ``aws configure``."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(description="Profile name as listed by `aws configure list-profiles`")
    region: Optional[str] = Field(default=None, description="Region configured for the profile")
    version: Optional[int] = Field(default=None, alias="Version")
    access_key_id: Optional[str] = Field(default=None, alias="AccessKeyId", repr=False)
    secret_access_key: Optional[str] = Field(default=None, alias="SecretAccessKey", repr=False)
    session_token: Optional[str] = Field(default=None, alias="SessionToken", repr=False)
    expiration: Optional[str] = Field(default=None, alias="Expiration")


class Instance(BaseModel):
    """Subset of EC2 instance attributes shown in the instance picker."""

    model_config = ConfigDict(populate_by_name=True)

    instance_id: str = Field(alias="InstanceId")
    instance_type: str = Field(default="", alias="InstanceType")
    private_ip_address: Optional[str] = Field(default=None, alias="PrivateIpAddress")
    public_ip_address: Optional[str] = Field(default=None, alias="PublicIpAddress")
    state: InstanceState = Field(default=InstanceState.PENDING, alias="State")
    name: Optional[str] = Field(default=None, alias="Name")

    def as_record(self) -> dict[str, Any]:
        """Return the record shape rendered by the instance table."""
        return {
            "Name": self.name,
            "InstanceId": self.instance_id,
            "InstanceType": self.instance_type,
            "PrivateIpAddress": self.private_ip_address,
            "PublicIpAddress": self.public_ip_address,
            "State": self.state.value,
        }
