"""Thin wrapper around the AWS CLI for profiles, regions and EC2 instances."""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError

from sc_app.models.aws import Instance, Profile
from sc_common.errors import AwsCliError, AwsCliNotInstalledError, InvalidProfileError

logger = logging.getLogger(__name__)

INSTANCE_QUERY = (
    "Reservations[].Instances[].{"
    "InstanceId: InstanceId, "
    "InstanceType: InstanceType, "
    "PrivateIpAddress: PrivateIpAddress, "
    "PublicIpAddress: PublicIpAddress, "
    "State: State.Name, "
    "Name: Tags[?Key=='Name'].Value | [0]}"
)

# https://docs.aws.amazon.com/AWSEC2/latest/UserGuide/using-regions-availability-zones.html#concepts-regions
AWS_REGIONS: tuple[str, ...] = (
    "us-east-2",
    "us-east-1",
    "us-west-1",
    "us-west-2",
    "af-south-1",
    "ap-east-1",
    "ap-south-2",
    "ap-southeast-3",
    "ap-southeast-4",
    "ap-south-1",
    "ap-northeast-3",
    "ap-northeast-2",
    "ap-southeast-1",
    "ap-southeast-2",
    "ap-northeast-1",
    "ca-central-1",
    "ca-west-1",
    "eu-central-1",
    "eu-west-1",
    "eu-west-2",
    "eu-south-1",
    "eu-west-3",
    "eu-south-2",
    "eu-north-1",
    "eu-central-2",
    "il-central-1",
    "me-south-1",
    "me-central-1",
    "sa-east-1",
)


class AwsCliService:
    """Run AWS CLI commands and parse their output.

    Binary checks are memoized on the instance, so a single service created at
    startup checks each tool at most once per process.
    """

    def __init__(self, aws_binary: str = "aws", plugin_binary: str = "session-manager-plugin") -> None:
        self.aws_binary = aws_binary
        self.plugin_binary = plugin_binary
        self._aws_checked = False
        self._plugin_checked = False

    def _binary_works(self, argv: Sequence[str]) -> bool:
        if shutil.which(argv[0]) is None:
            return False
        try:
            proc = subprocess.run(
                list(argv),
                check=False,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError:
            return False
        return proc.returncode == 0

    def ensure_installed(self) -> None:
        """Fail unless the AWS CLI answers ``aws --version``."""
        if self._aws_checked:
            return
        if not self._binary_works([self.aws_binary, "--version"]):
            raise AwsCliNotInstalledError(
                "AWS CLI is not installed. Please install AWS CLI and try again.",
                context={"binary": self.aws_binary},
            )
        self._aws_checked = True

    def ensure_session_manager_plugin(self) -> None:
        """Fail unless the session-manager-plugin binary runs."""
        if self._plugin_checked:
            return
        if not self._binary_works([self.plugin_binary]):
            raise AwsCliNotInstalledError(
                "session-manager-plugin is not installed. "
                "Please install session-manager-plugin and try again.",
                context={"binary": self.plugin_binary},
            )
        self._plugin_checked = True

    def _run(self, args: Sequence[str]) -> subprocess.CompletedProcess[str]:
        self.ensure_installed()
        cmd = [self.aws_binary, *args]
        logger.debug("Running %s", " ".join(cmd))
        return subprocess.run(cmd, capture_output=True, text=True, check=False)

    def _run_json(self, args: Sequence[str]) -> Any:
        proc = self._run(args)
        if proc.returncode != 0:
            raise AwsCliError(
                proc.stderr.strip() or f"aws {' '.join(args[:2])} failed",
                context={"args": list(args), "returncode": proc.returncode},
            )
        try:
            return json.loads(proc.stdout)
        except json.JSONDecodeError as exc:
            raise AwsCliError(
                "AWS CLI returned invalid JSON",
                context={"args": list(args)},
                cause=exc,
            ) from exc

    def list_profiles(self) -> List[str]:
        proc = self._run(["configure", "list-profiles"])
        text = proc.stdout.strip()
        if not text:
            return []
        return [line.strip() for line in text.splitlines() if line.strip()]

    def get_profile_region(self, name: str) -> Optional[str]:
        proc = self._run(["configure", "get", "region", "--profile", name])
        region = proc.stdout.strip()
        return region or None

    def get_profile(self, name: str) -> Profile:
        """Resolve a profile, proving it can export credentials."""
        try:
            payload = self._run_json(
                ["configure", "export-credentials", "--format", "process", "--profile", name]
            )
        except AwsCliError as exc:
            raise InvalidProfileError(
                f"Invalid AWS CLI profile {name}",
                context={"profile": name},
                cause=exc,
            ) from exc
        if not isinstance(payload, dict):
            raise InvalidProfileError(f"Invalid AWS CLI profile {name}", context={"profile": name})
        return Profile.model_validate(
            {**payload, "name": name, "region": self.get_profile_region(name)}
        )

    def list_instances(self, profile: str, region: Optional[str] = None) -> List[Instance]:
        """Return EC2 instances visible to the profile, sorted by Name."""
        args = [
            "ec2",
            "describe-instances",
            "--query",
            INSTANCE_QUERY,
            "--output",
            "json",
            "--no-cli-pager",
            "--profile",
            profile,
        ]
        if region:
            args.extend(["--region", region])
        payload = self._run_json(args)
        try:
            instances = [Instance.model_validate(item) for item in payload or []]
        except ValidationError as exc:
            raise AwsCliError(
                "Unexpected describe-instances output",
                context={"profile": profile, "region": region},
                cause=exc,
            ) from exc
        logger.info("Fetched %d instances for profile %s", len(instances), profile)
        return sorted(instances, key=lambda inst: inst.name or "")

    def list_regions(self) -> List[str]:
        return sorted(AWS_REGIONS)
