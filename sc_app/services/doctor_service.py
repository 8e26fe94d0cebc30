"""
Service for checking local prerequisites (doctor).
"""

import platform
import shutil
from dataclasses import dataclass, field
from typing import List, Optional

from sc_app.services.aws_service import AwsCliService
from sc_app.services.config_service import ConfigService
from sc_common.errors import AwsCliError, ConfigurationError


@dataclass
class DoctorCheckItem:
    label: str
    ok: bool
    required: bool
    detail: str = ""


@dataclass
class DoctorCheckGroup:
    title: str
    items: List[DoctorCheckItem]

    @property
    def failures(self) -> int:
        return sum(1 for item in self.items if item.required and not item.ok)


@dataclass
class DoctorReport:
    groups: List[DoctorCheckGroup]
    info_messages: List[str] = field(default_factory=list)

    @property
    def total_failures(self) -> int:
        return sum(group.failures for group in self.groups)


class DoctorService:
    """Check the tools ssm-commander shells out to."""

    def __init__(
        self,
        aws_service: Optional[AwsCliService] = None,
        config_service: Optional[ConfigService] = None,
    ):
        self.aws_service = aws_service or AwsCliService()
        self.config_service = config_service or ConfigService()

    def _which(self, name: str) -> str:
        return shutil.which(name) or ""

    def _binary_item(self, label: str, binary: str, check, required: bool = True) -> DoctorCheckItem:
        try:
            check()
        except AwsCliError as exc:
            return DoctorCheckItem(label, False, required, str(exc))
        return DoctorCheckItem(label, True, required, self._which(binary))

    def check_tools(self) -> DoctorReport:
        """Check AWS CLI, session-manager-plugin and scp."""
        aws = self.aws_service
        scp_path = self._which("scp")
        group = DoctorCheckGroup(
            "Required Tools",
            [
                self._binary_item("aws (AWS CLI)", aws.aws_binary, aws.ensure_installed),
                self._binary_item(
                    "session-manager-plugin", aws.plugin_binary, aws.ensure_session_manager_plugin
                ),
                DoctorCheckItem(
                    "scp (file transfer)",
                    bool(scp_path),
                    False,
                    scp_path or "needed only for file-transfer commands",
                ),
            ],
        )
        return DoctorReport(groups=[group])

    def check_config(self) -> DoctorReport:
        """Check the command store without creating it."""
        path = self.config_service.config_path
        if not path.exists():
            item = DoctorCheckItem("Store readable", True, True, f"{path} (not created yet)")
            return DoctorReport(
                groups=[DoctorCheckGroup("Command Store", [item])],
                info_messages=[f"Command store not created yet: {path}"],
            )
        try:
            commands = self.config_service.list_commands()
        except ConfigurationError as exc:
            item = DoctorCheckItem("Store readable", False, True, str(exc))
            return DoctorReport(groups=[DoctorCheckGroup("Command Store", [item])])
        item = DoctorCheckItem("Store readable", True, True, str(path))
        return DoctorReport(
            groups=[DoctorCheckGroup("Command Store", [item])],
            info_messages=[f"{len(commands)} stored command(s) in {path}"],
        )

    def check_all(self) -> DoctorReport:
        """Run all checks."""
        tools = self.check_tools()
        store = self.check_config()
        info = (
            f"Python: {platform.python_version()} ({platform.python_implementation()}) "
            f"on {platform.system()} {platform.release()}"
        )
        return DoctorReport(
            groups=tools.groups + store.groups,
            info_messages=[info] + tools.info_messages + store.info_messages,
        )
