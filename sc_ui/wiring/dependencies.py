from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sc_app.api import AwsCliService, ConfigService, DoctorService, SessionRunner
from sc_common.api import configure_logging
from sc_ui.tui.system.facade import TUI
from sc_ui.tui.system.protocols import UI


@dataclass
class UIContext:
    """Container for UI services and state, initialized lazily.

    One context lives for the whole process, so the AWS service memoizes its
    binary checks across commands.
    """

    headless: bool = False

    _ui: Optional[UI] = None
    _aws_service: Optional[AwsCliService] = None
    _config_service: Optional[ConfigService] = None
    _doctor_service: Optional[DoctorService] = None
    _session_runner: Optional[SessionRunner] = None

    @property
    def ui(self) -> UI:
        if self._ui is None:
            if self.headless:
                from sc_ui.tui.system.headless import HeadlessUI

                self._ui = HeadlessUI()
            else:
                self._ui = TUI()
        return self._ui

    @ui.setter
    def ui(self, value: UI):
        self._ui = value

    @property
    def aws_service(self) -> AwsCliService:
        if self._aws_service is None:
            self._aws_service = AwsCliService()
        return self._aws_service

    @aws_service.setter
    def aws_service(self, value: AwsCliService):
        self._aws_service = value

    @property
    def config_service(self) -> ConfigService:
        if self._config_service is None:
            self._config_service = ConfigService()
        return self._config_service

    @config_service.setter
    def config_service(self, value: ConfigService):
        self._config_service = value

    @property
    def doctor_service(self) -> DoctorService:
        if self._doctor_service is None:
            self._doctor_service = DoctorService(
                aws_service=self.aws_service,
                config_service=self.config_service,
            )
        return self._doctor_service

    @doctor_service.setter
    def doctor_service(self, value: DoctorService):
        self._doctor_service = value

    @property
    def session_runner(self) -> SessionRunner:
        if self._session_runner is None:
            self._session_runner = SessionRunner()
        return self._session_runner

    @session_runner.setter
    def session_runner(self, value: SessionRunner):
        self._session_runner = value


__all__ = [
    "UIContext",
    "configure_logging",
]
