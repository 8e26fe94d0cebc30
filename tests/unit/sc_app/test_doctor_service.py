import pytest

from sc_app.api import AwsCliService, DoctorService
from sc_app.services import doctor_service as doctor_module
from sc_common.api import AwsCliNotInstalledError

pytestmark = pytest.mark.unit_app


class _Aws(AwsCliService):
    def __init__(self, aws_ok=True, plugin_ok=True):
        super().__init__()
        self.aws_ok = aws_ok
        self.plugin_ok = plugin_ok

    def ensure_installed(self):
        if not self.aws_ok:
            raise AwsCliNotInstalledError("missing aws")

    def ensure_session_manager_plugin(self):
        if not self.plugin_ok:
            raise AwsCliNotInstalledError("missing plugin")


@pytest.fixture
def all_on_path(monkeypatch):
    monkeypatch.setattr(doctor_module.shutil, "which", lambda name: "/bin/" + name)


def test_all_tools_present(all_on_path, config_service):
    report = DoctorService(_Aws(), config_service).check_tools()

    assert report.total_failures == 0
    items = report.groups[0].items
    assert [item.label for item in items] == [
        "aws (AWS CLI)",
        "session-manager-plugin",
        "scp (file transfer)",
    ]
    assert [item.detail for item in items] == ["/bin/aws", "/bin/session-manager-plugin", "/bin/scp"]


def test_missing_scp_is_optional(monkeypatch, config_service):
    monkeypatch.setattr(doctor_module.shutil, "which", lambda name: None)

    report = DoctorService(_Aws(), config_service).check_tools()

    assert report.total_failures == 0
    assert report.groups[0].items[2].ok is False


def test_missing_plugin_is_a_failure_with_reason(all_on_path, config_service):
    report = DoctorService(_Aws(plugin_ok=False), config_service).check_tools()

    assert report.total_failures == 1
    assert report.groups[0].items[1].detail == "missing plugin"


def test_missing_store_is_not_created(config_service):
    report = DoctorService(_Aws(), config_service).check_config()

    assert not config_service.config_path.exists()
    assert report.total_failures == 0
    assert report.info_messages == [f"Command store not created yet: {config_service.config_path}"]


def test_existing_store_is_counted(config_service, make_command):
    config_service.add_command(make_command("web"))

    report = DoctorService(_Aws(), config_service).check_config()

    assert report.total_failures == 0
    assert report.info_messages == [f"1 stored command(s) in {config_service.config_path}"]


def test_unreadable_store_is_a_failure(config_service):
    config_service.ensure_home()
    config_service.config_path.write_bytes(b'{"version": "1.0", "commands": [\xff]}')

    report = DoctorService(_Aws(), config_service).check_config()

    assert report.total_failures == 1
    assert "Unable to read command store" in report.groups[0].items[0].detail


def test_check_all_combines_groups(all_on_path, config_service):
    report = DoctorService(_Aws(aws_ok=False), config_service).check_all()

    assert [group.title for group in report.groups] == ["Required Tools", "Command Store"]
    assert report.total_failures == 1
    assert report.info_messages[0].startswith("Python: ")
