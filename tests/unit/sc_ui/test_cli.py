import logging

import pytest
from typer.testing import CliRunner

from sc_app.api import DoctorService, FileTransferSpec
from sc_ui.cli.main import app, ctx_store
from sc_ui.tui.system.headless import HeadlessUI

pytestmark = pytest.mark.unit_ui

runner = CliRunner()


@pytest.fixture
def cli(monkeypatch, fake_aws, fake_runner, config_service):
    """Point the global CLI context at headless fakes."""
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    ui = HeadlessUI()
    monkeypatch.setattr(ctx_store, "headless", False)
    monkeypatch.setattr(ctx_store, "_ui", ui)
    monkeypatch.setattr(ctx_store, "_aws_service", fake_aws)
    monkeypatch.setattr(ctx_store, "_config_service", config_service)
    monkeypatch.setattr(ctx_store, "_session_runner", fake_runner)
    monkeypatch.setattr(ctx_store, "_doctor_service", DoctorService(fake_aws, config_service))
    yield ui
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_no_arguments_prints_help():
    result = runner.invoke(app, [])

    assert "create" in result.output
    assert "doctor" in result.output


def test_list_without_commands(cli):
    result = runner.invoke(app, ["--headless", "list"])

    assert result.exit_code == 0
    assert "INFO: No stored commands. Create one with 'ssmc create'." in cli.recorded_messages


def test_list_shows_table(cli, config_service, make_command):
    config_service.add_command(make_command("web"))

    result = runner.invoke(app, ["list", "--plain"])

    assert result.exit_code == 0
    assert cli.recorded_searches == []
    table = cli.recorded_tables[0].model
    assert table.columns[0] == "Name"
    assert table.rows[0][0] == "web"


def test_list_headless_prints_table(cli, config_service, make_command):
    config_service.add_command(make_command("web"))

    result = runner.invoke(app, ["--headless", "list"])

    assert result.exit_code == 0
    assert cli.recorded_tables[0].model.rows[0][0] == "web"
    assert cli.recorded_searches == []


def test_list_picks_and_deletes(cli, config_service, make_command, fake_runner):
    config_service.add_command(make_command("web"))
    config_service.add_command(make_command("db", instance_id="i-0db"))
    cli.next_search_terms = ["i-0db", "Delete"]

    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0, result.output
    assert [s.message for s in cli.recorded_searches] == [
        "Select a stored command",
        "What would you like to do with this command?",
    ]
    assert any(m.startswith("PANEL: SSM command - Name:    db") for m in cli.recorded_messages)
    assert "SUCCESS: Deleted command 'db'." in cli.recorded_messages
    assert [c.name for c in config_service.list_commands()] == ["web"]
    assert fake_runner.argv is None


def test_list_picks_and_runs(cli, config_service, make_command, fake_runner):
    config_service.add_command(make_command("web"))
    cli.next_search_terms = ["web", "Run"]
    fake_runner.code = 4

    result = runner.invoke(app, ["list"])

    assert result.exit_code == 4
    assert fake_runner.argv[:3] == ["aws", "ssm", "start-session"]
    assert [c.name for c in config_service.list_commands()] == ["web"]


def test_create_stores_command(cli, config_service, fake_runner):
    cli.next_form_responses = ["shell"]

    result = runner.invoke(app, ["create", "--profile", "dev"])

    assert result.exit_code == 0, result.output
    assert config_service.get_command("shell").profile == "dev"
    assert fake_runner.argv[:3] == ["aws", "ssm", "start-session"]


def test_create_without_running(cli, config_service, fake_runner):
    cli.next_form_responses = ["shell"]
    cli.next_confirm_responses = [True, False]

    result = runner.invoke(app, ["create", "--profile", "dev"])

    assert result.exit_code == 0, result.output
    assert config_service.command_name_exists("shell")
    assert fake_runner.argv is None


def test_create_run_now_propagates_exit_code(cli, config_service, fake_runner):
    cli.next_form_responses = ["shell"]
    cli.next_confirm_responses = [False, True]
    fake_runner.code = 2

    result = runner.invoke(app, ["create", "--profile", "dev"])

    assert result.exit_code == 2
    assert config_service.list_commands() == []
    assert "i-0aaa" in fake_runner.argv


def test_create_reports_typed_errors(cli):
    result = runner.invoke(app, ["create", "--profile", "missing"])

    assert result.exit_code == 1
    assert "ERROR: Unknown AWS CLI profile: missing" in cli.recorded_messages


def test_delete_with_yes(cli, config_service, make_command):
    config_service.add_command(make_command("web"))

    result = runner.invoke(app, ["delete", "web", "--yes"])

    assert result.exit_code == 0
    assert config_service.list_commands() == []


def test_delete_declined(cli, config_service, make_command):
    config_service.add_command(make_command("web"))
    cli.next_confirm_response = False

    result = runner.invoke(app, ["delete", "web"])

    assert result.exit_code == 0
    assert [c.name for c in config_service.list_commands()] == ["web"]


def test_delete_missing_command(cli):
    result = runner.invoke(app, ["delete", "nope", "--yes"])

    assert result.exit_code == 1
    assert 'ERROR: Command "nope" not found.' in cli.recorded_messages


def test_run_dry_run_prints_command(cli, config_service, make_command, fake_runner):
    config_service.add_command(make_command("web"))

    result = runner.invoke(app, ["run", "web", "--dry-run"])

    assert result.exit_code == 0
    assert (
        "INFO: aws ssm start-session --target i-0123456789abcdef0 "
        "--profile dev --region eu-west-1"
    ) in cli.recorded_messages
    assert fake_runner.argv is None


def test_run_executes_and_propagates_exit_code(cli, config_service, make_command, fake_runner, fake_aws):
    config_service.add_command(make_command("web"))
    fake_runner.code = 3

    result = runner.invoke(app, ["run", "web"])

    assert result.exit_code == 3
    assert fake_runner.argv[:3] == ["aws", "ssm", "start-session"]
    assert "ensure_session_manager_plugin" in fake_aws.calls


def test_run_picks_command_interactively(cli, config_service, make_command, fake_runner):
    config_service.add_command(make_command("api"))
    config_service.add_command(make_command("db", instance_id="i-0db"))
    cli.next_search_terms = ["i-0db"]

    result = runner.invoke(app, ["run"])

    assert result.exit_code == 0
    assert "i-0db" in fake_runner.argv


def test_run_file_transfer_asks_paths(cli, config_service, make_command, fake_runner):
    config_service.add_command(make_command("copy", spec=FileTransferSpec()))
    cli.next_search_terms = ["download"]
    cli.next_form_responses = ["./app.log", "/var/log/app.log"]

    result = runner.invoke(app, ["run", "copy"])

    assert result.exit_code == 0, result.output
    assert fake_runner.argv[0] == "scp"
    assert fake_runner.argv[-2:] == ["ec2-user@i-0123456789abcdef0:/var/log/app.log", "./app.log"]


def test_run_without_stored_commands(cli):
    result = runner.invoke(app, ["run"])

    assert result.exit_code == 1
    assert "ERROR: No stored commands. Create one with 'ssmc create'." in cli.recorded_messages


def test_doctor_tools(cli, monkeypatch):
    monkeypatch.setattr("sc_app.services.doctor_service.shutil.which", lambda name: f"/usr/bin/{name}")

    result = runner.invoke(app, ["doctor", "tools"])

    assert result.exit_code == 0
    assert cli.recorded_tables[0].model.title == "Required Tools"
    assert "SUCCESS: All checks passed." in cli.recorded_messages


def test_doctor_fails_on_unreadable_store(cli, config_service):
    config_service.ensure_home()
    config_service.config_path.write_text("{not json")

    result = runner.invoke(app, ["doctor"])

    assert result.exit_code == 1
    assert "ERROR: Found 1 failures." in cli.recorded_messages
