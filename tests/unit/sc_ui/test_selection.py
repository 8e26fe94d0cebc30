import pytest

from sc_app.api import CommandType
from sc_ui.flows.errors import SelectionCancelledError
from sc_ui.flows.selection import (
    fuzzy_filter,
    select_command_type,
    select_instance,
    select_profile,
    select_region,
    select_stored_command,
)
from sc_ui.tui.system.headless import HeadlessUI

pytestmark = pytest.mark.unit_ui


def test_fuzzy_filter_lists_substring_matches_first():
    regions = ["us-east-1", "eu-west-1", "ap-south-1", "eu-west-2"]

    assert fuzzy_filter(regions, None) == regions
    assert fuzzy_filter(regions, "eu-west")[:2] == ["eu-west-1", "eu-west-2"]


def test_fuzzy_filter_tolerates_typos():
    assert "eu-west-1" in fuzzy_filter(["us-east-1", "eu-west-1"], "euwest1")
    assert fuzzy_filter(["alpha"], "zzzzzz") == []


def test_profile_and_region_answers_are_plain():
    ui = HeadlessUI(next_search_terms=["prod", "eu-west-1"])

    assert select_profile(ui, ["dev", "prod"]) == "prod"
    assert select_region(ui, ["us-east-1", "eu-west-1"]) == "eu-west-1"
    assert [s.answer for s in ui.recorded_searches] == ["prod", "eu-west-1"]


def test_command_type_search_matches_case_insensitively():
    ui = HeadlessUI(next_search_terms=["file"])

    assert select_command_type(ui) is CommandType.FILE_TRANSFER


def test_instance_picker_returns_the_instance(fake_aws):
    ui = HeadlessUI(next_search_terms=["db"])

    picked = select_instance(ui, fake_aws.instances)

    assert picked is fake_aws.instances[1]
    assert ui.recorded_searches[0].answer.startswith("db (i-0bbb, t3.small, 10.0.0.5")


def test_instance_picker_moves_between_rows(fake_aws):
    ui = HeadlessUI(next_search_moves=[1])

    assert select_instance(ui, fake_aws.instances).instance_id == "i-0bbb"


def test_nothing_selected_raises(fake_aws):
    ui = HeadlessUI(next_search_terms=["no-such-host"])

    with pytest.raises(SelectionCancelledError):
        select_instance(ui, fake_aws.instances)


def test_stored_command_picker(make_command):
    commands = [make_command("api"), make_command("db", instance_name="db-1")]
    ui = HeadlessUI(next_search_terms=["db-1"])

    assert select_stored_command(ui, commands).name == "db"
