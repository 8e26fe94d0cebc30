"""Search-prompt pickers for profiles, regions, command types and instances."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, TypeVar

from rapidfuzz import fuzz, process

from sc_app.api import CommandType, Instance, StoredCommand
from sc_ui.flows.errors import SelectionCancelledError
from sc_ui.tui.system.components.box_table import build_table
from sc_ui.tui.system.components.search import (
    CancellationToken,
    Choice,
    SearchConfig,
    table_choices,
)
from sc_ui.tui.system.protocols import UI

T = TypeVar("T")

FUZZY_SCORE_CUTOFF = 60

INSTANCE_FIELDS = [
    "Name",
    "InstanceId",
    "InstanceType",
    "PrivateIpAddress",
    "PublicIpAddress",
    "State",
]
INSTANCE_HEADERS = ["Name", "Instance ID", "Type", "Private IP", "Public IP", "State"]

COMMAND_FIELDS = ["name", "type", "profile", "region", "target"]
COMMAND_HEADERS = ["Name", "Type", "Profile", "Region", "Target"]

COMMAND_TYPE_CHOICES: list[Choice[CommandType]] = [
    Choice(
        value=CommandType.CONNECT,
        name="Connect",
        description="Connect to an EC2 instance's shell environment.",
    ),
    Choice(
        value=CommandType.PORT_FORWARD,
        name="Port Forward",
        description=(
            "Establish a port forwarding connection to an EC2 instance. Forward a port "
            "from a service running on the instance to your local machine, or use the "
            "instance as a bastion host to reach a port on another server."
        ),
    ),
    Choice(
        value=CommandType.FILE_TRANSFER,
        name="File Transfer",
        description=(
            "Transfer files between your local machine and an EC2 instance. "
            "File paths are asked each time the command runs."
        ),
    ),
]


def _plain_answer(text: str) -> str:
    return text


def fuzzy_filter(values: Sequence[str], term: Optional[str]) -> List[str]:
    """Substring matches first, then fuzzy matches above the cutoff."""
    if not term:
        return list(values)
    exact = [value for value in values if term in value]
    matches = process.extract(
        term,
        list(values),
        scorer=fuzz.WRatio,
        limit=len(values),
        score_cutoff=FUZZY_SCORE_CUTOFF,
    )
    fuzzy = [values[m[2]] for m in matches if values[m[2]] not in exact]
    return exact + fuzzy


def _require(answer: Optional[T], what: str) -> T:
    if answer is None:
        raise SelectionCancelledError(f"No {what} selected.")
    return answer


def select_from_strings(ui: UI, message: str, values: Sequence[str], what: str = "value") -> str:
    def source(term: Optional[str], *, token: CancellationToken) -> list[Choice[str]]:
        return [Choice(value=value) for value in fuzzy_filter(values, term)]

    answer = ui.search.search(
        SearchConfig(message=message, source=source, answer_converter=_plain_answer)
    )
    return _require(answer, what)


def select_profile(ui: UI, profiles: Sequence[str]) -> str:
    return select_from_strings(ui, "Select an AWS CLI profile", profiles, "AWS CLI profile")


def select_region(ui: UI, regions: Sequence[str]) -> str:
    return select_from_strings(ui, "Select an AWS region", regions, "AWS region")


def select_command_type(ui: UI) -> CommandType:
    def source(term: Optional[str], *, token: CancellationToken) -> list[Choice[CommandType]]:
        if not term:
            return list(COMMAND_TYPE_CHOICES)
        needle = term.lower()
        return [choice for choice in COMMAND_TYPE_CHOICES if needle in choice.line.lower()]

    answer = ui.search.search(
        SearchConfig(
            message="Select which command you would like to create",
            source=source,
            answer_converter=_plain_answer,
        )
    )
    return _require(answer, "command type")


def search_table(
    ui: UI,
    message: str,
    fields: Sequence[str],
    records: Sequence[dict[str, Any]],
    headers: Sequence[str],
) -> Optional[dict[str, Any]]:
    """Search prompt over a box table; returns the picked record."""
    table = build_table(fields, records, headers)
    choices = table_choices(table.rows)

    def source(term: Optional[str], *, token: CancellationToken) -> list[Choice[Any]]:
        if term is None:
            return list(choices)
        return [choice for choice in choices if term in choice.line]

    return ui.search.search(
        SearchConfig(
            message=message,
            header=table.header,
            footer=table.footer,
            source=source,
        )
    )


def select_instance(ui: UI, instances: Sequence[Instance]) -> Instance:
    by_record = {}
    records = []
    for instance in instances:
        record = instance.as_record()
        by_record[id(record)] = instance
        records.append(record)
    picked = search_table(ui, "Select an EC2 instance", INSTANCE_FIELDS, records, INSTANCE_HEADERS)
    picked = _require(picked, "EC2 instance")
    return by_record[id(picked)]


def select_stored_command(
    ui: UI,
    commands: Sequence[StoredCommand],
    message: str = "Select a command to run",
) -> StoredCommand:
    by_record = {}
    records = []
    for command in commands:
        record = {
            "name": command.name,
            "type": command.command_type.value,
            "profile": command.profile,
            "region": command.region,
            "target": command.target_label,
        }
        by_record[id(record)] = command
        records.append(record)
    picked = search_table(ui, message, COMMAND_FIELDS, records, COMMAND_HEADERS)
    picked = _require(picked, "command")
    return by_record[id(picked)]
