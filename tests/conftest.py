from collections import defaultdict

import pytest
from rich.console import Console
from rich.table import Table

from sc_app.api import ConfigService, ConnectSpec, StoredCommand
from sc_ui.tui.system.headless import HeadlessUI

KNOWN_MARKERS = ("unit_ui", "unit_app", "unit_common")


@pytest.fixture(autouse=True)
def _isolated_store(tmp_path, monkeypatch):
    """Never touch the real ~/.ssm-commander store."""
    monkeypatch.setenv("SSMC_CONFIG_PATH", str(tmp_path / "store" / "config.json"))


@pytest.fixture
def config_service(tmp_path) -> ConfigService:
    return ConfigService(tmp_path / "store" / "config.json")


@pytest.fixture
def headless_ui() -> HeadlessUI:
    return HeadlessUI()


@pytest.fixture
def make_command():
    def _make(name: str = "web", spec=None, **overrides) -> StoredCommand:
        fields = {
            "name": name,
            "profile": "dev",
            "region": "eu-west-1",
            "instance_id": "i-0123456789abcdef0",
            "instance_name": "web-1",
            "spec": spec if spec is not None else ConnectSpec(),
        }
        fields.update(overrides)
        return StoredCommand(**fields)

    return _make


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Print per-marker pass/fail counts after the session."""
    _ = (exitstatus, config)
    marker_stats = defaultdict(
        lambda: {"passed": 0, "failed": 0, "skipped": 0, "total": 0, "duration": 0.0}
    )

    for outcome in ("passed", "failed", "skipped"):
        for report in terminalreporter.stats.get(outcome, []):
            # count the test call, plus skips raised during setup
            if report.when != "call" and not (report.when == "setup" and report.outcome == "skipped"):
                continue
            for marker in KNOWN_MARKERS:
                if marker in report.keywords:
                    stats = marker_stats[marker]
                    stats[outcome] += 1
                    stats["total"] += 1
                    stats["duration"] += getattr(report, "duration", 0.0)

    if not marker_stats:
        return

    table = Table(title="Test Statistics by Marker", show_header=True, header_style="bold magenta")
    table.add_column("Marker", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped", justify="right", style="yellow")
    table.add_column("Duration (s)", justify="right", style="blue")

    for marker in sorted(marker_stats):
        stats = marker_stats[marker]
        table.add_row(
            marker,
            str(stats["total"]),
            str(stats["passed"]),
            str(stats["failed"]),
            str(stats["skipped"]),
            f"{stats['duration']:.2f}",
        )

    console = Console()
    console.print("\n")
    console.print(table)
