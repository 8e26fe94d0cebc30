from __future__ import annotations

from typing import Optional

import typer

from sc_ui.cli.commands.helpers import report_errors
from sc_ui.flows.run_command import run_stored_command
from sc_ui.wiring.dependencies import UIContext


def register_run_command(app: typer.Typer, ctx: UIContext) -> None:
    """Register the run command on the given Typer app."""

    @app.command("run")
    def run(
        name: Optional[str] = typer.Argument(
            None, help="Stored command to run. Pick interactively when omitted."
        ),
        dry_run: bool = typer.Option(
            False, "--dry-run", help="Print the command instead of executing it."
        ),
    ) -> None:
        """Run a stored SSM command."""
        with report_errors(ctx):
            code = run_stored_command(
                ctx.ui,
                ctx.aws_service,
                ctx.config_service,
                ctx.session_runner,
                name=name,
                dry_run=dry_run,
            )
        if code != 0:
            raise typer.Exit(code)
