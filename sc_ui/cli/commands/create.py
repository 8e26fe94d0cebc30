from __future__ import annotations

from typing import Optional

import typer

from sc_ui.cli.commands.helpers import report_errors
from sc_ui.flows.create_wizard import run_create_wizard
from sc_ui.flows.run_command import execute_command
from sc_ui.wiring.dependencies import UIContext


def register_create_command(app: typer.Typer, ctx: UIContext) -> None:
    """Register the create command on the given Typer app."""

    @app.command("create")
    def create(
        profile: Optional[str] = typer.Option(
            None, "--profile", "-p", help="AWS CLI profile (skips the profile prompt)."
        ),
        region: Optional[str] = typer.Option(
            None, "--region", "-r", help="AWS region (skips the region prompt)."
        ),
        name: Optional[str] = typer.Option(
            None, "--name", "-n", help="Name to store the command under."
        ),
    ) -> None:
        """Create a new SSM command, then save and/or run it."""
        code = 0
        with report_errors(ctx):
            outcome = run_create_wizard(
                ctx.ui,
                ctx.aws_service,
                ctx.config_service,
                profile=profile,
                region=region,
                name=name,
            )
            if outcome.run_now:
                code = execute_command(
                    ctx.ui, ctx.aws_service, ctx.session_runner, outcome.command
                )
        if code != 0:
            raise typer.Exit(code)
