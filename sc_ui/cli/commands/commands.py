from __future__ import annotations

import typer

from sc_ui.cli.commands.helpers import report_errors
from sc_ui.flows.run_command import manage_stored_commands
from sc_ui.presenters.commands import build_commands_table
from sc_ui.wiring.dependencies import UIContext


def register_command_store_commands(app: typer.Typer, ctx: UIContext) -> None:
    """Register ``list`` and ``delete`` on the given Typer app."""

    @app.command("list")
    def list_commands(
        plain: bool = typer.Option(
            False, "--plain", help="Print the stored commands as a table and exit."
        ),
    ) -> None:
        """Browse stored commands, then run or delete one."""
        code = 0
        with report_errors(ctx):
            commands = ctx.config_service.list_commands()
            if not commands:
                ctx.ui.present.info("No stored commands. Create one with 'ssmc create'.")
                return
            if plain or ctx.headless:
                ctx.ui.tables.show(build_commands_table(commands))
                return
            code = manage_stored_commands(
                ctx.ui, ctx.aws_service, ctx.config_service, ctx.session_runner
            )
        if code != 0:
            raise typer.Exit(code)

    @app.command("delete")
    def delete_command(
        name: str = typer.Argument(..., help="Name of the command to delete."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
    ) -> None:
        """Delete a stored command."""
        with report_errors(ctx):
            command = ctx.config_service.get_command(name)
            if not yes and not ctx.ui.form.confirm(
                f"Delete '{command.name}' ({command.target_label})?", default=False
            ):
                ctx.ui.present.warning("Nothing deleted.")
                return
            ctx.config_service.remove_command(name)
            ctx.ui.present.success(f"Deleted command '{name}'.")
