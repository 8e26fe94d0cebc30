from __future__ import annotations

import typer

from sc_ui.presenters.doctor import render_doctor_report
from sc_ui.wiring.dependencies import UIContext


def create_doctor_app(ctx: UIContext) -> typer.Typer:
    """Build the doctor Typer app, wired to the given context."""
    app = typer.Typer(help="Check environment health and prerequisites.", no_args_is_help=False)

    @app.callback(invoke_without_command=True)
    def doctor_root(typer_ctx: typer.Context) -> None:
        if typer_ctx.invoked_subcommand is None:
            report = ctx.doctor_service.check_all()
            if not render_doctor_report(ctx.ui, report):
                raise typer.Exit(1)

    @app.command("tools")
    def doctor_tools() -> None:
        """Check the AWS CLI, session-manager-plugin and scp."""
        report = ctx.doctor_service.check_tools()
        if not render_doctor_report(ctx.ui, report):
            raise typer.Exit(1)

    @app.command("config")
    def doctor_config() -> None:
        """Check that the command store can be read."""
        report = ctx.doctor_service.check_config()
        if not render_doctor_report(ctx.ui, report):
            raise typer.Exit(1)

    return app
