"""
Command-line interface for ssm-commander.

Build AWS SSM session commands once, store them by name and re-run them.
"""

from __future__ import annotations

import typer

from sc_ui.cli.commands.commands import register_command_store_commands
from sc_ui.cli.commands.create import register_create_command
from sc_ui.cli.commands.doctor import create_doctor_app
from sc_ui.cli.commands.run import register_run_command
from sc_ui.wiring.dependencies import UIContext, configure_logging

# Initialize global context (lazy)
ctx_store = UIContext()

doctor_app = create_doctor_app(ctx_store)

app = typer.Typer(help="Create, store and run AWS SSM session commands.", no_args_is_help=True)


@app.callback(invoke_without_command=True)
def entry(
    ctx: typer.Context,
    headless: bool = typer.Option(
        False,
        "--headless",
        help="Disable interactive prompts (useful in CI).",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log at DEBUG level to stderr.",
    ),
) -> None:
    """Global entry point handling interactive vs headless modes."""
    configure_logging(debug=debug, force=True)
    ctx_store.headless = headless

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


register_create_command(app, ctx_store)
register_command_store_commands(app, ctx_store)
register_run_command(app, ctx_store)
app.add_typer(doctor_app, name="doctor")


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
