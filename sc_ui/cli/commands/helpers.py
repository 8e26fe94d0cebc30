from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import structlog
import typer

from sc_common.api import SCError, error_to_payload
from sc_ui.flows.errors import SelectionCancelledError, UIFlowError
from sc_ui.wiring.dependencies import UIContext

logger = structlog.get_logger(__name__)


@contextmanager
def report_errors(ctx: UIContext) -> Iterator[None]:
    """Present typed failures and turn them into a non-zero exit."""
    try:
        yield
    except SelectionCancelledError as exc:
        ctx.ui.present.warning(str(exc))
        raise typer.Exit(exc.exit_code)
    except UIFlowError as exc:
        ctx.ui.present.error(str(exc))
        raise typer.Exit(exc.exit_code)
    except SCError as exc:
        logger.error("command_failed", **error_to_payload(exc))
        ctx.ui.present.error(str(exc))
        raise typer.Exit(1)
    except KeyboardInterrupt:
        ctx.ui.present.warning("Aborted.")
        raise typer.Exit(130)
