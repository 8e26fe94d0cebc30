"""Launch a built session command in the foreground."""

from __future__ import annotations

import logging
import subprocess
from typing import Sequence

from sc_common.errors import SessionLaunchError

logger = logging.getLogger(__name__)


class SessionRunner:
    """Execute session commands with the caller's terminal attached."""

    def run(self, argv: Sequence[str]) -> int:
        logger.info("Starting session: %s", argv[0])
        try:
            proc = subprocess.run(list(argv), check=False)
        except FileNotFoundError as exc:
            raise SessionLaunchError(
                f"Executable not found: {argv[0]}",
                context={"argv": list(argv)},
                cause=exc,
            ) from exc
        except OSError as exc:
            raise SessionLaunchError(
                f"Failed to start {argv[0]}: {exc}",
                context={"argv": list(argv)},
                cause=exc,
            ) from exc
        logger.info("Session exited with code %d", proc.returncode)
        return proc.returncode
