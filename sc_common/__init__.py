"""Shared helpers for ssm-commander."""

from sc_common.api import SCError, configure_logging

__all__ = ["configure_logging", "SCError"]
