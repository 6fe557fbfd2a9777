"""Utility helpers shared by the dsi commands."""

from .error_handler import handle_exceptions
from .exit_codes import ExitCodes

__all__ = ["handle_exceptions", "ExitCodes"]
