"""Centralized exit codes for the dsi CLI."""


class ExitCodes:
    """Standard exit codes for dsi commands."""

    SUCCESS = 0

    INTEGRITY_PROBLEMS = 1

    TASK_INCOMPLETE = 3

