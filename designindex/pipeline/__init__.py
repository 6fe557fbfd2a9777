"""Console presentation for dsi commands."""
from .ui import console, print_header, print_error, print_warning, print_success, print_status_panel

__all__ = [
    "console", "print_header", "print_error", "print_warning", "print_success", "print_status_panel",
]
