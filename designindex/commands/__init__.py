"""dsi subcommands."""
