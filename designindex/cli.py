"""designindex CLI - Main entry point and command registration hub."""
# ruff: noqa: E402 - commands are imported after the cli group is defined

import click
from rich.table import Table

from designindex import __version__
from designindex.pipeline.ui import console


class VerboseGroup(click.Group):
    """Help output grouped by task, rendered with rich."""

    COMMAND_CATEGORIES = {
        "BUILD": {
            "title": "BUILD",
            "description": "Extract the design system sources into the store",
            "commands": ["build"],
            "command_meta": {
                "build": {"run_when": "After the design system sources change"},
            },
        },
        "INSPECT": {
            "title": "INSPECT",
            "description": "Check what the store holds",
            "commands": ["stats", "check"],
            "command_meta": {
                "stats": {"use_when": "Need row counts per entity type"},
                "check": {"use_when": "Suspect orphan rows or full-text drift"},
            },
        },
        "QUERY": {
            "title": "QUERY",
            "description": "Typed reads and full-text search",
            "commands": ["query"],
            "command_meta": {
                "query": {"use_when": "Need tokens, components, docs, utilities or icons"},
            },
        },
    }

    def format_commands(self, ctx, formatter):
        """Suppress click's flat listing; format_help prints the grouped one."""
        pass

    def format_help(self, ctx, formatter):
        super().format_help(ctx, formatter)

        registered = {
            name: cmd for name, cmd in self.commands.items() if not getattr(cmd, "hidden", False)
        }

        console.print()
        console.rule("[bold]COMMANDS[/bold]")

        for category_data in self.COMMAND_CATEGORIES.values():
            console.print(f"\n[bold cyan]{category_data['title']}[/bold cyan]")
            console.print(f"[dim]{category_data['description']}[/dim]")

            table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
            table.add_column("Command", style="path", width=10)
            table.add_column("Description", style="white")
            table.add_column("Hint", style="dim", width=44)

            for cmd_name in category_data["commands"]:
                if cmd_name not in registered:
                    continue
                first_line = (registered[cmd_name].help or "").split("\n")[0].strip()

                meta = category_data["command_meta"].get(cmd_name, {})
                hint = ""
                if "use_when" in meta:
                    hint = f"USE: {meta['use_when']}"
                elif "run_when" in meta:
                    hint = f"RUN: {meta['run_when']}"

                table.add_row(cmd_name, first_line, hint)

            console.print(table)

        console.print()
        console.rule()
        console.print("For detailed options: dsi <command> --help", markup=False)


@click.group(cls=VerboseGroup)
@click.version_option(version=__version__, prog_name="dsi")
@click.help_option("-h", "--help")
def cli():
    """designindex - searchable index of a design system's tokens, components, docs and icons.

    \b
    QUICK START:
      dsi build                      # Rebuild .dsi/design_index.db
      dsi query component button     # Component with props, slots, events
      dsi query docs "modal focus"   # Full-text documentation search
    """
    pass


from designindex.commands.build import build
from designindex.commands.check import check, stats
from designindex.commands.query import query

cli.add_command(build)
cli.add_command(stats)
cli.add_command(check)
cli.add_command(query)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
