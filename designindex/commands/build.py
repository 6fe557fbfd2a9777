"""Build command - rebuild the design index from the design system sources."""

import json

import click
from rich.table import Table

from designindex.config_runtime import load_runtime_config, resolve_path
from designindex.indexer.runner import run_rebuild
from designindex.pipeline.ui import console, print_header, print_success, print_warning
from designindex.utils.error_handler import handle_exceptions
from designindex.utils.logging import configure_file_logging, logger


@click.command()
@click.option("--root", default=".", type=click.Path(file_okay=False), help="Project root (holds .dsi/)")
@click.option("--db", "db_path", help="Store path (default: paths.db from config)")
@click.option("--mode", type=click.Choice(["strict", "lenient"]),
              help="strict aborts on a missing/empty source, lenient uses bundled defaults")
@click.option("--replace", type=click.Choice(["atomic", "eager"]),
              help="atomic keeps the old store until the new one is complete")
@click.option("--tokens", "tokens_dir", help="Tokens package directory")
@click.option("--styles", "styles_dir", help="Styles package directory")
@click.option("--vue", "vue_dir", help="Vue components directory")
@click.option("--react", "react_dir", help="React components directory")
@click.option("--docs", "docs_dir", help="Documentation directory")
@click.option("--icons", "icons_file", help="Generated icons module")
@click.option("--json", "as_json", is_flag=True, help="Print the rebuild summary as JSON")
@click.option("--quiet", is_flag=True, help="Minimal output")
@handle_exceptions
def build(root, db_path, mode, replace, tokens_dir, styles_dir, vue_dir, react_dir, docs_dir,
          icons_file, as_json, quiet):
    """Rebuild the design index from scratch.

    Categories run in a fixed order: tokens, vue, react, css utilities, docs,
    icons. Each category is committed on its own.

    \b
    EXAMPLES:
      dsi build
      dsi build --mode lenient --replace eager
      dsi build --vue ../vue/src/components --react ../react/src/components
    """
    config = load_runtime_config(root)
    handler_id = configure_file_logging(resolve_path(root, config["paths"]["log_dir"]))

    overrides = {
        "tokens_dir": tokens_dir,
        "styles_dir": styles_dir,
        "vue_components_dir": vue_dir,
        "react_components_dir": react_dir,
        "docs_dir": docs_dir,
        "icons_file": icons_file,
    }

    try:
        result = run_rebuild(
            root_path=root,
            db_path=db_path,
            mode=mode,
            replace=replace,
            path_overrides=overrides,
        )
    finally:
        logger.remove(handler_id)

    if as_json:
        click.echo(json.dumps(result, indent=2, default=str))
        return
    if quiet:
        click.echo(f"{result['db_path']} ({result['elapsed']:.2f}s)")
        return

    print_header("DESIGN INDEX REBUILT")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Category", style="category")
    table.add_column("Records", justify="right")
    table.add_column("Source", style="path")
    table.add_column("Fallback")

    for category, info in result["categories"].items():
        if info.get("skipped"):
            records = "[dim]skipped[/dim]"
        else:
            records = str(info["records"])
        table.add_row(category, records, info["source"], "yes" if info["fallback_used"] else "")

    console.print(table)

    fallbacks = [c for c, info in result["categories"].items() if info["fallback_used"]]
    if fallbacks:
        print_warning(f"Bundled defaults used for: {', '.join(fallbacks)}")

    print_success(f"Store written to {result['db_path']} in {result['elapsed']:.2f}s")
