"""Query commands - typed reads and full-text search over the built store.

Direct SQL over the design index. NO source parsing - run 'dsi build' first.
"""

import json
from dataclasses import asdict
from functools import wraps

import click
from rich.markup import escape
from rich.table import Table

from designindex.commands.check import require_store
from designindex.config_runtime import load_runtime_config
from designindex.context import DesignQueryEngine, group_icons
from designindex.indexer.config import COMPONENT_CATEGORIES, FRAMEWORKS, UTILITY_CATEGORIES
from designindex.indexer.extractors.icons import render_svg, usage_snippets
from designindex.pipeline.ui import console, print_header, print_warning
from designindex.utils.error_handler import handle_exceptions

json_option = click.option("--json", "as_json", is_flag=True, help="Print machine-readable JSON")


def emit_json(data) -> None:
    if isinstance(data, list):
        data = [asdict(item) if hasattr(item, "__dataclass_fields__") else item for item in data]
    elif hasattr(data, "__dataclass_fields__"):
        data = asdict(data)
    click.echo(json.dumps(data, indent=2, default=str))


def require_found(record, what: str):
    if record is None:
        raise click.ClickException(f"No {what}")
    return record


def pass_engine(f):
    """Open the store named by the group options for the duration of one subcommand."""

    @click.pass_context
    @wraps(f)
    def wrapper(ctx, *args, **kwargs):
        root = ctx.obj["root"]
        db_file = require_store(root, ctx.obj["db_path"])
        engine = DesignQueryEngine.open(db_file, load_runtime_config(root)["search"])
        try:
            return f(engine, *args, **kwargs)
        finally:
            engine.close()

    return wrapper


def token_table(tokens) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Path", style="token")
    table.add_column("Value")
    table.add_column("Computed")
    table.add_column("CSS variable", style="dim")
    for token in tokens:
        table.add_row(token.path, token.value_raw, token.value_computed or "", token.css_variable or "")
    return table


@click.group()
@click.option("--root", default=".", help="Project root (holds .dsi/)")
@click.option("--db", "db_path", help="Store path (default: paths.db from config)")
@click.pass_context
def query(ctx, root, db_path):
    """Query the design index.

    \b
    EXAMPLES:
      dsi query tokens color
      dsi query token color.primary-01.100
      dsi query component button --framework react
      dsi query docs "modal focus" --limit 3
      dsi query icons arrow --type navigation --size 24
    """
    ctx.obj = {"root": root, "db_path": db_path}


# ----------------------------------------------------------------------------
# Tokens
# ----------------------------------------------------------------------------

@query.command("tokens")
@click.argument("category")
@click.option("--subcategory", help="Only tokens of this subcategory")
@json_option
@pass_engine
@handle_exceptions
def tokens_cmd(engine, category, subcategory, as_json):
    """List tokens of CATEGORY ("all" for every token)."""
    if subcategory:
        tokens = engine.tokens_by_subcategory(category, subcategory)
    else:
        tokens = engine.tokens_by_category(category)

    if as_json:
        emit_json(tokens)
        return
    if not tokens:
        print_warning(f"No tokens in category '{category}'")
        return
    print_header(f"TOKENS: {category.upper()} ({len(tokens)})")
    console.print(token_table(tokens))


@query.command("token")
@click.argument("path")
@json_option
@pass_engine
@handle_exceptions
def token_cmd(engine, path, as_json):
    """Show one token by its dotted PATH."""
    token = require_found(engine.token_by_path(path), f"token at path '{path}'")
    if as_json:
        emit_json(token)
        return

    print_header(token.path)
    console.print(token_table([token]))
    if token.description:
        console.print(token.description, markup=False)
    for prop in token.properties:
        console.print(f"  {prop.property}: {prop.value}", markup=False)


@query.command("search-tokens")
@click.argument("text")
@click.option("--limit", type=int, help="Maximum results (default: search.token_limit)")
@click.option("--raw", is_flag=True, help="Send TEXT to the FTS engine as-is")
@json_option
@pass_engine
@handle_exceptions
def search_tokens_cmd(engine, text, limit, raw, as_json):
    """Full-text search over token names, paths and descriptions."""
    result = engine.search_tokens(text, limit, raw=raw).raise_for_error()
    if as_json:
        emit_json(result.to_dict())
        return
    if not result.items:
        print_warning(f"No tokens match '{text}'")
        return
    console.print(token_table(result.items))


# ----------------------------------------------------------------------------
# Components
# ----------------------------------------------------------------------------

@query.command("component")
@click.argument("slug")
@click.option("--case-sensitive", is_flag=True, help="Match SLUG exactly")
@click.option("--framework", type=click.Choice(FRAMEWORKS),
              help="Pick the implementation for this framework")
@json_option
@pass_engine
@handle_exceptions
def component_cmd(engine, slug, case_sensitive, framework, as_json):
    """Show a component with its props, slots, events, examples and classes."""
    component = require_found(
        engine.component_by_slug(slug, case_insensitive=not case_sensitive, framework=framework),
        f"component with slug '{slug}'",
    )
    if as_json:
        emit_json(component)
        return

    print_header(f"{component.name} ({', '.join(component.frameworks)})")
    console.print(f"[category]{component.category}[/category]  slug: {component.slug}")
    if component.description:
        console.print(component.description, markup=False)

    if component.props:
        table = Table(title="Props", show_header=True, header_style="bold")
        table.add_column("Name", style="token")
        table.add_column("Type")
        table.add_column("Default")
        table.add_column("Required")
        table.add_column("Options", style="dim")
        for prop in component.props:
            table.add_row(
                prop.name,
                prop.type or "",
                prop.default_value or "",
                "yes" if prop.required else "",
                ", ".join(prop.options or []),
            )
        console.print(table)

    if component.slots:
        console.print("[bold]Slots:[/bold] " + ", ".join(slot.name for slot in component.slots))
    if component.events:
        console.print("[bold]Events:[/bold] " + ", ".join(event.name for event in component.events))
    if component.css_classes:
        console.print("[bold]CSS classes:[/bold] " + escape(" ".join(component.css_classes)))
    for example in component.examples:
        console.print(f"\n[dim]{example.framework}[/dim] {example.title or ''}")
        console.print(example.code, markup=False)


@query.command("components")
@click.option("--category", type=click.Choice(COMPONENT_CATEGORIES), help="Only this category")
@json_option
@pass_engine
@handle_exceptions
def components_cmd(engine, category, as_json):
    """List components, optionally filtered by category."""
    rows = engine.list_components(category)
    if as_json:
        emit_json(rows)
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="token")
    table.add_column("Slug")
    table.add_column("Category", style="category")
    for row in rows:
        table.add_row(row["name"], row["slug"], row["category"] or "")
    console.print(table)


# ----------------------------------------------------------------------------
# Documentation
# ----------------------------------------------------------------------------

@query.command("docs")
@click.argument("text")
@click.option("--limit", type=int, help="Maximum results (default: search.docs_limit)")
@click.option("--raw", is_flag=True, help="Send TEXT to the FTS engine as-is")
@json_option
@pass_engine
@handle_exceptions
def docs_cmd(engine, text, limit, raw, as_json):
    """Full-text documentation search with highlighted snippets."""
    result = engine.search_documentation(text, limit, raw=raw).raise_for_error()
    if as_json:
        emit_json(result.to_dict())
        return
    if not result.items:
        print_warning(f"No documentation found for '{text}'")
        return

    for hit in result.items:
        console.print(f"[bold]{hit['title']}[/bold]  [path]{hit['path']}[/path]")
        console.print(f"  {hit['snippet']}", markup=False)


@query.command("doc")
@click.argument("path")
@json_option
@pass_engine
@handle_exceptions
def doc_cmd(engine, path, as_json):
    """Print one documentation page by URL PATH (e.g. /components/button)."""
    doc = require_found(engine.documentation_by_path(path), f"documentation at '{path}'")
    if as_json:
        emit_json(doc)
        return
    print_header(doc.title)
    console.print(doc.content, markup=False)


# ----------------------------------------------------------------------------
# CSS utilities
# ----------------------------------------------------------------------------

@query.command("utility")
@click.argument("slug")
@json_option
@pass_engine
@handle_exceptions
def utility_cmd(engine, slug, as_json):
    """Show a CSS utility with its full class catalog."""
    utility = require_found(engine.css_utility_by_slug(slug), f"CSS utility '{slug}'")
    if as_json:
        emit_json(utility)
        return

    print_header(f"{utility.name} ({utility.category}, {len(utility.classes)} classes)")
    console.print(utility.description, markup=False)
    console.print(" ".join(utility.classes), markup=False)
    for example in utility.examples:
        console.print(f"\n[dim]{example.title or ''}[/dim]")
        console.print(example.code, markup=False)


@query.command("utilities")
@click.option("--category", type=click.Choice(UTILITY_CATEGORIES), help="Only this category")
@json_option
@pass_engine
@handle_exceptions
def utilities_cmd(engine, category, as_json):
    """List CSS utilities with their class counts."""
    rows = engine.list_css_utilities(category)
    if as_json:
        emit_json(rows)
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="token")
    table.add_column("Category", style="category")
    table.add_column("Classes", justify="right")
    for row in rows:
        table.add_row(row["name"], row["category"], str(row["class_count"]))
    console.print(table)


# ----------------------------------------------------------------------------
# Icons
# ----------------------------------------------------------------------------

@query.command("icon")
@click.argument("name")
@click.option("--svg", is_flag=True, help="Print rendered SVG markup")
@json_option
@pass_engine
@handle_exceptions
def icon_cmd(engine, name, svg, as_json):
    """Show one icon export by NAME (e.g. ArrowArrowBottom16)."""
    icon = require_found(engine.icon_by_name(name), f"icon named '{name}'")
    if as_json:
        data = asdict(icon)
        data["usage"] = usage_snippets(icon)
        if svg:
            data["svg"] = render_svg(icon)
        emit_json(data)
        return
    if svg:
        click.echo(render_svg(icon))
        return

    print_header(f"{icon.name} ({icon.type}, {icon.size}px)")
    for framework, snippet in usage_snippets(icon).items():
        console.print(f"\n[dim]{framework}[/dim]")
        console.print(snippet, markup=False)


@query.command("icons")
@click.argument("text")
@click.option("--type", "icon_type", help="Only icons of this type")
@click.option("--size", type=int, help="Only icons of this pixel size")
@click.option("--limit", type=int, help="Maximum results (default: search.icon_limit)")
@json_option
@pass_engine
@handle_exceptions
def icons_cmd(engine, text, icon_type, size, limit, as_json):
    """Search icons by name, grouped by display name with their sizes."""
    result = engine.search_icons(text, type=icon_type, size=size, limit=limit).raise_for_error()
    groups = group_icons(result.items)
    if as_json:
        emit_json({"query": text, "result_count": len(result.items), "icons": groups})
        return
    if not groups:
        types = ", ".join(row["type"] for row in engine.list_icon_types())
        print_warning(f"No icons found for '{text}'. Available types: {types}")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Icon", style="token")
    table.add_column("Type", style="category")
    table.add_column("Sizes")
    for group in groups:
        table.add_row(group["icon_name"], group["type"], ", ".join(str(s) for s in group["sizes"]))
    console.print(table)


@query.command("icon-types")
@json_option
@pass_engine
@handle_exceptions
def icon_types_cmd(engine, as_json):
    """List icon types with their icon counts."""
    rows = engine.list_icon_types()
    if as_json:
        emit_json(rows)
        return
    for row in rows:
        console.print(f"{row['type']} ({row['count']} icons)", markup=False)
