"""CLI for snippad: browse, insert and capture snippets."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from snippad.config import load_settings
from snippad.core.capture import add_snippet
from snippad.core.insert import insert_snippet
from snippad.core.project import GitProject
from snippad.core.selection import CategorySelector
from snippad.core.store import SnippetStore
from snippad.errors import SnippadError
from snippad.logging_config import configure_logging
from snippad.terminal import StdoutInserter, TerminalEditor, TerminalPrompt

app = typer.Typer(help="snippad: reusable text snippets kept in an org file.")

_CLI_CONTEXT = "cli"


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    file: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Snippet file (default: $SNIPPAD_FILE or data dir)"),
    ] = None,
    category_level: Annotated[
        int | None,
        typer.Option("--category-level", help="Heading level of categories"),
    ] = None,
    snippet_level: Annotated[
        int | None,
        typer.Option("--snippet-level", help="Heading level of snippets"),
    ] = None,
) -> None:
    configure_logging(verbose=verbose)
    try:
        settings = load_settings(
            document_path=file,
            category_heading_level=category_level,
            snippet_heading_level=snippet_level,
        )
    except SnippadError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from None
    logger.debug("Using snippet file {}", settings.document_path)
    ctx.obj = SnippetStore.from_settings(settings)


def _store(ctx: typer.Context) -> SnippetStore:
    return ctx.obj  # type: ignore[no-any-return]


def _fail(e: SnippadError) -> typer.Exit:
    logger.error("{}", e)
    return typer.Exit(1)


@app.command()
def categories(ctx: typer.Context) -> None:
    """List categories in document order."""
    try:
        names = _store(ctx).list_categories()
    except SnippadError as e:
        raise _fail(e) from None
    for name in names:
        typer.echo(name)


@app.command()
def snippets(
    ctx: typer.Context,
    category: str = typer.Argument(..., help="Category title (exact match)"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output names and bodies as JSON"),
) -> None:
    """List the snippets of a category."""
    try:
        found = _store(ctx).list_snippets(category)
    except SnippadError as e:
        raise _fail(e) from None

    if output_json:
        data = {
            "category": category,
            "snippets": [{"name": s.name, "body": s.body} for s in found],
            "count": len(found),
        }
        typer.echo(json.dumps(data, indent=2))
        return
    for s in found:
        typer.echo(s.name)


@app.command()
def show(
    ctx: typer.Context,
    category: str = typer.Argument(..., help="Category title"),
    name: str = typer.Argument(..., help="Snippet title"),
) -> None:
    """Print one snippet body."""
    try:
        snippet = _store(ctx).get_snippet(category, name)
    except SnippadError as e:
        raise _fail(e) from None
    if snippet is None:
        logger.error("No snippet {!r} in category {!r}", name, category)
        raise typer.Exit(1)
    StdoutInserter().insert_plain_text(snippet.body)


@app.command()
def resolve(
    ctx: typer.Context,
    context: str = typer.Argument(..., help="Mode or project identifier"),
) -> None:
    """Print the category matching a context identifier, if any."""
    try:
        category = _store(ctx).resolve_category_by_context(context)
    except SnippadError as e:
        raise _fail(e) from None
    if category is None:
        raise typer.Exit(1)
    typer.echo(category)


@app.command()
def insert(
    ctx: typer.Context,
    mode: Annotated[
        str | None,
        typer.Option("--mode", "-m", help="Editing mode used to pick the category"),
    ] = None,
    category: Annotated[
        str | None,
        typer.Option("--category", "-c", help="Use this category, skip resolution"),
    ] = None,
    project: bool = typer.Option(
        True, "--project/--no-project", help="Match the git project name against categories"
    ),
) -> None:
    """Choose a snippet and write its body to stdout."""
    store = _store(ctx)
    selector = CategorySelector()
    if category is not None:
        selector.set_explicit(category, context_id=_CLI_CONTEXT)

    try:
        insert_snippet(
            store,
            selector,
            prompt=TerminalPrompt(),
            inserter=StdoutInserter(),
            context_id=_CLI_CONTEXT,
            mode=mode,
            project=GitProject() if project else None,
        )
    except SnippadError as e:
        raise _fail(e) from None


@app.command()
def add(
    ctx: typer.Context,
    category: str = typer.Argument(..., help="Category title (created if missing)"),
    name: str = typer.Argument(..., help="Snippet title"),
    body: Annotated[
        str | None,
        typer.Option("--body", "-b", help="Snippet text (default: read stdin)"),
    ] = None,
) -> None:
    """Add a snippet to a category."""
    if body is None:
        body = typer.get_text_stream("stdin").read().rstrip("\n")
    try:
        add_snippet(_store(ctx), category=category, name=name, body=body)
    except SnippadError as e:
        raise _fail(e) from None
    typer.echo(f"Added {name!r} to {category!r}")


@app.command()
def edit(ctx: typer.Context) -> None:
    """Open the snippet file in your editor."""
    store = _store(ctx)
    if not store.document_path.exists():
        store.document_path.parent.mkdir(parents=True, exist_ok=True)
        store.document_path.touch()
        logger.info("Created {}", store.document_path)
    TerminalEditor().open_for_editing(store.document_path)


@app.command()
def serve(ctx: typer.Context) -> None:
    """Start the MCP server (stdio transport)."""
    from snippad.mcp.server import run_mcp_server

    run_mcp_server(_store(ctx))
