"""MCP server exposing the snippet store and category selection as tools."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

from loguru import logger
from mcp.server.fastmcp import Context, FastMCP

from snippad.config import load_settings
from snippad.core.capture import add_snippet
from snippad.core.project import FixedProject
from snippad.core.selection import DEFAULT_CONTEXT, CategorySelector
from snippad.core.store import SnippetStore
from snippad.errors import SnippadError

# Store handed over by the CLI; None means "load settings from the environment".
_startup_store: SnippetStore | None = None


# --- Core functions (testable without MCP context) ---


def snippad_list_categories(store: SnippetStore) -> dict[str, Any]:
    """List category titles in document order (duplicates included)."""
    try:
        categories = store.list_categories()
    except SnippadError as e:
        return {"error": str(e), "categories": [], "count": 0}
    return {"categories": categories, "count": len(categories)}


def snippad_list_snippets(
    store: SnippetStore,
    *,
    category: str,
    include_bodies: bool = False,
) -> dict[str, Any]:
    """List snippets of a category. Unknown categories give an empty list.

    Args:
        category: Category title, matched exactly (case-sensitive).
        include_bodies: Include snippet bodies, not only names.
    """
    try:
        found = store.list_snippets(category)
    except SnippadError as e:
        return {"error": str(e), "snippets": [], "count": 0}

    entries: list[dict[str, Any]] = []
    for s in found:
        entry: dict[str, Any] = {"name": s.name}
        if include_bodies:
            entry["body"] = s.body
        entries.append(entry)
    return {"category": category, "snippets": entries, "count": len(entries)}


def snippad_get_snippet(
    store: SnippetStore,
    selector: CategorySelector,
    *,
    name: str,
    category: str | None = None,
    context_id: str = DEFAULT_CONTEXT,
) -> dict[str, Any]:
    """Return one snippet body.

    Args:
        name: Snippet title.
        category: Category title. Defaults to the current category of context_id.
        context_id: Editing context whose current category is used.
    """
    if category is None:
        category = selector.current(context_id)
        if category is None:
            return {
                "error": "No category selected. Pass category, or call "
                "snippad_set_category / snippad_context_changed first."
            }
    try:
        snippet = store.get_snippet(category, name)
    except SnippadError as e:
        return {"error": str(e)}
    if snippet is None:
        return {"error": f"No snippet '{name}' in category '{category}'."}
    return {"category": snippet.category, "name": snippet.name, "body": snippet.body}


def snippad_context_changed(
    store: SnippetStore,
    selector: CategorySelector,
    *,
    context_id: str,
    mode: str | None = None,
    project: str | None = None,
) -> dict[str, Any]:
    """Auto-resolve the category of a context from its mode, then its project.

    Args:
        context_id: Identifier of the editing context (buffer, session...).
        mode: Editing mode identifier, e.g. "python-mode".
        project: Project identifier, if known.
    """
    if context_id == DEFAULT_CONTEXT:
        return {"error": f"'{DEFAULT_CONTEXT}' is reserved; use a specific context_id."}
    try:
        category = selector.on_context_change(
            store,
            context_id,
            mode=mode,
            project=FixedProject(project) if project else None,
        )
    except SnippadError as e:
        return {"error": str(e)}
    binding = selector.binding(context_id)
    return {
        "context_id": context_id,
        "resolved": category,
        "category": binding.category,
        "state": binding.state.value,
    }


def snippad_set_category(
    store: SnippetStore,
    selector: CategorySelector,
    *,
    category: str,
    context_id: str = DEFAULT_CONTEXT,
) -> dict[str, Any]:
    """Select a category explicitly. The choice applies process-wide.

    Args:
        category: One of the titles from snippad_list_categories.
        context_id: Context the selection is made from.
    """
    try:
        known = store.list_categories()
    except SnippadError as e:
        return {"error": str(e)}
    if category not in known:
        return {"error": f"Category '{category}' not found.", "categories": known}
    selector.set_explicit(category, context_id=context_id)
    return {"category": category, "state": selector.binding(context_id).state.value}


def snippad_current_category(
    selector: CategorySelector,
    *,
    context_id: str = DEFAULT_CONTEXT,
) -> dict[str, Any]:
    """Report the category visible from a context and how it was chosen."""
    binding = selector.binding(context_id)
    return {"context_id": context_id, "category": binding.category, "state": binding.state.value}


def snippad_add_snippet(
    store: SnippetStore,
    *,
    category: str,
    name: str,
    body: str,
) -> dict[str, Any]:
    """Append a snippet to a category, creating the category if needed."""
    try:
        snippet = add_snippet(store, category=category, name=name, body=body)
    except SnippadError as e:
        return {"success": False, "error": str(e)}
    return {"success": True, "category": snippet.category, "name": snippet.name}


# --- Server ---


@dataclass
class ServerContext:
    """Shared state for the MCP server lifetime."""

    store: SnippetStore
    selector: CategorySelector = field(default_factory=CategorySelector)


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerContext]:
    """Set up the store and a fresh category selector."""
    store = _startup_store or SnippetStore.from_settings(load_settings())
    logger.info("Serving snippets from {}", store.document_path)
    yield ServerContext(store=store)


mcp_server = FastMCP(
    "snippad",
    instructions="""\
snippad keeps reusable text snippets in an org file. Top-level headings are
categories, their sub-headings are snippets.

1. Call snippad_list_categories to see the categories.
2. Call snippad_list_snippets with a category to see its snippet names.
3. Call snippad_get_snippet to fetch a body.

Category names are matched exactly (case-sensitive). If you know the editor
mode or project, snippad_context_changed picks the category for you.
""",
    lifespan=server_lifespan,
)


def _ctx(mcp_ctx: Context) -> ServerContext:
    return mcp_ctx.request_context.lifespan_context  # type: ignore[return-value]


# --- MCP Tool Wrappers ---


@mcp_server.tool()
async def snippad_list_categories_tool(ctx: Context) -> dict[str, Any]:
    """List snippet categories in document order."""
    return snippad_list_categories(_ctx(ctx).store)


@mcp_server.tool()
async def snippad_list_snippets_tool(
    ctx: Context,
    category: str,
    include_bodies: bool = False,
) -> dict[str, Any]:
    """List the snippets of a category.

    Args:
        category: Category title (exact match).
        include_bodies: Also return each snippet body.
    """
    return snippad_list_snippets(_ctx(ctx).store, category=category, include_bodies=include_bodies)


@mcp_server.tool()
async def snippad_get_snippet_tool(
    ctx: Context,
    name: str,
    category: str | None = None,
    context_id: str = DEFAULT_CONTEXT,
) -> dict[str, Any]:
    """Fetch a snippet body by name.

    Args:
        name: Snippet title.
        category: Category title; defaults to the current category.
        context_id: Editing context whose current category is used.
    """
    c = _ctx(ctx)
    return snippad_get_snippet(
        c.store, c.selector, name=name, category=category, context_id=context_id
    )


@mcp_server.tool()
async def snippad_context_changed_tool(
    ctx: Context,
    context_id: str,
    mode: str | None = None,
    project: str | None = None,
) -> dict[str, Any]:
    """Tell snippad an editing context changed mode or opened a project.

    Args:
        context_id: Identifier of the editing context.
        mode: Editing mode identifier.
        project: Project identifier.
    """
    c = _ctx(ctx)
    return snippad_context_changed(
        c.store, c.selector, context_id=context_id, mode=mode, project=project
    )


@mcp_server.tool()
async def snippad_set_category_tool(
    ctx: Context,
    category: str,
    context_id: str = DEFAULT_CONTEXT,
) -> dict[str, Any]:
    """Select the current category for all contexts.

    Args:
        category: Category title.
        context_id: Context the selection is made from.
    """
    c = _ctx(ctx)
    return snippad_set_category(c.store, c.selector, category=category, context_id=context_id)


@mcp_server.tool()
async def snippad_current_category_tool(
    ctx: Context,
    context_id: str = DEFAULT_CONTEXT,
) -> dict[str, Any]:
    """Show the current category of a context."""
    return snippad_current_category(_ctx(ctx).selector, context_id=context_id)


@mcp_server.tool()
async def snippad_add_snippet_tool(
    ctx: Context,
    category: str,
    name: str,
    body: str,
) -> dict[str, Any]:
    """Save a new snippet into the snippet file.

    Args:
        category: Category title (created if missing).
        name: Snippet title.
        body: Snippet text.
    """
    return snippad_add_snippet(_ctx(ctx).store, category=category, name=name, body=body)


def run_mcp_server(store: SnippetStore | None = None) -> None:
    """Run the MCP server with stdio transport."""
    global _startup_store

    from snippad.logging_config import configure_logging

    configure_logging(quiet=True)
    _startup_store = store
    mcp_server.run(transport="stdio")
