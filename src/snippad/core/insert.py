"""Insert a chosen snippet through injected UI capabilities."""

from loguru import logger

from snippad.core.selection import DEFAULT_CONTEXT, CategorySelector, auto_resolve
from snippad.core.store import SnippetStore
from snippad.errors import InsertAborted
from snippad.models.snippet import Snippet
from snippad.protocols import ExpanderProtocol, InserterProtocol, ProjectProtocol, PromptProtocol


def choose_category(
    store: SnippetStore,
    selector: CategorySelector,
    prompt: PromptProtocol,
    *,
    context_id: str = DEFAULT_CONTEXT,
) -> str:
    """Prompt for a category and bind it explicitly (process-wide)."""
    # Duplicate headings share one entry in the prompt.
    categories = list(dict.fromkeys(store.list_categories()))
    if not categories:
        msg = f"No categories in {store.document_path}"
        raise InsertAborted(msg)

    choice = prompt.prompt_choice("Category", categories)
    if choice is None:
        msg = "No category chosen"
        raise InsertAborted(msg)

    selector.set_explicit(choice, context_id=context_id)
    return choice


def ensure_category(
    store: SnippetStore,
    selector: CategorySelector,
    prompt: PromptProtocol,
    *,
    context_id: str = DEFAULT_CONTEXT,
    mode: str | None = None,
    project: ProjectProtocol | None = None,
) -> str:
    """Return the category for ``context_id``, resolving it if unset.

    Order: existing binding, auto-resolution (mode, then project), prompt.
    """
    current = selector.current(context_id)
    if current is not None:
        return current

    category = auto_resolve(store, mode=mode, project=project)
    if category is not None:
        if context_id != DEFAULT_CONTEXT:
            selector.bind_auto(context_id, category)
        return category

    return choose_category(store, selector, prompt, context_id=context_id)


def insert_snippet(
    store: SnippetStore,
    selector: CategorySelector,
    *,
    prompt: PromptProtocol,
    inserter: InserterProtocol,
    expander: ExpanderProtocol | None = None,
    context_id: str = DEFAULT_CONTEXT,
    mode: str | None = None,
    project: ProjectProtocol | None = None,
) -> Snippet:
    """Pick a snippet from the current category and insert it.

    The body goes to ``expander`` when one is available, otherwise to
    ``inserter`` as plain text.

    Raises:
        InsertAborted: No category could be bound, the category has no
            snippets, or the user cancelled the prompt.
        ParseError, StoreNotFound: The snippet file is broken or missing.
    """
    category = ensure_category(
        store, selector, prompt, context_id=context_id, mode=mode, project=project
    )

    snippets = store.list_snippets(category)
    if not snippets:
        msg = f"Category {category!r} has no snippets"
        raise InsertAborted(msg)

    names = list(dict.fromkeys(s.name for s in snippets))
    choice = prompt.prompt_choice(f"Snippet ({category})", names)
    if choice is None:
        msg = "No snippet chosen"
        raise InsertAborted(msg)

    snippet = next((s for s in snippets if s.name == choice), None)
    if snippet is None:
        msg = f"No snippet {choice!r} in category {category!r}"
        raise InsertAborted(msg)

    if expander is not None:
        logger.debug("Expanding snippet {!r} from {!r}", snippet.name, category)
        expander.expand_snippet(snippet.body)
    else:
        logger.debug("Inserting snippet {!r} from {!r} as plain text", snippet.name, category)
        inserter.insert_plain_text(snippet.body)
    return snippet
