"""Current-category selection per editing context.

Each editing context (a buffer, a session, an MCP client...) is in one of
three states: unset, auto-resolved, or explicit. Auto-resolved bindings are
scoped to the context that triggered them. Explicit bindings are process-wide
and live in the distinguished DEFAULT_CONTEXT; every context without its own
auto-resolved binding sees them.
"""

from loguru import logger

from snippad.core.store import SnippetStore
from snippad.models.snippet import CategoryBinding, SelectionState
from snippad.protocols import ProjectProtocol

DEFAULT_CONTEXT = "<default>"

_UNSET = CategoryBinding(state=SelectionState.UNSET)


def resolve_from_mode(store: SnippetStore, mode: str | None) -> str | None:
    """Match an editing-mode identifier against the category titles."""
    if not mode:
        return None
    return store.resolve_category_by_context(mode)


def resolve_from_project(store: SnippetStore, project: ProjectProtocol | None) -> str | None:
    """Match the current project identifier against the category titles.

    Skipped (returns None) when there is no project capability or no project.
    """
    if project is None:
        return None
    project_id = project.current_project_id()
    if not project_id:
        return None
    return store.resolve_category_by_context(project_id)


def auto_resolve(
    store: SnippetStore,
    *,
    mode: str | None = None,
    project: ProjectProtocol | None = None,
) -> str | None:
    """Try the editing mode first, then the project."""
    category = resolve_from_mode(store, mode)
    if category is not None:
        return category
    return resolve_from_project(store, project)


class CategorySelector:
    """Tracks which category applies in each editing context."""

    def __init__(self) -> None:
        self._explicit: CategoryBinding = _UNSET
        self._scoped: dict[str, CategoryBinding] = {}

    def binding(self, context_id: str = DEFAULT_CONTEXT) -> CategoryBinding:
        """Return the binding visible from ``context_id``."""
        scoped = self._scoped.get(context_id)
        if scoped is not None:
            return scoped
        return self._explicit

    def current(self, context_id: str = DEFAULT_CONTEXT) -> str | None:
        return self.binding(context_id).category

    def set_explicit(self, category: str, *, context_id: str = DEFAULT_CONTEXT) -> None:
        """Bind ``category`` process-wide, as chosen by the user.

        The selecting context drops its own auto-resolved binding so the
        choice takes effect there. Other contexts keep theirs.
        """
        self._explicit = CategoryBinding(state=SelectionState.EXPLICIT, category=category)
        self._scoped.pop(context_id, None)
        logger.debug("Category set explicitly to {!r} (from {})", category, context_id)

    def bind_auto(self, context_id: str, category: str) -> None:
        """Bind ``category`` to ``context_id`` only."""
        if context_id == DEFAULT_CONTEXT:
            msg = "auto-resolved categories must be bound to a specific context"
            raise ValueError(msg)
        self._scoped[context_id] = CategoryBinding(
            state=SelectionState.AUTO_RESOLVED, category=category
        )
        logger.debug("Category auto-resolved to {!r} in {}", category, context_id)

    def forget_context(self, context_id: str) -> None:
        """Drop the scoped binding of a context that went away."""
        self._scoped.pop(context_id, None)

    def on_context_change(
        self,
        store: SnippetStore,
        context_id: str,
        *,
        mode: str | None = None,
        project: ProjectProtocol | None = None,
    ) -> str | None:
        """Handle a context-change or project-open signal.

        On a match the category is bound to ``context_id``; otherwise the
        context keeps whatever it had. Returns the matched category.
        """
        category = auto_resolve(store, mode=mode, project=project)
        if category is not None:
            self.bind_auto(context_id, category)
        return category
