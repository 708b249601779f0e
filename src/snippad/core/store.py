"""Interpret an outline document as a store of categorized snippets."""

from pathlib import Path

from loguru import logger

from snippad.config import DEFAULT_CATEGORY_HEADING_LEVEL, DEFAULT_SNIPPET_HEADING_LEVEL, Settings
from snippad.core.outline.parser import parse_outline
from snippad.errors import StoreNotFound
from snippad.models.snippet import HeadingNode, Snippet


class SnippetStore:
    """Snippets grouped by category headings in an org file.

    Categories are headings at ``category_heading_level``; snippets are
    headings at ``snippet_heading_level`` whose parent is a category. The file
    is read and parsed again on every query, so edits show up immediately.
    """

    def __init__(
        self,
        document_path: str | Path,
        *,
        category_heading_level: int = DEFAULT_CATEGORY_HEADING_LEVEL,
        snippet_heading_level: int = DEFAULT_SNIPPET_HEADING_LEVEL,
    ) -> None:
        self.document_path = Path(document_path)
        self.category_heading_level = category_heading_level
        self.snippet_heading_level = snippet_heading_level

    @classmethod
    def from_settings(cls, settings: Settings) -> "SnippetStore":
        return cls(
            settings.document_path,
            category_heading_level=settings.category_heading_level,
            snippet_heading_level=settings.snippet_heading_level,
        )

    def read_text(self) -> str:
        """Return the raw document text.

        Raises:
            StoreNotFound: The file does not exist or cannot be read.
        """
        try:
            return self.document_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Cannot read snippet file {str(self.document_path)!r}: {e}"
            raise StoreNotFound(msg) from e

    def _parse(self) -> HeadingNode:
        text = self.read_text()
        logger.debug("Parsing {} ({} bytes)", self.document_path, len(text))
        return parse_outline(text, source=str(self.document_path))

    def list_categories(self) -> list[str]:
        """Titles of all category headings, in document order.

        Duplicate titles are kept; each occurrence is listed.
        """
        root = self._parse()
        return [n.title for n in root.walk() if n.level == self.category_heading_level]

    def list_snippets(self, category: str) -> list[Snippet]:
        """Snippets under every category heading titled exactly ``category``.

        Returns an empty list if there is no such category.
        """
        root = self._parse()
        result: list[Snippet] = []
        for node in root.walk():
            if node.level != self.snippet_heading_level:
                continue
            parent = node.parent
            # Headings above the first category hang off the untitled root.
            if parent is None or parent.level == 0 or parent.title != category:
                continue
            result.append(Snippet(category=category, name=node.title, body=node.body))
        return result

    def get_snippet(self, category: str, name: str) -> Snippet | None:
        """Return the first snippet called ``name`` in ``category``."""
        for snippet in self.list_snippets(category):
            if snippet.name == name:
                return snippet
        return None

    def resolve_category_by_context(self, context_name: str) -> str | None:
        """Return ``context_name`` if it is exactly a category title, else None."""
        if context_name in self.list_categories():
            return context_name
        return None
