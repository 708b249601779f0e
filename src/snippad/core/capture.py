"""Append new snippets to the snippet document."""

import re

from loguru import logger

from snippad.core.outline.parser import parse_outline
from snippad.core.store import SnippetStore
from snippad.errors import ParseError, SnippadError, StoreNotFound
from snippad.models.snippet import HeadingNode, Snippet

_HEADING_LINE = re.compile(r"^(\*+) ")


def _heading_level(line: str) -> int | None:
    m = _HEADING_LINE.match(line)
    return len(m.group(1)) if m else None


def _reads_back(
    root: HeadingNode, store: SnippetStore, *, category: str, name: str, body: str
) -> bool:
    """Check that the last heading titled ``category`` ends with the given snippet."""
    categories = [
        n for n in root.walk() if n.level == store.category_heading_level and n.title == category
    ]
    if not categories or not categories[-1].children:
        return False
    added = categories[-1].children[-1]
    return (
        added.level == store.snippet_heading_level and added.title == name and added.body == body
    )


def add_snippet(store: SnippetStore, *, category: str, name: str, body: str) -> Snippet:
    """Add a snippet at the end of ``category``, creating the category if needed.

    With duplicate category headings the snippet goes under the last one. A
    missing document is created.

    Args:
        store: Store whose document is modified.
        category: Category title, matched exactly.
        name: Snippet heading title (single line).
        body: Snippet text. Must not contain heading lines.

    Raises:
        SnippadError: The snippet would break the document or would not read
            back with exactly this category, name and body. The file is
            left untouched.
        ParseError: The existing document is already broken.
    """
    if not name.strip() or "\n" in name:
        msg = f"Invalid snippet name: {name!r}"
        raise SnippadError(msg)
    if not category.strip() or "\n" in category:
        msg = f"Invalid category name: {category!r}"
        raise SnippadError(msg)
    body_lines = body.split("\n") if body else []
    if any(_heading_level(line) is not None for line in body_lines):
        msg = "Snippet body cannot contain org heading lines"
        raise SnippadError(msg)

    try:
        text = store.read_text()
    except StoreNotFound:
        if store.document_path.exists():
            raise
        text = ""

    # Fail on a broken document instead of appending to it.
    root = parse_outline(text, source=str(store.document_path))
    headings = list(root.walk())

    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    heading_rows = [i for i, line in enumerate(lines) if _heading_level(line) is not None]

    cat_level = store.category_heading_level
    insert_at: int | None = None
    for node, row in zip(headings, heading_rows, strict=True):
        if node.level == cat_level and node.title == category:
            insert_at = len(lines)
            for later in heading_rows:
                level = _heading_level(lines[later])
                if later > row and level is not None and level <= cat_level:
                    insert_at = later
                    break

    new_lines = ["*" * store.snippet_heading_level + " " + name, *body_lines]
    created = insert_at is None
    if insert_at is None:
        new_lines.insert(0, "*" * cat_level + " " + category)
        insert_at = len(lines)

    lines[insert_at:insert_at] = new_lines
    new_text = "\n".join(lines) + "\n"

    # Refuse anything that would not read back exactly as given.
    try:
        new_root = parse_outline(new_text, source=str(store.document_path))
    except ParseError as e:
        msg = f"Snippet {name!r} would leave the snippet file unparseable: {e}"
        raise SnippadError(msg) from e
    if not _reads_back(new_root, store, category=category, name=name, body=body):
        msg = (
            f"Snippet {name!r} in category {category!r} would not read back unchanged; "
            "check for org metadata lines (SCHEDULED, CLOCK, ...), tags or trailing spaces"
        )
        raise SnippadError(msg)

    store.document_path.parent.mkdir(parents=True, exist_ok=True)
    store.document_path.write_text(new_text, encoding="utf-8")
    if created:
        logger.info("Created category {!r} in {}", category, store.document_path)
    logger.info("Added snippet {!r} to category {!r}", name, category)
    return Snippet(category=category, name=name, body=body)
