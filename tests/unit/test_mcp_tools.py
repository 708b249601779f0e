"""Tests for MCP tool core functions."""

from pathlib import Path

from snippad.core.selection import CategorySelector
from snippad.core.store import SnippetStore
from snippad.mcp.server import (
    snippad_add_snippet,
    snippad_context_changed,
    snippad_current_category,
    snippad_get_snippet,
    snippad_list_categories,
    snippad_list_snippets,
    snippad_set_category,
)
from tests.unit.samples import MAIN_GUARD_BODY, THANKS_BODY


def test_list_categories(store: SnippetStore) -> None:
    result = snippad_list_categories(store)
    assert result["count"] == 4
    assert result["categories"][1] == "Email"


def test_list_categories_reports_missing_file(tmp_path: Path) -> None:
    result = snippad_list_categories(SnippetStore(tmp_path / "missing.org"))
    assert "error" in result
    assert result["categories"] == []


def test_list_snippets_names_only_by_default(store: SnippetStore) -> None:
    result = snippad_list_snippets(store, category="python-mode")
    assert result["count"] == 3
    assert result["snippets"][0] == {"name": "main guard"}


def test_list_snippets_with_bodies(store: SnippetStore) -> None:
    result = snippad_list_snippets(store, category="Email", include_bodies=True)
    assert result["snippets"] == [{"name": "Thanks", "body": THANKS_BODY}]


def test_get_snippet_needs_a_category(store: SnippetStore) -> None:
    result = snippad_get_snippet(store, CategorySelector(), name="Thanks")
    assert "No category selected" in result["error"]


def test_get_snippet_uses_context_category(store: SnippetStore) -> None:
    selector = CategorySelector()
    snippad_context_changed(store, selector, context_id="buf", mode="python-mode")

    result = snippad_get_snippet(store, selector, name="main guard", context_id="buf")

    assert result == {"category": "python-mode", "name": "main guard", "body": MAIN_GUARD_BODY}


def test_get_snippet_unknown_name(store: SnippetStore) -> None:
    result = snippad_get_snippet(store, CategorySelector(), name="nope", category="Email")
    assert "error" in result


def test_context_changed_reports_binding(store: SnippetStore) -> None:
    selector = CategorySelector()
    result = snippad_context_changed(
        store, selector, context_id="buf", mode="text-mode", project="myproject"
    )
    assert result["resolved"] == "myproject"
    assert result["state"] == "auto"


def test_context_changed_rejects_default_context(store: SnippetStore) -> None:
    result = snippad_context_changed(store, CategorySelector(), context_id="<default>")
    assert "error" in result


def test_set_category_must_exist(store: SnippetStore) -> None:
    selector = CategorySelector()
    result = snippad_set_category(store, selector, category="email")
    assert "error" in result
    assert selector.current() is None


def test_set_category_is_visible_from_other_contexts(store: SnippetStore) -> None:
    selector = CategorySelector()
    assert snippad_set_category(store, selector, category="Email")["state"] == "explicit"

    result = snippad_current_category(selector, context_id="somewhere-else")

    assert result["category"] == "Email"
    assert result["state"] == "explicit"


def test_add_snippet(store: SnippetStore) -> None:
    result = snippad_add_snippet(store, category="Email", name="Bye", body="Bye!")
    assert result["success"] is True
    assert store.get_snippet("Email", "Bye") is not None


def test_add_snippet_reports_errors(store: SnippetStore) -> None:
    result = snippad_add_snippet(store, category="Email", name="", body="x")
    assert result["success"] is False
    assert "error" in result
