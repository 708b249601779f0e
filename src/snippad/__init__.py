"""Reusable text snippets stored in an org-mode outline."""

from snippad.core.capture import add_snippet
from snippad.core.insert import insert_snippet
from snippad.core.selection import DEFAULT_CONTEXT, CategorySelector
from snippad.core.store import SnippetStore
from snippad.errors import ConfigError, InsertAborted, ParseError, SnippadError, StoreNotFound
from snippad.models.snippet import Snippet

__all__ = [
    "DEFAULT_CONTEXT",
    "CategorySelector",
    "ConfigError",
    "InsertAborted",
    "ParseError",
    "Snippet",
    "SnippadError",
    "SnippetStore",
    "StoreNotFound",
    "add_snippet",
    "insert_snippet",
]
