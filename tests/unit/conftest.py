"""Shared test fixtures."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from snippad.config import ENV_CATEGORY_LEVEL, ENV_DIR, ENV_FILE, ENV_SNIPPET_LEVEL
from snippad.core.store import SnippetStore
from snippad.logging_config import configure_logging
from tests.unit.samples import SNIPPETS_ORG


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's snippad environment out of the tests."""
    for name in (ENV_FILE, ENV_DIR, ENV_CATEGORY_LEVEL, ENV_SNIPPET_LEVEL):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _fresh_logging() -> Iterator[None]:
    """Point loguru at the current (captured) stderr for every test."""
    configure_logging(verbose=True)
    yield
    logger.remove()


@pytest.fixture
def snippet_file(tmp_path: Path) -> Path:
    path = tmp_path / "snippets.org"
    path.write_text(SNIPPETS_ORG, encoding="utf-8")
    return path


@pytest.fixture
def store(snippet_file: Path) -> SnippetStore:
    return SnippetStore(snippet_file)
