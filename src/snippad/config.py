"""Configuration for snippad."""

import os
from dataclasses import dataclass
from pathlib import Path

from snippad.errors import ConfigError

# Base directories for the snippet file. First directory which is found is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/snippad").expanduser(),
    Path("~/.config/snippad").expanduser(),
    Path("~/.snippad").expanduser(),
]

DOCUMENT_FILENAME = "snippets.org"

DEFAULT_CATEGORY_HEADING_LEVEL = 1
DEFAULT_SNIPPET_HEADING_LEVEL = 2

ENV_FILE = "SNIPPAD_FILE"
ENV_DIR = "SNIPPAD_DIR"
ENV_CATEGORY_LEVEL = "SNIPPAD_CATEGORY_LEVEL"
ENV_SNIPPET_LEVEL = "SNIPPAD_SNIPPET_LEVEL"


def resolve_data_directory() -> Path:
    """Return the first existing data directory, or the preferred one if none exist."""
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return DATA_DIRECTORIES[0]


@dataclass(frozen=True)
class Settings:
    """Where the snippet document lives and which heading levels mean what."""

    document_path: Path
    category_heading_level: int = DEFAULT_CATEGORY_HEADING_LEVEL
    snippet_heading_level: int = DEFAULT_SNIPPET_HEADING_LEVEL

    def validate(self) -> None:
        if self.category_heading_level < 1:
            msg = f"category heading level must be >= 1, got {self.category_heading_level}"
            raise ConfigError(msg)
        if self.snippet_heading_level <= self.category_heading_level:
            msg = (
                f"snippet heading level ({self.snippet_heading_level}) must be deeper than "
                f"category heading level ({self.category_heading_level})"
            )
            raise ConfigError(msg)


def _env_int(name: str) -> int | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        msg = f"{name} must be an integer, got {raw!r}"
        raise ConfigError(msg) from None


def load_settings(
    *,
    document_path: Path | str | None = None,
    category_heading_level: int | None = None,
    snippet_heading_level: int | None = None,
) -> Settings:
    """Build Settings from explicit overrides, then environment, then defaults."""
    if document_path is not None:
        path = Path(document_path).expanduser()
    elif os.environ.get(ENV_FILE):
        path = Path(os.environ[ENV_FILE]).expanduser()
    elif os.environ.get(ENV_DIR):
        path = Path(os.environ[ENV_DIR]).expanduser() / DOCUMENT_FILENAME
    else:
        path = resolve_data_directory() / DOCUMENT_FILENAME

    if category_heading_level is None:
        category_heading_level = _env_int(ENV_CATEGORY_LEVEL)
    if category_heading_level is None:
        category_heading_level = DEFAULT_CATEGORY_HEADING_LEVEL
    if snippet_heading_level is None:
        snippet_heading_level = _env_int(ENV_SNIPPET_LEVEL)
    if snippet_heading_level is None:
        snippet_heading_level = DEFAULT_SNIPPET_HEADING_LEVEL

    settings = Settings(
        document_path=path,
        category_heading_level=category_heading_level,
        snippet_heading_level=snippet_heading_level,
    )
    settings.validate()
    return settings
