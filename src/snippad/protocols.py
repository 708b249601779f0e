"""Capabilities the insertion flow consumes, for dependency injection.

Only ``PromptProtocol`` and ``InserterProtocol`` are required. The others are
optional: callers pass ``None`` when the capability is not available and the
flow falls back to simpler behavior.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class PromptProtocol(Protocol):
    """Interactive chooser."""

    def prompt_choice(self, label: str, choices: Sequence[str]) -> str | None:
        """Ask the user to pick one of ``choices``. Return None if cancelled."""
        ...


@runtime_checkable
class ExpanderProtocol(Protocol):
    """Template engine that expands placeholders while inserting."""

    def expand_snippet(self, body: str) -> None:
        """Expand and insert ``body`` at the insertion point."""
        ...


@runtime_checkable
class InserterProtocol(Protocol):
    """Plain text insertion at the insertion point."""

    def insert_plain_text(self, body: str) -> None:
        """Insert ``body`` verbatim."""
        ...


@runtime_checkable
class ProjectProtocol(Protocol):
    """Identifies the active project."""

    def current_project_id(self) -> str | None:
        """Return the project identifier, or None when not inside a project."""
        ...


@runtime_checkable
class EditorProtocol(Protocol):
    """Opens the snippet document for direct editing."""

    def open_for_editing(self, path: Path) -> None:
        """Open ``path`` in an editor."""
        ...
