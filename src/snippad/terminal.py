"""Terminal implementations of the insertion capabilities.

Prompts and menus go to stderr so that stdout carries nothing but the
inserted snippet text and can be piped.
"""

from collections.abc import Sequence
from pathlib import Path

import click
import typer


class TerminalPrompt:
    """Numbered menu on stderr, answer read from stdin."""

    def prompt_choice(self, label: str, choices: Sequence[str]) -> str | None:
        if not choices:
            return None
        for i, choice in enumerate(choices, start=1):
            typer.echo(f"  {i:>2}. {choice}", err=True)
        while True:
            index: int = typer.prompt(
                f"{label} [1-{len(choices)}, 0 to cancel]", type=int, err=True
            )
            if index == 0:
                return None
            if 1 <= index <= len(choices):
                return choices[index - 1]
            typer.echo(f"Please enter a number between 0 and {len(choices)}.", err=True)


class StdoutInserter:
    """Writes the snippet body to stdout."""

    def insert_plain_text(self, body: str) -> None:
        typer.echo(body, nl=not body.endswith("\n"))


class TerminalEditor:
    """Opens a file in $EDITOR (or the platform default)."""

    def open_for_editing(self, path: Path) -> None:
        click.edit(filename=str(path))
