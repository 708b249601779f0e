"""Tests for the snippad CLI."""

import json
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner, Result

from snippad.cli import app
from tests.unit.samples import MAIN_GUARD_BODY, THANKS_BODY

runner = CliRunner()


def _run(snippet_file: Path, *args: str, stdin: str | None = None) -> Result:
    return runner.invoke(app, ["--file", str(snippet_file), *args], input=stdin)


def test_categories_lists_titles(snippet_file: Path) -> None:
    result = _run(snippet_file, "categories")
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["python-mode", "Email", "python-mode", "myproject"]


def test_snippets_lists_names(snippet_file: Path) -> None:
    result = _run(snippet_file, "snippets", "python-mode")
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["main guard", "shebang", "logger"]


def test_snippets_json(snippet_file: Path) -> None:
    result = _run(snippet_file, "snippets", "Email", "--json")
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["count"] == 1
    assert data["snippets"][0] == {"name": "Thanks", "body": THANKS_BODY}


def test_snippets_unknown_category_is_empty(snippet_file: Path) -> None:
    result = _run(snippet_file, "snippets", "nope")
    assert result.exit_code == 0
    assert result.stdout == ""


def test_show_prints_body(snippet_file: Path) -> None:
    result = _run(snippet_file, "show", "python-mode", "main guard")
    assert result.exit_code == 0
    assert result.stdout == MAIN_GUARD_BODY + "\n"


def test_show_missing_snippet_fails(snippet_file: Path) -> None:
    result = _run(snippet_file, "show", "python-mode", "nope")
    assert result.exit_code == 1


def test_resolve(snippet_file: Path) -> None:
    assert _run(snippet_file, "resolve", "myproject").stdout.strip() == "myproject"
    assert _run(snippet_file, "resolve", "MyProject").exit_code == 1


def test_insert_with_category(snippet_file: Path) -> None:
    result = _run(snippet_file, "insert", "--category", "Email", "--no-project", stdin="1\n")
    assert result.exit_code == 0
    assert THANKS_BODY in result.stdout


def test_insert_with_mode_uses_numbered_menu(snippet_file: Path) -> None:
    result = _run(snippet_file, "insert", "--mode", "python-mode", "--no-project", stdin="3\n")
    assert result.exit_code == 0
    assert "logger = logging.getLogger(__name__)" in result.stdout
    assert "3. logger" in result.output


def test_insert_prompts_for_category(snippet_file: Path) -> None:
    result = _run(snippet_file, "insert", "--no-project", stdin="2\n1\n")
    assert result.exit_code == 0
    assert THANKS_BODY in result.stdout


def test_insert_out_of_range_reprompts(snippet_file: Path) -> None:
    result = _run(snippet_file, "insert", "-c", "Email", "--no-project", stdin="9\n1\n")
    assert result.exit_code == 0
    assert THANKS_BODY in result.stdout


def test_insert_cancel_fails(snippet_file: Path) -> None:
    result = _run(snippet_file, "insert", "-c", "Email", "--no-project", stdin="0\n")
    assert result.exit_code == 1
    assert THANKS_BODY not in result.stdout


def test_add_with_body_option(snippet_file: Path) -> None:
    result = _run(snippet_file, "add", "Shell", "strict", "--body", "set -euo pipefail")
    assert result.exit_code == 0
    assert _run(snippet_file, "show", "Shell", "strict").stdout == "set -euo pipefail\n"


def test_add_reads_body_from_stdin(snippet_file: Path) -> None:
    result = _run(snippet_file, "add", "Email", "Bye", stdin="See you,\nMe\n")
    assert result.exit_code == 0
    assert _run(snippet_file, "show", "Email", "Bye").stdout == "See you,\nMe\n"


def test_missing_file_fails(tmp_path: Path) -> None:
    result = _run(tmp_path / "missing.org", "categories")
    assert result.exit_code == 1


def test_broken_file_fails(tmp_path: Path) -> None:
    path = tmp_path / "broken.org"
    path.write_text("* C\n:PROPERTIES:\n")
    result = _run(path, "categories")
    assert result.exit_code == 1


def test_invalid_levels_fail(snippet_file: Path) -> None:
    result = runner.invoke(
        app,
        ["--file", str(snippet_file), "--category-level", "2", "--snippet-level", "1", "categories"],
    )
    assert result.exit_code == 1


def test_edit_opens_editor_and_creates_file(tmp_path: Path) -> None:
    path = tmp_path / "new" / "snippets.org"
    with patch("snippad.terminal.click.edit") as edit:
        result = _run(path, "edit")
    assert result.exit_code == 0
    assert path.exists()
    edit.assert_called_once_with(filename=str(path))
