"""Project identification through git."""

import shutil
import subprocess
from pathlib import Path

from loguru import logger


class GitProject:
    """Names the project after the top-level directory of the git work tree."""

    def __init__(self, cwd: str | Path | None = None) -> None:
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()

    def current_project_id(self) -> str | None:
        if shutil.which("git") is None:
            return None
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=self.cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            logger.debug("Not inside a git work tree: {}", self.cwd)
            return None
        return Path(result.stdout.strip()).name or None


class FixedProject:
    """A project identifier supplied by the caller (e.g. an MCP client)."""

    def __init__(self, project_id: str | None) -> None:
        self.project_id = project_id

    def current_project_id(self) -> str | None:
        return self.project_id
