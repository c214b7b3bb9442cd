from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from ..logging import get_logger

logger = get_logger(__name__)


def _run_git(
    args: Sequence[str], *, cwd: Path
) -> subprocess.CompletedProcess[str] | None:
    try:
        return subprocess.run(
            ["git", *args],
            cwd=cwd,
            check=False,
            text=True,
            capture_output=True,
        )
    except FileNotFoundError:
        logger.debug("git.missing", args=list(args))
        return None


def git_stdout(args: Sequence[str], *, cwd: Path) -> str | None:
    result = _run_git(args, cwd=cwd)
    if result is None or result.returncode != 0:
        return None
    output = result.stdout.strip()
    return output or None


def git_toplevel(cwd: Path) -> Path | None:
    toplevel = git_stdout(["rev-parse", "--show-toplevel"], cwd=cwd)
    if toplevel is None:
        return None
    return Path(toplevel)


class RevisionSource(Protocol):
    """Answers the version-control questions asked about a project."""

    def toplevel(self) -> Path | None: ...

    def remote_url(self) -> str | None: ...

    def branch(self) -> str | None: ...

    def revision(self) -> str | None: ...


class GitRevisionSource:
    """`RevisionSource` backed by the `git` binary, run from `cwd`."""

    def __init__(self, cwd: Path | None = None) -> None:
        self.cwd = Path.cwd() if cwd is None else cwd

    def toplevel(self) -> Path | None:
        return git_toplevel(self.cwd)

    def remote_url(self) -> str | None:
        return git_stdout(["config", "--get", "remote.origin.url"], cwd=self.cwd)

    def branch(self) -> str | None:
        return git_stdout(["rev-parse", "--abbrev-ref", "HEAD"], cwd=self.cwd)

    def revision(self) -> str | None:
        return git_stdout(["rev-parse", "HEAD"], cwd=self.cwd)
