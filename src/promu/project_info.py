"""Resolve name, version, owner, location and revision of the current project."""

from __future__ import annotations

import getpass
import os
from dataclasses import dataclass, replace
from pathlib import Path, PurePosixPath

from .logging import get_logger
from .remote import RemoteURLError, normalize_remote_url
from .settings import PromuSettings, load_settings
from .utils.git import RevisionSource

logger = get_logger(__name__)

NON_GIT = "non-git"
VERSION_FILES: tuple[Path, ...] = (Path("VERSION"), Path("version") / "VERSION")


class ProjectInfoError(RuntimeError):
    pass


@dataclass(frozen=True, slots=True)
class ProjectInfo:
    branch: str
    name: str
    owner: str
    repo: str
    revision: str
    version: str = ""


def find_version(root: Path) -> str | None:
    for candidate in VERSION_FILES:
        path = root / candidate
        if path.is_file():
            return path.read_text(encoding="utf-8").strip()
    return None


def current_dir() -> Path:
    """Working directory, keeping the symlinked spelling from $PWD when valid."""
    try:
        cwd = Path.cwd()
    except OSError as e:
        raise ProjectInfoError(f"Couldn't get current working directory: {e}") from e
    pwd = os.environ.get("PWD")
    if not pwd or not os.path.isabs(pwd):
        return cwd
    try:
        same = os.path.samefile(pwd, cwd)
    except OSError:
        return cwd
    return Path(pwd) if same else cwd


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError) as e:
        raise ProjectInfoError(f"Couldn't get current user: {e}") from e


def _workspace_relative(cwd: Path, workspace_root: Path | None) -> str:
    if workspace_root is None or not cwd.is_relative_to(workspace_root):
        return cwd.as_posix()
    parts = cwd.relative_to(workspace_root).parts
    if parts and parts[0] == "src":
        parts = parts[1:]
    if not parts:
        return cwd.as_posix()
    return PurePosixPath(*parts).as_posix()


def _non_git_info(cwd: Path, settings: PromuSettings) -> ProjectInfo:
    repo = _workspace_relative(cwd, settings.workspace_root)
    return ProjectInfo(
        branch=NON_GIT,
        name=PurePosixPath(repo).name,
        owner=_current_user(),
        repo=repo,
        revision=NON_GIT,
    )


def _git_info(source: RevisionSource) -> ProjectInfo:
    branch = source.branch() or ""
    revision = source.revision() or ""
    remote = source.remote_url()
    if remote is None:
        logger.warning("project_info.remote.missing", remote="origin")
        return ProjectInfo(
            branch=branch, name="", owner="", repo="", revision=revision
        )
    try:
        repo = normalize_remote_url(remote)
    except RemoteURLError as e:
        raise ProjectInfoError(f"Couldn't parse repo location: {e}") from e

    location = PurePosixPath(repo)
    return ProjectInfo(
        branch=branch,
        name=location.name,
        owner=location.parent.name,
        repo=repo,
        revision=revision,
    )


def resolve_project_info(
    source: RevisionSource,
    *,
    cwd: Path | None = None,
    settings: PromuSettings | None = None,
) -> ProjectInfo:
    """Build the `ProjectInfo` for the project at `cwd`.

    Outside a git checkout the working directory stands in for the
    repository and branch/revision are reported as ``non-git``. A checkout
    without an ``origin`` remote reports an empty repo, name and owner. A
    missing VERSION file only logs a warning.

    Warnings go through structlog. Until ``promu.logging.setup_logging`` has
    run, structlog's default logger prints them to stdout, so callers that
    also write to stdout should configure logging first.
    """
    if cwd is None:
        cwd = current_dir()
    if settings is None:
        settings = load_settings()

    toplevel = source.toplevel()
    if toplevel is None:
        logger.debug("project_info.non_git", cwd=str(cwd))
        info = _non_git_info(cwd, settings)
        root = cwd
    else:
        info = _git_info(source)
        root = toplevel

    try:
        version = find_version(root)
    except (OSError, UnicodeDecodeError) as e:
        raise ProjectInfoError(f"Couldn't read project version: {e}") from e
    if version is None:
        logger.warning(
            "project_info.version.missing",
            root=str(root),
            expected=[path.as_posix() for path in VERSION_FILES],
        )
        return info

    return replace(info, version=version)
