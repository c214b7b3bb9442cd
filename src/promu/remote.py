from __future__ import annotations

import re
from urllib.parse import urlsplit

# SCP-like remotes ([user@]host:path) have no scheme; see git-fetch(1), GIT URLS.
_HAS_SCHEME_RE = re.compile(r"^[^:]+://")
_SCP_LIKE_RE = re.compile(r"^(?P<user>[^@]+@)?(?P<host>[^:]+):/?(?P<path>.+)$")


class RemoteURLError(ValueError):
    pass


def scp_to_ssh_url(url: str) -> str:
    """Rewrite `[user@]host:path` as `ssh://[user@]host/path`.

    Scheme-qualified URLs and anything else that does not look SCP-like are
    returned untouched.
    """
    if _HAS_SCHEME_RE.match(url):
        return url
    match = _SCP_LIKE_RE.match(url)
    if match is None:
        return url
    user = match.group("user") or ""
    return f"ssh://{user}{match.group('host')}/{match.group('path')}"


def normalize_remote_url(url: str) -> str:
    """Turn a git remote into a `host/path` repository identifier.

    >>> normalize_remote_url("git@github.com:prometheus/promu.git")
    'github.com/prometheus/promu'
    """
    url = url.strip()
    if not url:
        raise RemoteURLError("empty remote URL")
    try:
        parts = urlsplit(scp_to_ssh_url(url))
    except ValueError as e:
        raise RemoteURLError(f"malformed remote URL {url!r}: {e}") from e

    host = parts.netloc.rpartition("@")[2].split(":", 1)[0]
    path = parts.path.rstrip("/")
    if not host and not path:
        raise RemoteURLError(f"malformed remote URL {url!r}: no host or path")

    location = f"{host}{path}"
    return location.removesuffix(".git")
