"""
remote.py

Responsibility: Turn a git remote URL into the GitHub repository coordinates used
for post-release links (Actions, Releases) and the GHCR image reference.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlparse

# git@github.com:owner/name.git
_SCP_RE = re.compile(r"^(?:[^@/]+@)?(?P<host>[^:/]+):(?P<path>[^/].*)$")


class RemoteError(ValueError):
    pass


@dataclass(frozen=True)
class RepoSlug:
    host: str
    owner: str
    name: str

    @property
    def path(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def web_url(self) -> str:
        return f"https://{self.host}/{self.path}"

    @property
    def actions_url(self) -> str:
        return f"{self.web_url}/actions"

    @property
    def releases_url(self) -> str:
        return f"{self.web_url}/releases"

    def image_ref(self, tag: str, registry: str = "ghcr.io") -> str:
        # GHCR rejects upper-case repository names.
        return f"{registry}/{self.path.lower()}:{tag}"


def _split_path(host: str, path: str, url: str) -> RepoSlug:
    path = path.strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    parts = [p for p in path.split("/") if p]
    if len(parts) != 2:
        raise RemoteError(f"Remote URL does not point to an owner/repository: {url}")
    return RepoSlug(host=host, owner=parts[0], name=parts[1])


def parse_remote_url(url: str) -> RepoSlug:
    """
    Parse scp-style SSH, ssh:// and http(s):// remotes.
    """
    raw = (url or "").strip()
    if not raw:
        raise RemoteError("Remote URL is empty")

    if "://" in raw:
        parsed = urlparse(raw)
        if parsed.scheme not in ("https", "http", "ssh", "git") or not parsed.hostname:
            raise RemoteError(f"Unsupported remote URL: {url}")
        return _split_path(parsed.hostname, parsed.path, url)

    match = _SCP_RE.match(raw)
    if match is None:
        raise RemoteError(f"Unsupported remote URL: {url}")
    return _split_path(match.group("host"), match.group("path"), url)
