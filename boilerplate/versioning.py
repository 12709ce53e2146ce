"""
versioning.py

Responsibility: SemVer release tags and the Docker image tags derived from them.

Release tags are always `vMAJOR.MINOR.PATCH`. A bare `1.2.3` is accepted and
prefixed; pre-release or build suffixes are rejected.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

TAG_RE = re.compile(r"^v([0-9]+)\.([0-9]+)\.([0-9]+)$")

# Branches whose builds publish an image tag named after the branch verbatim.
BRANCH_TAGS = ("develop", "main")

_DOCKER_TAG_MAX = 128


class VersionError(ValueError):
    pass


@dataclass(frozen=True, order=True)
class Version:
    major: int
    minor: int
    patch: int

    @property
    def tag(self) -> str:
        return f"v{self}"

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def _match_tag(raw: str) -> re.Match[str]:
    version = (raw or "").strip()
    if not version:
        raise VersionError("Version number required (example: 1.0.0)")
    if not version.startswith("v"):
        version = f"v{version}"
    match = TAG_RE.match(version)
    if match is None:
        raise VersionError(f"Invalid version format: {raw!r} (must be in format: v1.0.0)")
    return match


def normalize_version(raw: str) -> str:
    """
    Return the release tag for `raw`, adding the `v` prefix when missing.
    """
    return _match_tag(raw).group(0)


def parse_version(raw: str) -> Version:
    match = _match_tag(raw)
    major, minor, patch = (int(part) for part in match.groups())
    return Version(major=major, minor=minor, patch=patch)


def release_image_tags(raw: str | Version) -> list[str]:
    """
    Image tags published for a release: full tag, major.minor, major, latest.
    """
    version = raw if isinstance(raw, Version) else parse_version(raw)
    return [
        version.tag,
        f"{version.major}.{version.minor}",
        str(version.major),
        "latest",
    ]


def branch_image_tag(branch: str) -> str:
    name = branch.strip()
    if name in BRANCH_TAGS:
        return name
    tag = re.sub(r"[^A-Za-z0-9_.-]", "-", name).lower().lstrip(".-")
    tag = tag[:_DOCKER_TAG_MAX]
    if not tag:
        raise VersionError(f"Branch name does not yield a valid image tag: {branch!r}")
    return tag
