"""
boilerplate package

This package implements boilerplate-kit as a CLI-first utility.

Key responsibilities are split across modules:
- `config.py`: parse the optional `.boilerplate.yml` into a structured configuration
- `templates.py`: copy-if-absent installation of the bundled example files
- `git.py`: the git commands used by setup and release
- `versioning.py` / `remote.py`: release tags, image tags and repository links
- `bootstrap.py` / `release.py`: the interactive setup and release flows
- `github_client.py`: isolated GitHub REST API interactions (release status)
- `cli.py`: CLI entrypoint and orchestration
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
