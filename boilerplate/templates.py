"""
templates.py

Responsibility: Install bundled example files into a project without overwriting.

Rules:
- A template is installed only if neither its destination nor any of the
  listed alternatives already exists.
- For UTF-8 text files, if Jinja2 markers are present, render with the provided context.
- Everything else is copied byte-for-byte, metadata included.

This module intentionally does NOT know about git, prompts or CLI parsing.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from jinja2 import Environment, StrictUndefined, TemplateError as JinjaTemplateError

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent / "template_files"

_MARKERS = ("{{", "{%", "{#")


class TemplateError(RuntimeError):
    pass


@dataclass(frozen=True)
class InstallResult:
    template: str
    destination: Path
    created: bool
    rendered: bool = False
    existing: Path | None = None


def _environment() -> Environment:
    return Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def _read_text(path: Path) -> str | None:
    """
    Best-effort: None if the file cannot be decoded as UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return None


def list_templates(templates_dir: str | Path = DEFAULT_TEMPLATES_DIR) -> list[str]:
    tpl_dir = Path(templates_dir)
    if not tpl_dir.is_dir():
        raise TemplateError(f"Template directory not found: {tpl_dir}")
    return sorted(p.name for p in tpl_dir.iterdir() if p.is_file())


def install_template(
    name: str,
    destination: str | Path,
    *,
    context: dict[str, Any],
    templates_dir: str | Path = DEFAULT_TEMPLATES_DIR,
    alternatives: Iterable[str | Path] = (),
) -> InstallResult:
    """
    Copy (or render) template `name` to `destination` unless it already exists.

    `alternatives` are paths that count as "already present", for example
    `next.config.mjs` standing in for `next.config.js`.
    """
    src_path = Path(templates_dir) / name
    dst_path = Path(destination)

    for candidate in (dst_path, *(Path(a) for a in alternatives)):
        if candidate.exists():
            logger.debug("Skipping %s: %s already exists", name, candidate)
            return InstallResult(template=name, destination=dst_path, created=False, existing=candidate)

    if not src_path.is_file():
        raise TemplateError(f"Template not found: {src_path}")

    dst_path.parent.mkdir(parents=True, exist_ok=True)

    text = _read_text(src_path)
    if text is not None and any(marker in text for marker in _MARKERS):
        try:
            out = _environment().from_string(text).render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed rendering template file: {name}: {e}") from e
        dst_path.write_text(out, encoding="utf-8", newline="\n")
        shutil.copystat(src_path, dst_path)
        logger.debug("Rendered %s -> %s", name, dst_path)
        return InstallResult(template=name, destination=dst_path, created=True, rendered=True)

    shutil.copy2(src_path, dst_path)
    logger.debug("Copied %s -> %s", name, dst_path)
    return InstallResult(template=name, destination=dst_path, created=True)
