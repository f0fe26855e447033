"""HTML body rendering from Jinja2 templates."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

from jinja2 import Environment, FileSystemLoader, select_autoescape


class ViewRenderer(Protocol):
    def render(self, template: str, data: dict[str, Any]) -> str: ...


class JinjaViewRenderer:
    """Renders templates from a directory with HTML autoescaping.

    Args:
        templates_dir: Directory searched for template files.
    """

    def __init__(self, templates_dir: str | Path) -> None:
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "htm", "j2"]),
        )

    def render(self, template: str, data: dict[str, Any]) -> str:
        """Render ``template`` with ``data`` as its context.

        Raises:
            jinja2.TemplateNotFound: If the template does not exist.
        """
        return self._env.get_template(template).render(**data)
