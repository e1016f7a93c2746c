from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final, Protocol

from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError

from tasklist_core.errors import RenderError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "ui" / "templates"

PAGE_VIEW: Final[str] = "tasks.html"
LIST_VIEW: Final[str] = "tasks-list.html"


class Renderer(Protocol):
    def render(self, view_name: str, context: Mapping[str, Any]) -> str:
        """Render a named view to HTML, raising RenderError on failure."""
        ...


class Jinja2Renderer:
    def __init__(
        self,
        directory: str | Path = TEMPLATES_DIR,
        *,
        template_globals: Mapping[str, Any] | None = None,
    ) -> None:
        self.templates = Jinja2Templates(directory=str(directory))
        if template_globals:
            self.templates.env.globals.update(template_globals)

    def render(self, view_name: str, context: Mapping[str, Any]) -> str:
        try:
            template = self.templates.get_template(view_name)
            return template.render(**context)
        except TemplateError as e:
            logger.exception("Failed to render %s", view_name)
            raise RenderError(view_name, str(e) or type(e).__name__) from e
