"""Rendering of pages through Jinja2 templates."""

from typing import Any

from jinja2 import Environment, Template, TemplateError

from plainwiki.core.errors import RenderError
from plainwiki.core.links import LinkRenderer
from plainwiki.core.models import Page

DEFAULT_TEMPLATES = ("view.html", "edit.html")


class PageRenderer:
    """Renders pages with an autoescaping Jinja2 environment.

    Templates are compiled once at construction so a broken template is
    reported at startup rather than on the first request.
    """

    def __init__(
        self,
        env: Environment,
        links: LinkRenderer | None = None,
        template_names: tuple[str, ...] = DEFAULT_TEMPLATES,
    ):
        if not env.autoescape:
            raise RenderError("page templates require an autoescaping environment")
        self.links = links or LinkRenderer()
        self._templates: dict[str, Template] = {}
        for name in template_names:
            try:
                self._templates[name] = env.get_template(name)
            except TemplateError as exc:
                raise RenderError(f"unable to load template '{name}': {exc}") from exc

    def render(self, template_name: str, page: Page, **context: Any) -> str:
        """Render a page with content escaped and no link rewriting."""
        template = self._templates.get(template_name)
        if template is None:
            raise RenderError(f"unknown template '{template_name}'")
        try:
            return template.render(page=page, **context)
        except TemplateError as exc:
            raise RenderError(
                f"unable to render template '{template_name}': {exc}"
            ) from exc

    def render_with_links(self, template_name: str, page: Page, **context: Any) -> str:
        """Render a page, then turn its link tokens into anchors."""
        return self.links.render(self.render(template_name, page, **context))
