"""Unit tests for the Jinja2 page renderer."""

from pathlib import Path

import pytest
from jinja2 import DictLoader, Environment, FileSystemLoader

from plainwiki.core.errors import RenderError
from plainwiki.core.models import Page
from plainwiki.core.templating import PageRenderer

TEMPLATES_DIR = Path(__file__).parent.parent / "plainwiki" / "templates"


@pytest.fixture
def renderer():
    env = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)), autoescape=True)
    return PageRenderer(env)


# ============================================================
# Construction
# ============================================================


class TestConstruction:
    def test_missing_template_fails_at_build(self):
        env = Environment(loader=DictLoader({"view.html": "x"}), autoescape=True)
        with pytest.raises(RenderError):
            PageRenderer(env)

    def test_malformed_template_fails_at_build(self):
        env = Environment(
            loader=DictLoader({"view.html": "{% if %}", "edit.html": "ok"}),
            autoescape=True,
        )
        with pytest.raises(RenderError):
            PageRenderer(env)

    def test_requires_autoescape(self):
        env = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)))
        with pytest.raises(RenderError):
            PageRenderer(env)


# ============================================================
# Rendering
# ============================================================


class TestRender:
    def test_edit_view_escapes_body(self, renderer):
        page = Page(title="Edit", body=b"<script>alert(1)</script> [Other]")
        html = renderer.render("edit.html", page)
        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html
        # No link rewriting in the editor
        assert "[Other]" in html
        assert 'href="/view/Other"' not in html

    def test_edit_view_keeps_leading_newline(self, renderer):
        # Browsers drop one newline right after the opening textarea tag
        page = Page(title="Lead", body=b"\nfirst line")
        html = renderer.render("edit.html", page)
        assert 'cols="80">\n\nfirst line</textarea>' in html

    def test_edit_view_for_new_page(self, renderer):
        html = renderer.render("edit.html", Page(title="BrandNew"), exists=False)
        assert "Create BrandNew" in html
        assert "<textarea" in html
        assert 'action="/save/BrandNew"' in html

    def test_view_renders_links(self, renderer):
        page = Page(title="Home", body=b"see [FrontPage] for more")
        html = renderer.render_with_links("view.html", page, app_title="Wiki")
        assert 'see <a href="/view/FrontPage">FrontPage</a> for more' in html
        assert "<h1>Home</h1>" in html

    def test_view_keeps_body_escaped(self, renderer):
        page = Page(title="Xss", body=b'<img src=x onerror="boom"> [&Page]')
        html = renderer.render_with_links("view.html", page)
        assert "<img" not in html
        assert "&lt;img" in html
        assert 'href="/view/&amp;Page"' in html

    def test_view_link_cannot_break_attribute(self, renderer):
        page = Page(title="Quote", body=b'[x" onclick="evil]')
        html = renderer.render_with_links("view.html", page)
        assert 'onclick="evil' not in html

    def test_view_without_tokens_has_no_extra_links(self, renderer):
        page = Page(title="Plain", body=b"nothing to link")
        plain = renderer.render("view.html", page)
        linked = renderer.render_with_links("view.html", page)
        assert plain == linked

    def test_undecodable_bytes_are_replaced(self, renderer):
        page = Page(title="Bytes", body=b"caf\xe9")
        html = renderer.render("view.html", page)
        assert "caf�" in html

    def test_unknown_template(self, renderer):
        with pytest.raises(RenderError):
            renderer.render("missing.html", Page(title="X"))

    def test_unknown_filter_fails_at_build(self):
        env = Environment(
            loader=DictLoader(
                {"view.html": "{{ page.title | nosuchfilter }}", "edit.html": "ok"}
            ),
            autoescape=True,
        )
        with pytest.raises(RenderError):
            PageRenderer(env)

    def test_render_failure_is_render_error(self):
        env = Environment(
            loader=DictLoader(
                {"view.html": "{{ page.missing.attr }}", "edit.html": "ok"}
            ),
            autoescape=True,
        )
        renderer = PageRenderer(env)
        with pytest.raises(RenderError):
            renderer.render("view.html", Page(title="X"))
