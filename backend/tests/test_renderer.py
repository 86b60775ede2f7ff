"""Tests for HTML rendering of site snapshots."""

import pytest

from sitebuilder.application.cms.create_block import create_block
from sitebuilder.domain.invariants.block import BLOCK_KINDS
from sitebuilder.rendering import render, render_preview
from sitebuilder.rendering.blocks import DEFAULT_PROPS, coerce, resolve_props
from sitebuilder.rendering.renderer import normalize_path

from .conftest import ACTOR_ID


def make_snapshot(home_blocks=None, extra_pages=None):
    pages = [
        {
            "id": "p-home",
            "title": "Home",
            "slug": "/",
            "is_home": True,
            "seo": {},
            "blocks": home_blocks or [],
        }
    ]
    pages.extend(extra_pages or [])
    return {
        "site": {
            "id": "s-1",
            "name": "Acme Studio",
            "subdomain": "acme-studio",
            "branding": {"primary_color": "#112233"},
            "seo_defaults": {"title_template": "%s | Acme Studio"},
            "favicon_url": None,
        },
        "navigation": [{"label": p["title"], "slug": p["slug"]} for p in pages],
        "pages": pages,
    }


class TestRouting:
    def test_no_deployment_renders_coming_soon(self):
        page = render(None, "/")
        assert page.status_code == 200
        assert "Coming soon" in page.html
        assert page.page_slug is None

    @pytest.mark.parametrize("path,expected", [
        ("", "/"),
        ("/", "/"),
        ("/about/", "/about"),
        ("about", "/about"),
        ("/about?ref=nav", "/about"),
    ])
    def test_normalize_path(self, path, expected):
        assert normalize_path(path) == expected

    def test_exact_slug_match(self):
        about = {"id": "p-2", "title": "About", "slug": "/about", "blocks": []}
        snapshot = make_snapshot(extra_pages=[about])

        assert render(snapshot, "/about/").page_slug == "/about"
        assert render(snapshot, "").page_slug == "/"

    def test_unknown_path_is_404(self):
        page = render(make_snapshot(), "/missing")
        assert page.status_code == 404
        assert "Page not found" in page.html

    def test_empty_page_shows_placeholder(self):
        page = render(make_snapshot(), "/")
        assert page.status_code == 200
        assert "This page is being built" in page.html

    def test_title_uses_site_template(self):
        html = render(make_snapshot(), "/").html
        assert "<title>Home | Acme Studio</title>" in html


class TestBlocks:
    def test_default_props_cover_every_kind(self):
        assert set(DEFAULT_PROPS) == set(BLOCK_KINDS)

    @pytest.mark.parametrize("kind", BLOCK_KINDS)
    def test_every_kind_renders_with_empty_props(self, kind):
        page = render(make_snapshot([{"kind": kind, "props": {}}]), "/")
        assert page.status_code == 200
        assert f'class="block block-{kind.replace("_", "-")}"' in page.html

    def test_blocks_render_in_stored_order(self):
        blocks = [
            {"kind": "hero", "props": {"heading": "First"}},
            {"kind": "cta", "props": {"heading": "Second"}},
        ]
        html = render(make_snapshot(blocks), "/").html
        assert html.index("First") < html.index("Second")

    def test_text_props_are_escaped(self):
        blocks = [{"kind": "hero", "props": {"heading": "<script>alert(1)</script>"}}]
        html = render(make_snapshot(blocks), "/").html
        assert "<script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html

    def test_custom_html_is_sandboxed(self):
        blocks = [{"kind": "custom_html", "props": {"html": "<script>steal()</script><b>hi</b>"}}]
        html = render(make_snapshot(blocks), "/").html
        assert "<script>" not in html
        assert 'sandbox=""' in html
        assert "srcdoc=\"&lt;script&gt;steal()&lt;/script&gt;&lt;b&gt;hi&lt;/b&gt;\"" in html

    def test_unknown_kind_uses_generic_template(self):
        blocks = [{"kind": "carousel", "props": {"title": "Slides", "description": "Many <b>slides</b>"}}]
        html = render(make_snapshot(blocks), "/").html
        assert '<section class="block block-generic" data-kind="carousel">' in html
        assert "<h2>Slides</h2>" in html
        assert "Many &lt;b&gt;slides&lt;/b&gt;" in html

    def test_unknown_kind_without_text_is_bare(self):
        html = render(make_snapshot([{"kind": "widget", "props": {"x": 1}}]), "/").html
        assert '<section class="block" data-kind="widget"></section>' in html

    @pytest.mark.parametrize("block", [
        {"kind": "hero", "props": "not a map"},
        {"kind": "features", "props": {"features": "oops", "columns": "three"}},
        {"kind": "pricing", "props": {"plans": [{"name": 5, "features": [1, None, "x"]}, "junk"]}},
        {"kind": None, "props": None},
        "not even a block",
    ])
    def test_odd_props_never_raise(self, block):
        assert render(make_snapshot([block]), "/").status_code == 200

    def test_navbar_falls_back_to_navigation(self):
        about = {"id": "p-2", "title": "About", "slug": "/about", "blocks": []}
        html = render(make_snapshot([{"kind": "navbar", "props": {}}], [about]), "/").html
        assert 'href="/about"' in html
        assert "Acme Studio" in html

    def test_output_is_deterministic(self):
        blocks = [
            {"kind": "navbar", "props": {}},
            {"kind": "features", "props": {"features": [{"title": "Fast"}]}},
            {"kind": "footer", "props": {}},
        ]
        snapshot = make_snapshot(blocks)
        assert render(snapshot, "/").html == render(snapshot, "/").html


class TestPropCoercion:
    def test_numbers_become_text(self):
        assert coerce(42, "") == "42"

    def test_wrong_type_falls_back_to_default(self):
        assert coerce({"a": 1}, "fallback") == "fallback"
        assert coerce("yes", False) is False
        assert coerce("4", 3) == 4

    def test_list_items_take_item_shape(self):
        props = resolve_props("faq", {"items": [{"question": "Why?"}, "junk"]})
        assert props["items"] == [{"question": "Why?", "answer": ""}]

    def test_missing_props_get_defaults(self):
        props = resolve_props("cta", {})
        assert props["button_text"] == "Get in touch"


class TestPreview:
    def test_preview_renders_live_tree(self, tenant, site, home_page):
        create_block(
            tenant_id=tenant.id,
            actor_id=ACTOR_ID,
            page_id=home_page.id,
            kind="hero",
            props={"heading": "Draft heading"},
        )

        page = render_preview(site, "/")
        assert page.status_code == 200
        assert "Draft heading" in page.html
