"""
HTML rendering of published (or previewed) sites.

``render`` is a pure function of a deployment snapshot and a request path:
it never touches the database and identical input yields byte-identical
output. All interpolation goes through Jinja2 autoescaping.
"""
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from sitebuilder.application.cms.publish_site import build_site_snapshot
from .blocks import DEFAULT_PROPS, generic_props, resolve_props

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")

PLACEHOLDER_MESSAGE = "This page is being built. Check back soon."

_env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(default=True, default_for_string=True),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


@dataclass(frozen=True)
class RenderedPage:
    status_code: int
    html: str
    page_slug: Optional[str] = None


def normalize_path(path: Optional[str]) -> str:
    path = (path or "").strip().split("?", 1)[0].split("#", 1)[0]
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def find_page(snapshot: Dict[str, Any], path: str) -> Optional[Dict[str, Any]]:
    pages = [p for p in snapshot.get("pages") or [] if isinstance(p, dict)]
    for page in pages:
        if page.get("slug") == path:
            return page
    if path == "/":
        return next((p for p in pages if p.get("is_home")), None)
    return None


def _site_context(snapshot: Dict[str, Any]) -> Dict[str, Any]:
    site = snapshot.get("site") if isinstance(snapshot.get("site"), dict) else {}
    branding = site.get("branding") if isinstance(site.get("branding"), dict) else {}
    seo = site.get("seo_defaults") if isinstance(site.get("seo_defaults"), dict) else {}

    def text(source, key, default=""):
        value = source.get(key)
        return str(value) if value is not None else default

    return {
        "name": text(site, "name"),
        "favicon_url": text(site, "favicon_url"),
        "branding": {
            "primary_color": text(branding, "primary_color", "#3B82F6"),
            "secondary_color": text(branding, "secondary_color", "#1E40AF"),
            "accent_color": text(branding, "accent_color", "#F59E0B"),
            "font_heading": text(branding, "font_heading", "Inter"),
            "font_body": text(branding, "font_body", "Inter"),
        },
        "title_template": text(seo, "title_template"),
        "description": text(seo, "description"),
    }


def _navigation(snapshot: Dict[str, Any]):
    items = []
    for item in snapshot.get("navigation") or []:
        if isinstance(item, dict) and item.get("slug") is not None:
            items.append({"label": str(item.get("label") or ""), "slug": str(item["slug"])})
    return items


def _page_title(page: Dict[str, Any], site: Dict[str, Any]) -> str:
    seo = page.get("seo") if isinstance(page.get("seo"), dict) else {}
    if seo.get("title"):
        return str(seo["title"])

    title = str(page.get("title") or "")
    template = site["title_template"]
    if template and "%s" in template:
        return template.replace("%s", title)
    if title and site["name"]:
        return f"{title} | {site['name']}"
    return title or site["name"]


def render_block(block: Dict[str, Any], site: Dict[str, Any], navigation) -> Markup:
    """
    Markup for one ``{"kind", "props"}`` entry. Never raises on odd input.
    """
    block = block if isinstance(block, dict) else {}
    kind = block.get("kind")
    kind = kind if isinstance(kind, str) else ""
    props = block.get("props")

    if kind in DEFAULT_PROPS:
        template = _env.get_template(f"blocks/{kind}.html")
        return Markup(template.render(props=resolve_props(kind, props), site=site, navigation=navigation))

    template = _env.get_template("blocks/generic.html")
    return Markup(template.render(kind=kind, props=generic_props(props)))


def render(snapshot: Optional[Dict[str, Any]], path: Optional[str]) -> RenderedPage:
    """
    Render ``path`` of a site snapshot.

    ``snapshot=None`` (nothing published yet) yields the coming-soon page.
    Unknown paths yield a 404 page. Pages without blocks show the site
    placeholder.
    """
    if not isinstance(snapshot, dict):
        html = _env.get_template("coming_soon.html").render()
        return RenderedPage(status_code=200, html=html)

    path = normalize_path(path)
    site = _site_context(snapshot)
    navigation = _navigation(snapshot)
    page = find_page(snapshot, path)

    if page is None:
        html = _env.get_template("not_found.html").render(
            site=site,
            navigation=navigation,
            title=f"Page not found | {site['name']}" if site["name"] else "Page not found",
            path=path,
        )
        return RenderedPage(status_code=404, html=html)

    blocks = [render_block(b, site, navigation) for b in page.get("blocks") or []]
    seo = page.get("seo") if isinstance(page.get("seo"), dict) else {}

    html = _env.get_template("page.html").render(
        site=site,
        navigation=navigation,
        title=_page_title(page, site),
        description=str(seo.get("description") or site["description"]),
        blocks=blocks,
        placeholder=PLACEHOLDER_MESSAGE,
    )
    return RenderedPage(status_code=200, html=html, page_slug=page.get("slug"))


def render_preview(site, path: Optional[str]) -> RenderedPage:
    """
    Render the current (unpublished) content of ``site`` exactly as a
    deployment of it would render.
    """
    return render(build_site_snapshot(site), path)
