from typing import Any, Dict, Optional
from sqlalchemy.exc import IntegrityError
from sitebuilder.extensions import db
from sitebuilder.models.page import Page
from sitebuilder.domain.invariants.exceptions import InvalidState, PersistenceFailure
from sitebuilder.domain.invariants.page import (
    assert_page_fields,
    assert_page_slug,
    assert_page_status,
    assert_slug_available,
)
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .lookups import get_site


def create_page(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    site_id: str,
    data: Dict[str, Any],
) -> Page:
    """
    Create a new page inside a website, in DRAFT state unless told otherwise.

    Edge cases handled:
    - Missing title or slug
    - Wrongly typed nav and SEO fields
    - Slug format and per-site uniqueness
    - A second home page
    """
    site = get_site(tenant_id=tenant_id, site_id=site_id)

    title: str | None = data.get("title")
    slug: str | None = data.get("slug")

    if not isinstance(title, str) or not title.strip():
        raise InvalidState("Page title is required")
    if not slug:
        raise InvalidState("Page slug is required")

    assert_page_slug(slug)
    status = data.get("status", "draft")
    assert_page_status(status)
    assert_page_fields(data)

    if data.get("is_home") and site.home_page is not None:
        raise InvalidState("This site already has a home page")

    assert_slug_available(site.id, slug)

    page = Page()
    page.tenant_id = tenant_id
    page.site_id = site.id
    page.title = title.strip()
    page.slug = slug
    page.status = status
    page.is_home = bool(data.get("is_home", False))
    page.seo = data.get("seo") or {}
    page.show_in_nav = bool(data.get("show_in_nav", True))
    page.nav_label = data.get("nav_label")
    page.nav_order = data.get("nav_order", len(site.pages))

    try:
        with transactional():
            db.session.add(page)
            db.session.flush()  # ensures page.id is available

            log_action(
                tenant_id=tenant_id,
                actor_id=actor_id,
                action="page.create",
                entity_type="page",
                entity_id=page.id,
                payload={
                    "title": page.title,
                    "slug": page.slug,
                    "status": page.status,
                },
            )

        return page

    except PersistenceFailure as exc:
        # Typically raised by the (site_id, slug) unique constraint when two
        # editors create the same slug at once
        if isinstance(exc.__cause__, IntegrityError):
            raise InvalidState(f"A page with the slug '{slug}' already exists on this site") from exc
        raise
