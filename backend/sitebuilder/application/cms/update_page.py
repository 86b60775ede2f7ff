from typing import Any, Dict, Optional
from sitebuilder.models.page import Page
from sitebuilder.domain.invariants.exceptions import InvalidState
from sitebuilder.domain.invariants.page import (
    assert_home_page_update,
    assert_page_fields,
    assert_page_slug,
    assert_page_status,
    assert_slug_available,
)
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .lookups import get_page


ALLOWED_UPDATE_FIELDS = ("title", "slug", "status", "seo", "show_in_nav", "nav_label", "nav_order")


def update_page(
    *,
    tenant_id: str,
    page_id: str,
    actor_id: Optional[str],
    data: Dict[str, Any],
) -> Page:
    """
    Update mutable fields on a page.

    Design rules:
    - Only whitelisted fields are mutable
    - No silent no-op updates
    - Invariants are checked before anything is written
    """
    page = get_page(tenant_id=tenant_id, page_id=page_id)

    # Home flag and home slug are immutable
    assert_home_page_update(page, data)

    if not any(field in data for field in ALLOWED_UPDATE_FIELDS):
        # Explicitly fail instead of silently succeeding
        raise InvalidState("No valid fields provided for update")

    if "title" in data and (not isinstance(data["title"], str) or not data["title"].strip()):
        raise InvalidState("Page title is required")
    assert_page_fields(data)
    if "status" in data:
        assert_page_status(data["status"])
    if "slug" in data and data["slug"] != page.slug:
        assert_page_slug(data["slug"])
        assert_slug_available(page.site_id, data["slug"], exclude_page_id=page.id)

    changed_fields: list[str] = []

    with transactional():
        for field in ALLOWED_UPDATE_FIELDS:
            if field in data and getattr(page, field) != data[field]:
                setattr(page, field, data[field])
                changed_fields.append(field)

        if changed_fields:
            log_action(
                tenant_id=tenant_id,
                actor_id=actor_id,
                action="page.update",
                entity_type="page",
                entity_id=page.id,
                payload={
                    "fields": changed_fields,
                },
            )

    return page
