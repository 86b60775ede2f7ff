from typing import Optional
from sitebuilder.extensions import db
from sitebuilder.domain.invariants.page import assert_page_deletable
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .lookups import get_page


def delete_page(
    *,
    tenant_id: str,
    page_id: str,
    actor_id: Optional[str],
) -> None:
    """
    Hard-delete a page and all its descendants.

    Notes:
    - The home page can never be deleted
    - Blocks and versions go with the page (ORM cascade)
    """
    page = get_page(tenant_id=tenant_id, page_id=page_id)
    assert_page_deletable(page)

    with transactional():
        db.session.delete(page)

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="page.delete",
            entity_type="page",
            entity_id=page_id,
            payload={
                "slug": page.slug,
            },
        )
