import copy
import logging
from typing import Any, Dict, Optional

from sqlalchemy import select

from sitebuilder.extensions import db
from sitebuilder.models.block import Block
from sitebuilder.models.page import Page
from sitebuilder.domain.invariants.block import assert_unique_order_keys
from sitebuilder.domain.invariants.exceptions import NotFound
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .lookups import get_page_version, ordered_blocks
from .versions import assert_retention_limit, build_page_version, prune_after_snapshot

logger = logging.getLogger(__name__)


def restore_version(
    *,
    tenant_id: str,
    page_id: str,
    version_id: str,
    actor_id: Optional[str],
    retention_limit: int,
) -> Dict[str, Any]:
    """
    Replace a page's blocks with the content of one of its versions.

    Responsibilities:
    - safety snapshot of the current blocks (trigger ``pre_restore``)
    - delete current blocks and recreate the recorded ones, keys verbatim
    - all of the above in a single transaction
    - prune history once the restore is committed
    """
    assert_retention_limit(retention_limit)

    page: Page | None = (
        db.session.execute(
            select(Page)
            .where(Page.id == page_id, Page.tenant_id == tenant_id)
            .with_for_update()
        )
        .scalar_one_or_none()
    )
    if not page:
        raise NotFound("Page not found")

    target = get_page_version(tenant_id=tenant_id, version_id=version_id)
    if target.page_id != page.id:
        raise NotFound("Version not found")

    recorded = list(target.content_snapshot or [])
    assert_unique_order_keys(entry["order_key"] for entry in recorded)
    current = ordered_blocks(page.id, tenant_id)

    with transactional("Restore failed; the page content was not changed."):
        backup = build_page_version(
            tenant_id=tenant_id,
            page=page,
            blocks=current,
            actor_id=actor_id,
            trigger="pre_restore",
            label=f"Before restoring version {target.version}",
        )

        for block in current:
            db.session.delete(block)
        # Old rows must be gone before recorded keys are reinserted
        db.session.flush()

        for entry in recorded:
            block = Block()
            block.tenant_id = tenant_id
            block.page_id = page.id
            block.kind = entry["kind"]
            block.props = copy.deepcopy(entry.get("props") or {})
            block.order_key = entry["order_key"]
            block.is_visible = bool(entry.get("is_visible", True))
            block.is_locked = bool(entry.get("is_locked", False))
            db.session.add(block)

        db.session.flush()

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="page.version.restore",
            entity_type="page",
            entity_id=page.id,
            payload={
                "restored_version": target.version,
                "backup_version": backup.version,
            },
        )

    # Read before pruning, which may delete the restored version itself
    restored_number, backup_number = target.version, backup.version
    logger.info(
        "Restored page %s to version %s (backup version %s)",
        page_id, restored_number, backup_number,
    )
    prune_after_snapshot(tenant_id=tenant_id, page_id=page_id, retention_limit=retention_limit)

    return {
        "page_id": page_id,
        "restored_version": restored_number,
        "backup_version": backup_number,
        "block_count": len(recorded),
    }
