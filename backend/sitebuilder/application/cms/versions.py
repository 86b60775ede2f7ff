"""
Page version history: snapshots, retention and read access.
"""
import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import defer

from sitebuilder.extensions import db
from sitebuilder.models.page import Page
from sitebuilder.models.page_version import PageVersion, VERSION_TRIGGERS
from sitebuilder.domain.invariants.exceptions import InvalidState
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from sitebuilder.utils.versioning import next_version, snapshot_blocks
from .lookups import get_page, get_page_version, ordered_blocks

logger = logging.getLogger(__name__)

DEFAULT_LABELS = {
    "manual": "Manual save",
    "auto": "Autosave",
    "pre_ai": "Before AI generation",
    "pre_restore": "Before restore",
    "pre_publish": "Before publish",
}


def assert_retention_limit(retention_limit: int) -> None:
    if not isinstance(retention_limit, int) or isinstance(retention_limit, bool) or retention_limit < 1:
        raise InvalidState("Version history limit must be at least 1")


def build_page_version(
    *,
    tenant_id: str,
    page: Page,
    blocks: Iterable,
    actor_id: Optional[str],
    trigger: str,
    label: Optional[str] = None,
) -> PageVersion:
    """
    Stage a new PageVersion for ``page`` in the current session.

    The caller owns the transaction.
    """
    if trigger not in VERSION_TRIGGERS:
        raise InvalidState(f"Invalid version trigger: {trigger}")

    version = PageVersion()
    version.tenant_id = tenant_id
    version.page_id = page.id
    version.version = next_version(page.id, tenant_id)
    version.label = (label or "").strip() or DEFAULT_LABELS[trigger]
    version.trigger = trigger
    version.content_snapshot = snapshot_blocks(blocks)
    version.saved_by = actor_id

    db.session.add(version)
    return version


def snapshot_version(
    *,
    tenant_id: str,
    page_id: str,
    actor_id: Optional[str],
    retention_limit: int,
    label: Optional[str] = None,
    trigger: str = "manual",
) -> PageVersion:
    """
    Capture the current blocks of a page as a new version, then prune.

    Pruning runs after the snapshot is committed; if it fails the snapshot
    still stands and the failure is only logged.
    """
    assert_retention_limit(retention_limit)
    page = get_page(tenant_id=tenant_id, page_id=page_id)
    blocks = ordered_blocks(page.id, tenant_id)

    with transactional("Version could not be saved; page history is unchanged."):
        version = build_page_version(
            tenant_id=tenant_id,
            page=page,
            blocks=blocks,
            actor_id=actor_id,
            trigger=trigger,
            label=label,
        )
        db.session.flush()

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="page.version.create",
            entity_type="page",
            entity_id=page.id,
            payload={"version": version.version, "trigger": trigger},
        )

    prune_after_snapshot(tenant_id=tenant_id, page_id=page.id, retention_limit=retention_limit)
    return version


def prune_versions(*, tenant_id: str, page_id: str, retention_limit: int) -> int:
    """
    Delete every version of the page beyond the newest ``retention_limit``.
    Returns the number of deleted versions.
    """
    assert_retention_limit(retention_limit)

    stale = (
        PageVersion.query
        .options(defer(PageVersion.content_snapshot))
        .filter_by(page_id=page_id, tenant_id=tenant_id)
        .order_by(PageVersion.version.desc())
        .offset(retention_limit)
        .all()
    )
    if not stale:
        return 0

    with transactional("Old versions could not be pruned."):
        for version in stale:
            db.session.delete(version)

    logger.info("Pruned %d version(s) of page %s", len(stale), page_id)
    return len(stale)


def prune_after_snapshot(*, tenant_id: str, page_id: str, retention_limit: int) -> int:
    try:
        return prune_versions(tenant_id=tenant_id, page_id=page_id, retention_limit=retention_limit)
    except Exception:
        logger.exception("Pruning versions of page %s failed; the new snapshot is kept", page_id)
        return 0


def list_versions(*, tenant_id: str, page_id: str) -> List[PageVersion]:
    page = get_page(tenant_id=tenant_id, page_id=page_id)
    return (
        PageVersion.query
        .options(defer(PageVersion.content_snapshot))
        .filter_by(page_id=page.id, tenant_id=tenant_id)
        .order_by(PageVersion.version.desc())
        .all()
    )


def get_version(*, tenant_id: str, version_id: str) -> PageVersion:
    return get_page_version(tenant_id=tenant_id, version_id=version_id)
