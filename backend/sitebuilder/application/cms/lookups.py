"""
Tenant-scoped loaders shared by the CMS use cases.

Every query filters on ``tenant_id`` so a foreign id is indistinguishable
from a missing one.
"""
from typing import List, Optional

from sitebuilder.domain.invariants.exceptions import NotFound
from sitebuilder.models.block import Block
from sitebuilder.models.page import Page
from sitebuilder.models.page_version import PageVersion
from sitebuilder.models.site import Site


def get_site(*, tenant_id: str, site_id: str) -> Site:
    site = Site.query.filter_by(id=site_id, tenant_id=tenant_id).first()
    if not site:
        raise NotFound("Website not found")
    return site


def get_page(*, tenant_id: str, page_id: str) -> Page:
    page = Page.query.filter_by(id=page_id, tenant_id=tenant_id).first()
    if not page:
        raise NotFound("Page not found")
    return page


def get_block(*, tenant_id: str, block_id: str) -> Block:
    block = Block.query.filter_by(id=block_id, tenant_id=tenant_id).first()
    if not block:
        raise NotFound("Block not found")
    return block


def get_page_version(*, tenant_id: str, version_id: str) -> PageVersion:
    version = PageVersion.query.filter_by(id=version_id, tenant_id=tenant_id).first()
    if not version:
        raise NotFound("Version not found")
    return version


def ordered_blocks(page_id: str, tenant_id: str) -> List[Block]:
    """
    Blocks of a page sorted by order_key with code-point comparison.
    """
    blocks = Block.query.filter_by(page_id=page_id, tenant_id=tenant_id).all()
    return sorted(blocks, key=lambda b: b.order_key)


def list_sites(*, tenant_id: str, include_archived: bool = False) -> List[Site]:
    query = Site.query.filter_by(tenant_id=tenant_id)
    if not include_archived:
        query = query.filter(Site.status != "archived")
    return query.order_by(Site.created_at.desc()).all()


def list_pages(*, tenant_id: str, site_id: str) -> List[Page]:
    get_site(tenant_id=tenant_id, site_id=site_id)
    return (
        Page.query
        .filter_by(site_id=site_id, tenant_id=tenant_id)
        .order_by(Page.nav_order.asc(), Page.slug.asc())
        .all()
    )


def list_blocks(*, tenant_id: str, page_id: str) -> List[Block]:
    page = get_page(tenant_id=tenant_id, page_id=page_id)
    return ordered_blocks(page.id, tenant_id)


def neighbor_keys(blocks: List[Block], after_block_id: Optional[str], *, at_end: bool):
    """
    Order keys bounding the slot right after ``after_block_id``.

    ``blocks`` must already be sorted and must not contain the block being
    placed. With no anchor the slot is the end of the list (``at_end``) or
    its start.
    """
    if after_block_id is None:
        if not blocks:
            return None, None
        if at_end:
            return blocks[-1].order_key, None
        return None, blocks[0].order_key

    for index, block in enumerate(blocks):
        if block.id == after_block_id:
            upper = blocks[index + 1].order_key if index + 1 < len(blocks) else None
            return block.order_key, upper

    raise NotFound("The block to insert after was not found on this page")
