import copy
from typing import Any, Dict, Optional

from sitebuilder.extensions import db
from sitebuilder.models.block import Block
from sitebuilder.domain.invariants.block import assert_block_kind, assert_block_props
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.order import key_between
from sitebuilder.utils.transaction import transactional
from .lookups import get_page, neighbor_keys, ordered_blocks


def create_block(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    page_id: str,
    kind: str,
    props: Optional[Dict[str, Any]] = None,
    after_block_id: Optional[str] = None,
    is_visible: bool = True,
) -> Block:
    """
    Insert a block right after ``after_block_id``, or at the end of the
    page when no anchor is given.

    Only the new block gets a key; siblings are never re-keyed.
    """
    page = get_page(tenant_id=tenant_id, page_id=page_id)

    assert_block_kind(kind)
    props = {} if props is None else props
    assert_block_props(props)

    siblings = ordered_blocks(page.id, tenant_id)
    lower, upper = neighbor_keys(siblings, after_block_id, at_end=True)

    block = Block()
    block.tenant_id = tenant_id
    block.page_id = page.id
    block.kind = kind
    block.props = copy.deepcopy(props)
    block.order_key = key_between(lower, upper)
    block.is_visible = bool(is_visible)
    block.is_locked = False

    with transactional():
        db.session.add(block)
        db.session.flush()

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="block.create",
            entity_type="block",
            entity_id=block.id,
            payload={
                "page_id": page.id,
                "kind": block.kind,
                "order_key": block.order_key,
            },
        )

    return block
