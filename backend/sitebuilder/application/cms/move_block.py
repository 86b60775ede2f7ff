from typing import Optional

from sitebuilder.models.block import Block
from sitebuilder.domain.invariants.block import assert_block_editable
from sitebuilder.domain.invariants.exceptions import InvalidState
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.order import key_between
from sitebuilder.utils.transaction import transactional
from .lookups import get_block, neighbor_keys, ordered_blocks


def move_block(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    block_id: str,
    after_block_id: Optional[str],
    is_privileged: bool = False,
) -> Block:
    """
    Move a block right after ``after_block_id`` (or to the top when None).

    Only the moved block's order_key is rewritten.
    """
    block = get_block(tenant_id=tenant_id, block_id=block_id)
    assert_block_editable(block, is_privileged=is_privileged, action="move")

    if after_block_id == block.id:
        raise InvalidState("A block cannot be moved after itself")

    siblings = ordered_blocks(block.page_id, tenant_id)
    position = next(i for i, b in enumerate(siblings) if b.id == block.id)
    current_anchor = siblings[position - 1].id if position > 0 else None

    if current_anchor == after_block_id:
        return block

    others = [b for b in siblings if b.id != block.id]
    lower, upper = neighbor_keys(others, after_block_id, at_end=False)
    previous_key = block.order_key

    with transactional():
        block.order_key = key_between(lower, upper)

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="block.move",
            entity_type="block",
            entity_id=block.id,
            payload={
                "page_id": block.page_id,
                "from": previous_key,
                "to": block.order_key,
            },
        )

    return block
