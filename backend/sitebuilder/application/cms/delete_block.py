from typing import Optional

from sitebuilder.extensions import db
from sitebuilder.domain.invariants.block import assert_block_editable
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .lookups import get_block


def delete_block(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    block_id: str,
    is_privileged: bool = False,
) -> None:
    """
    Hard-delete a block. Only a version restore can bring it back.
    """
    block = get_block(tenant_id=tenant_id, block_id=block_id)
    assert_block_editable(block, is_privileged=is_privileged, action="delete")

    page_id = block.page_id

    with transactional():
        db.session.delete(block)

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="block.delete",
            entity_type="block",
            entity_id=block_id,
            payload={"page_id": page_id, "kind": block.kind},
        )
