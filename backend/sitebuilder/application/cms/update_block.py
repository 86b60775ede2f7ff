import copy
from typing import Any, Dict, Optional

from sitebuilder.models.block import Block
from sitebuilder.domain.invariants.block import assert_block_editable, assert_block_props
from sitebuilder.domain.invariants.exceptions import InvalidState, PermissionDenied
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .lookups import get_block


ALLOWED_UPDATE_FIELDS = ("props", "is_visible", "is_locked")


def update_block(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    block_id: str,
    data: Dict[str, Any],
    is_privileged: bool = False,
) -> Block:
    """
    Update a block's props, visibility or lock.

    ``props`` replaces the stored map wholesale. Locking, unlocking and any
    edit of a locked block need a privileged caller.
    """
    block = get_block(tenant_id=tenant_id, block_id=block_id)
    assert_block_editable(block, is_privileged=is_privileged)

    if "kind" in data and data["kind"] != block.kind:
        raise InvalidState("The kind of a block cannot be changed; add a new block instead")

    if not any(field in data for field in ALLOWED_UPDATE_FIELDS):
        raise InvalidState("No valid fields provided for update")

    if "props" in data:
        assert_block_props(data["props"])
    if "is_locked" in data and bool(data["is_locked"]) != bool(block.is_locked) and not is_privileged:
        raise PermissionDenied("Locking or unlocking a block requires admin permission")

    changed_fields: list[str] = []

    with transactional():
        if "props" in data and block.props != data["props"]:
            block.props = copy.deepcopy(data["props"])
            changed_fields.append("props")

        for field in ("is_visible", "is_locked"):
            if field in data and bool(getattr(block, field)) != bool(data[field]):
                setattr(block, field, bool(data[field]))
                changed_fields.append(field)

        if changed_fields:
            log_action(
                tenant_id=tenant_id,
                actor_id=actor_id,
                action="block.update",
                entity_type="block",
                entity_id=block.id,
                payload={"fields": changed_fields},
            )

    return block
