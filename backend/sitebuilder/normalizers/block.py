def normalize_block(block, admin=False):
    base = {
        "id": block.id,
        "page_id": block.page_id,
        "kind": block.kind,
        "order_key": block.order_key,
        "props": block.props or {},
        "is_visible": bool(block.is_visible),
        "is_locked": bool(block.is_locked),
    }

    if admin:
        base["created_at"] = block.created_at.isoformat()
        base["updated_at"] = block.updated_at.isoformat()

    return base
