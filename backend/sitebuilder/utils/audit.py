from sitebuilder.extensions import db
from sitebuilder.models.audit_log import AuditLog
from typing import Optional

def log_action(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    action: str,
    entity_type: str,
    entity_id: str,
    payload: dict | None = None
) -> AuditLog:
    """
    Stage an audit entry in the current session. It is committed together
    with the change it describes.
    """
    log = AuditLog()

    log.tenant_id = tenant_id
    log.actor_id = actor_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    db.session.add(log)
    return log
