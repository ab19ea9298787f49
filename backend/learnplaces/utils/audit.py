from flask import g, has_app_context
from learnplaces.extensions import db
from learnplaces.models.audit_log import AuditLog
from typing import Optional

def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[object],
    payload: dict | None = None
):
    if not has_app_context():
        return  # Nothing to attach the audit row to
    log = AuditLog()

    log.actor_id = g.get("current_user_id")
    log.action = action
    log.entity_type = entity_type
    log.entity_id = str(entity_id) if entity_id is not None else "*"
    log.payload = payload or {}

    db.session.add(log)
