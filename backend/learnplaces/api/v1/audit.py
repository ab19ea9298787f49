from flask import request, jsonify
from sqlalchemy import or_, and_
from datetime import datetime
from learnplaces.models.audit_log import AuditLog
from learnplaces.normalizers.audit import normalize_audit_log
from learnplaces.utils.decorators import roles_required
from . import v1_bp


@v1_bp.route("/audit", methods=["GET"])
@roles_required("admin")
def list_audit_logs():
    # Cursor Pagination
    limit = min(request.args.get("limit", 20, type=int), 100)
    cursor = request.args.get("cursor")

    query = AuditLog.query

    # Optional filters
    if action := request.args.get("action"):
        query = query.filter(AuditLog.action == action)

    if entity_type := request.args.get("entity_type"):
        query = query.filter(AuditLog.entity_type == entity_type)

    if entity_id := request.args.get("entity_id"):
        query = query.filter(AuditLog.entity_id == entity_id)

    # Cursor parsing
    if cursor:
        try:
            ts_str, last_id = cursor.split("|")
            cursor_ts = datetime.fromisoformat(ts_str)
            last_id = int(last_id)
        except ValueError:
            return jsonify({"error": "Invalid cursor format"}), 400

        query = query.filter(
            or_(
                AuditLog.created_at < cursor_ts,
                and_(
                    AuditLog.created_at == cursor_ts,
                    AuditLog.id < last_id
                )
            )
        )

    logs = (
        query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .limit(limit + 1)   # Fetch extra row to detect "has_more"
        .all()
    )

    has_more = len(logs) > limit
    logs = logs[:limit]

    next_cursor = None
    if has_more:
        last = logs[-1]
        next_cursor = f"{last.created_at.isoformat()}|{last.id}"

    return jsonify({
        "data": [normalize_audit_log(log) for log in logs],
        "meta": {
            "next_cursor": next_cursor,
            "has_more": has_more,
        }
    }), 200
