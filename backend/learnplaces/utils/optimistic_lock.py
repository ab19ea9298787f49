from flask import request, abort
from datetime import timezone
from dateutil.parser import parse, ParserError


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def enforce_optimistic_lock(entity):
    """
    Enforces optimistic locking using the If-Unmodified-Since header.
    Aborts with 409 Conflict if the learnplace or block changed since.
    """
    client_ts = request.headers.get("If-Unmodified-Since")
    if not client_ts or entity.updated_at is None:
        return  # No optimistic lock requested

    try:
        client_ts = normalize_ts(parse(client_ts))
    except (ParserError, OverflowError, ValueError):
        abort(400, description="Invalid If-Unmodified-Since header")

    # HTTP dates carry whole seconds only
    server_ts = normalize_ts(entity.updated_at).replace(microsecond=0)

    if server_ts > client_ts:
        abort(
            409,
            description=f"Conflict detected. {type(entity).__name__} {entity.id} has been modified."
        )
