from functools import wraps
from flask import current_app, g
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request
from learnplaces.domain.exceptions import AccessDenied
from learnplaces.extensions import db
from learnplaces.models.user import User, WRITE_ROLES

READ = "read"
WRITE = "write"


def is_active_user(user_id) -> bool:
    # Deactivated accounts lose access before their tokens expire
    try:
        user = db.session.get(User, int(user_id))
    except (TypeError, ValueError):
        return False
    return user is not None and bool(user.is_active)


def default_access_guard(action, subject_id):
    """
    Role based guard used when no ACCESS_GUARD is configured.
    Every authenticated active user may read, admins and editors may write.
    """
    if not is_active_user(g.get("current_user_id")):
        return False
    role = g.get("current_role")
    if action == READ:
        return role is not None
    if action == WRITE:
        return role in WRITE_ROLES
    return False


def has_permission(action, subject_id=None) -> bool:
    guard = current_app.config.get("ACCESS_GUARD") or default_access_guard
    return bool(guard(action, subject_id))


def _load_identity():
    verify_jwt_in_request()
    g.current_user_id = get_jwt_identity()
    g.current_role = get_jwt().get("role")


def permission_required(action):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            _load_identity()

            if not has_permission(action, kwargs.get("learnplace_id")):
                current_app.logger.info(
                    "Denied %s on learnplace %s for user %s",
                    action, kwargs.get("learnplace_id"), g.current_user_id,
                )
                raise AccessDenied("Access denied")

            return fn(*args, **kwargs)
        return wrapper
    return decorator

def roles_required(*allowed_roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            _load_identity()

            if not is_active_user(g.current_user_id) or g.current_role not in allowed_roles:
                raise AccessDenied("Insufficient permissions")

            return fn(*args, **kwargs)
        return wrapper
    return decorator
