from functools import wraps
from typing import Optional

from flask import current_app, g, jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity

# Roles allowed to lock, unlock and change locked blocks
PRIVILEGED_ROLES = ("owner", "admin")


def tenant_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        tenant = g.get("current_tenant")
        if not tenant:
            return jsonify({"error": "Tenant context missing"}), 400

        if get_jwt().get("tenant_id") != tenant.id:
            return jsonify({"error": "Tenant mismatch"}), 403

        return fn(*args, **kwargs)
    return wrapper


def roles_required(*allowed_roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if get_jwt().get("role") not in allowed_roles:
                return jsonify({"error": "Insufficient permissions"}), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator


def current_actor_id() -> Optional[str]:
    return get_jwt_identity()


def is_privileged() -> bool:
    return get_jwt().get("role") in PRIVILEGED_ROLES


def tenant_retention_limit() -> int:
    """
    Page versions kept for the current tenant's plan.
    """
    default = current_app.config["DEFAULT_VERSION_HISTORY_LIMIT"]
    return g.current_tenant.retention_limit(default)
