"""Session helpers shared by the Flask controllers."""

from __future__ import annotations

from functools import wraps

from flask import jsonify, request, session

from ..audit.model import AuditActor, AuditInput
from ..audit.service import AuditService
from ..core.enums import AuditAction, Role


def current_actor() -> AuditActor:
    return AuditActor(
        user_id=str(session.get("user_id")),
        role=session.get("role"),
        ip_address=request.remote_addr,
        user_agent=request.headers.get("User-Agent"),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Autenticação necessária"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(audit: AuditService, *, resource: str):
    """Allow only admins; every refusal is written to the audit log."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"error": "Autenticação necessária"}), 401

            if session.get("role") != Role.ADMIN.value:
                actor = current_actor()
                audit.record(
                    AuditInput(
                        action=AuditAction.ACCESS_DENIED.value,
                        resource=resource,
                        user_id=actor.user_id,
                        user_role=actor.role,
                        ip_address=actor.ip_address,
                        user_agent=actor.user_agent,
                        changes={"path": request.path, "method": request.method},
                    )
                )
                return jsonify({"error": "Acesso negado"}), 403

            return view(*args, **kwargs)

        return wrapper

    return decorator
