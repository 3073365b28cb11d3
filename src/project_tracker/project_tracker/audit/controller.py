from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.web import admin_required
from ..core.enums import AuditResource
from ..core.exceptions import ValidationError
from ..container import Container
from .model import AuditInput

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/audit/log", methods=["POST"], endpoint="audit_log_create")
    def audit_log_create():
        # Note: the caller identity comes from the body; the session is not checked here.
        payload = dict(request.get_json(silent=True) or {})
        payload["ipAddress"] = payload.get("ipAddress") or request.remote_addr
        payload["userAgent"] = payload.get("userAgent") or request.headers.get("User-Agent")

        try:
            entry = AuditInput.from_payload(payload)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

        container.audit_service.record(entry)
        return jsonify({"success": True}), 201

    @app.route("/audit/logs", methods=["GET"], endpoint="audit_logs")
    @admin_required(container.audit_service, resource=AuditResource.AUDIT_LOG.value)
    def audit_logs():
        logs = container.audit_service.query(
            user_id=request.args.get("userId") or None,
            action=request.args.get("action") or None,
            resource=request.args.get("resource") or None,
            start_date=request.args.get("startDate") or None,
            end_date=request.args.get("endDate") or None,
            limit=request.args.get("limit", type=int),
        )
        return jsonify([e.to_dict() for e in logs])
