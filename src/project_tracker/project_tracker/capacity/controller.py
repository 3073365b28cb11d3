from __future__ import annotations

import logging
from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import MonthKey
from ..common.web import admin_required, login_required
from ..core.enums import AuditResource
from ..core.exceptions import PersistenceError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def _month_arg() -> MonthKey:
    value = request.args.get("month")
    return MonthKey.parse(value) if value else MonthKey.of(date.today())


def register(app: Flask, container: Container) -> None:
    @app.route("/capacity/users/<user_id>", methods=["GET"], endpoint="capacity_user")
    @login_required
    def capacity_user(user_id: str):
        try:
            row = container.availability_service.availability_for_user(user_id, _month_arg())
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except PersistenceError:
            logger.exception("Failed to load availability for user_id=%s", user_id)
            return jsonify({"error": "Erro ao consultar disponibilidade"}), 500
        return jsonify(row.to_dict())

    @app.route("/capacity/team", methods=["GET"], endpoint="capacity_team")
    @admin_required(container.audit_service, resource=AuditResource.USER.value)
    def capacity_team():
        try:
            rows = container.availability_service.availability_for_team(_month_arg())
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except PersistenceError:
            logger.exception("Failed to load team availability")
            return jsonify({"error": "Erro ao consultar disponibilidade"}), 500
        return jsonify([r.to_dict() for r in rows])
