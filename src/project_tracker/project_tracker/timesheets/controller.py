from __future__ import annotations

import logging
from datetime import date, timedelta

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_actor, login_required
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, PersistenceError, ValidationError
from ..container import Container
from .service import hours_by_task

logger = logging.getLogger(__name__)


def _date_arg(value, default: date) -> date:
    if not value:
        return default
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError("Data inválida (YYYY-MM-DD)")


def register(app: Flask, container: Container) -> None:
    @app.route("/timesheets", methods=["POST"], endpoint="timesheets_create")
    @login_required
    def timesheets_create():
        data = request.get_json(silent=True) or {}
        try:
            entry_id = container.timesheet_service.log_hours(
                actor=current_actor(),
                user_id=str(data.get("userId") or session.get("user_id")),
                task_id=str(data.get("taskId") or ""),
                work_date=_date_arg(data.get("date"), date.today()),
                start_time=data.get("startTime") or "",
                end_time=data.get("endTime") or "",
                lunch_deduction=bool(data.get("lunchDeduction")),
                description=data.get("description") or "",
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except AuthorizationError as e:
            return jsonify({"error": str(e)}), 403
        except PersistenceError:
            logger.exception("Failed to save timesheet entry")
            return jsonify({"error": "Erro ao salvar apontamento"}), 500
        return jsonify({"id": entry_id}), 201

    @app.route("/timesheets", methods=["GET"], endpoint="timesheets_list")
    @login_required
    def timesheets_list():
        today = date.today()
        user_id = request.args.get("user_id") or str(session.get("user_id"))
        if session.get("role") != Role.ADMIN.value and user_id != str(session.get("user_id")):
            return jsonify({"error": "Acesso negado"}), 403
        try:
            entries = container.timesheet_service.list_for_user(
                user_id=user_id,
                start=_date_arg(request.args.get("start"), today - timedelta(days=30)),
                end=_date_arg(request.args.get("end"), today),
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except PersistenceError:
            logger.exception("Failed to list timesheet entries for user_id=%s", user_id)
            return jsonify({"error": "Erro ao consultar apontamentos"}), 500
        return jsonify(
            {
                "entries": [e.to_dict() for e in entries],
                "hoursByTask": hours_by_task(entries),
            }
        )

    @app.route("/timesheets/<int:entry_id>", methods=["DELETE"], endpoint="timesheets_delete")
    @login_required
    def timesheets_delete(entry_id: int):
        try:
            container.timesheet_service.delete_entry(actor=current_actor(), entry_id=entry_id)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except AuthorizationError as e:
            return jsonify({"error": str(e)}), 403
        except PersistenceError:
            logger.exception("Failed to delete timesheet entry %s", entry_id)
            return jsonify({"error": "Erro ao excluir apontamento"}), 500
        return jsonify({"success": True})
