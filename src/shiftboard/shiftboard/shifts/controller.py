from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.caller import caller_required
from ..common.responses import error_response
from ..common.validators import require_iso_date
from ..core.exceptions import DomainError
from ..container import Container
from .model import ShiftFilters


def register(app: Flask, container: Container) -> None:
    allocator = container.shift_allocator

    @app.route("/shifts", methods=["POST"], endpoint="create_shift")
    @caller_required
    def create_shift():
        body = request.get_json(silent=True) or {}
        try:
            view = allocator.create_shift(
                employee_id=body.get("employeeId"),
                work_date=body.get("date"),
                start_time=body.get("startTime"),
                end_time=body.get("endTime"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify(view.to_dict()), 201

    @app.route("/shifts", methods=["GET"], endpoint="list_shifts")
    @caller_required
    def list_shifts():
        employee = request.args.get("employee") or None
        date_s = request.args.get("date") or None
        try:
            filters = ShiftFilters(
                employee_id=employee,
                work_date=require_iso_date(date_s) if date_s else None,
            )
            views = allocator.list_shifts(
                caller_role=g.caller.role,
                caller_employee_id=g.caller.employee_id,
                filters=filters,
            )
        except DomainError as e:
            return error_response(e)
        return jsonify([v.to_dict() for v in views])

    # DELETE /shift/<id> is kept for older clients
    @app.route("/shifts/<shift_id>", methods=["DELETE"], endpoint="delete_shift")
    @app.route("/shift/<shift_id>", methods=["DELETE"], endpoint="delete_shift")
    @caller_required
    def delete_shift(shift_id: str):
        try:
            allocator.delete_shift(
                shift_id=shift_id,
                caller_role=g.caller.role,
                caller_employee_id=g.caller.employee_id,
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"message": "Shift deleted successfully"})
