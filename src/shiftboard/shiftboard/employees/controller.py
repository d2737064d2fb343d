from __future__ import annotations

from flask import Flask, jsonify

from ..common.caller import caller_required
from ..common.responses import error_response
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/employees", methods=["GET"], endpoint="list_employees")
    @caller_required
    def list_employees():
        try:
            summaries = container.employee_service.list_employees()
        except DomainError as e:
            return error_response(e)
        return jsonify([s.to_dict() for s in summaries])
