from __future__ import annotations

from dataclasses import dataclass
from functools import wraps

from flask import g, jsonify, session

from ..core.enums import Role


@dataclass(frozen=True)
class Caller:
    """Identity placed in the session by the upstream identity layer."""

    role: Role
    employee_id: str


def caller_required(view):
    """Reject requests without a caller context; expose it as ``g.caller``."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "role" not in session or not session.get("employee_id"):
            return jsonify({"error": "Authentication required"}), 401

        try:
            role = Role(session["role"])
        except ValueError:
            return jsonify({"error": "Forbidden"}), 403

        g.caller = Caller(role=role, employee_id=str(session["employee_id"]))
        return view(*args, **kwargs)

    return wrapper
