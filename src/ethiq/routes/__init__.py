"""Routes package for EthIQ Board.

Every endpoint answers with a JSON envelope: {"success": true, ...} or
{"success": false, "error": "..."}.
"""

from flask import jsonify, request


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def field(data: dict, *names, default=None):
    """First present value among snake_case and camelCase spellings."""
    for name in names:
        if data.get(name) not in (None, ""):
            return data[name]
    return default


def ok(*, http_status: int = 200, **payload):
    return jsonify({"success": True, **payload}), http_status


def fail(error: str, *, http_status: int = 400, **payload):
    return jsonify({"success": False, "error": error, **payload}), http_status
