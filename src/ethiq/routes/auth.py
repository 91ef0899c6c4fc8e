"""Login and password endpoints."""

from flask import Blueprint

from ..services.auth_provider import login, update_password
from . import field, json_body, ok

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/auth/login", methods=["POST"])
def api_login():
    data = json_body()
    user, session = login(field(data, "email"), field(data, "password"))
    return ok(user=user.to_dict(), session=session)


@auth_bp.route("/auth/update-password", methods=["POST"])
def api_update_password():
    data = json_body()
    user = update_password(
        field(data, "email"), field(data, "new_password", "newPassword", "password")
    )
    return ok(user=user.to_dict(), message="Password updated successfully")
