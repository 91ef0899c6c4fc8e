"""Advisor application endpoints."""

from flask import Blueprint, request

from ..services.advisor_applications import (
    list_applications,
    review_application,
    submit_application,
)
from . import json_body, ok

applications_bp = Blueprint("applications", __name__)


@applications_bp.route("/advisor-applications", methods=["POST"])
def api_submit_application():
    application = submit_application(json_body())
    return ok(http_status=201, application=application.to_dict())


@applications_bp.route("/advisor-applications", methods=["GET"])
def api_list_applications():
    applications = list_applications(status=request.args.get("status"))
    return ok(applications=[a.to_dict() for a in applications])


@applications_bp.route("/advisor-applications/<application_id>", methods=["PUT"])
def api_review_application(application_id: str):
    data = json_body()
    application = review_application(
        application_id, data.get("status"), reviewed_by=data.get("reviewed_by")
    )
    return ok(application=application.to_dict())
