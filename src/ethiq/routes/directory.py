"""Advisor, company, directory and relationship endpoints."""

from flask import Blueprint, request

from ..services import engagement
from . import json_body, ok

directory_bp = Blueprint("directory", __name__)


@directory_bp.route("/advisors", methods=["GET"])
def api_list_advisors():
    advisors = engagement.list_advisors()
    return ok(advisors=[a.to_dict() for a in advisors])


@directory_bp.route("/advisors", methods=["POST"])
def api_create_advisor():
    advisor = engagement.create_advisor(json_body())
    return ok(http_status=201, advisor=advisor.to_dict())


@directory_bp.route("/advisors/<int:advisor_id>", methods=["GET"])
def api_get_advisor(advisor_id: int):
    return ok(advisor=engagement.get_advisor(advisor_id).to_dict())


@directory_bp.route("/directory", methods=["GET"])
def api_directory():
    """Advisors available for an initial contact from ?company=<name>."""
    company = request.args.get("company")
    advisors = engagement.directory(company)
    return ok(company=company, advisors=[a.to_dict() for a in advisors])


@directory_bp.route("/companies", methods=["GET"])
def api_list_companies():
    return ok(companies=[c.to_dict() for c in engagement.list_companies()])


@directory_bp.route("/companies", methods=["POST"])
def api_create_company():
    company = engagement.create_company(json_body())
    return ok(http_status=201, company=company.to_dict())


@directory_bp.route("/relationships", methods=["GET"])
def api_list_relationships():
    relationships = engagement.list_relationships(request.args.get("company"))
    return ok(relationships=[r.to_dict() for r in relationships])
