"""Contact, handshake and nudge endpoints.

Create endpoints take JSON with "company" (name) and "advisor_id" plus the
record fields. Action endpoints are POST /<kind>/<id>/<action>.
"""

from flask import Blueprint, request

from ..services import engagement
from . import field, json_body, ok

engagement_bp = Blueprint("engagement", __name__)


def _list_filters() -> dict:
    return {
        "company": request.args.get("company"),
        "advisor_id": request.args.get("advisor_id"),
        "status": request.args.get("status"),
    }


# --- Contacts ---


@engagement_bp.route("/contacts", methods=["GET"])
def api_list_contacts():
    contacts = engagement.list_contacts(**_list_filters())
    return ok(contacts=[c.to_dict() for c in contacts])


@engagement_bp.route("/contacts", methods=["POST"])
def api_create_contact():
    """Send a contact. 403 if the advisor is not in the company's directory."""
    data = json_body()
    contact = engagement.create_contact(
        field(data, "company", "company_relationship"), field(data, "advisor_id"), data
    )
    return ok(http_status=201, contact=contact.to_dict())


@engagement_bp.route("/contacts/<int:contact_id>/<action>", methods=["POST"])
def api_contact_action(contact_id: int, action: str):
    """accept, decline, expire or withdraw. 409 on an illegal transition."""
    contact = engagement.transition_contact(contact_id, action)
    return ok(contact=contact.to_dict())


# --- Handshakes ---


@engagement_bp.route("/handshakes", methods=["GET"])
def api_list_handshakes():
    handshakes = engagement.list_handshakes(**_list_filters())
    return ok(handshakes=[h.to_dict() for h in handshakes])


@engagement_bp.route("/handshakes/eligible", methods=["GET"])
def api_handshake_eligible():
    advisors = engagement.handshake_eligible(request.args.get("company"))
    return ok(advisors=[a.to_dict() for a in advisors])


@engagement_bp.route("/handshakes", methods=["POST"])
def api_create_handshake():
    data = json_body()
    handshake = engagement.create_handshake(
        field(data, "company", "company_relationship"), field(data, "advisor_id"), data
    )
    return ok(http_status=201, handshake=handshake.to_dict())


@engagement_bp.route("/handshakes/<int:handshake_id>/<action>", methods=["POST"])
def api_handshake_action(handshake_id: int, action: str):
    """accept, dismiss, pause, resume or end."""
    handshake = engagement.transition_handshake(handshake_id, action)
    return ok(handshake=handshake.to_dict())


# --- Nudges ---


@engagement_bp.route("/nudges", methods=["GET"])
def api_list_nudges():
    nudges = engagement.list_nudges(**_list_filters())
    return ok(nudges=[n.to_dict() for n in nudges])


@engagement_bp.route("/nudges/eligible", methods=["GET"])
def api_nudge_eligible():
    advisors = engagement.nudge_eligible(request.args.get("company"))
    return ok(advisors=[a.to_dict() for a in advisors])


@engagement_bp.route("/nudges", methods=["POST"])
def api_create_nudge():
    data = json_body()
    nudge = engagement.create_nudge(
        field(data, "company", "company_relationship"), field(data, "advisor_id"), data
    )
    return ok(http_status=201, nudge=nudge.to_dict())


@engagement_bp.route("/nudges/<int:nudge_id>/<action>", methods=["POST"])
def api_nudge_action(nudge_id: int, action: str):
    """accept, decline, mark-complete or confirm-complete."""
    nudge = engagement.transition_nudge(nudge_id, action)
    return ok(nudge=nudge.to_dict())
