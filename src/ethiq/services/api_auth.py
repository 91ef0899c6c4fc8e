"""Static bearer-token authentication for the JSON API."""

import hmac
import logging

from flask import jsonify, request

logger = logging.getLogger(__name__)


class ApiAuth:
    """Checks the Authorization header against the configured API token."""

    def __init__(self, config: dict):
        self.token = ""
        self.reload_config(config)

    def reload_config(self, config: dict) -> None:
        """Reload auth config without restart."""
        auth_config = config.get("api", {}).get("auth", {})
        self.token = auth_config.get("token", "") or ""
        if not self.token:
            logger.warning("No API token configured, the API is open to unauthenticated callers")

    def authenticate(self):
        """Flask before_request handler.

        Returns None to allow the request, or a response tuple to deny it.
        """
        if request.method == "OPTIONS":
            return None

        if not self.token:
            return None

        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            self._log_access(auth_status="missing_token")
            return jsonify({
                "success": False,
                "error": "Authentication required. Include a Bearer token in the Authorization header.",
            }), 401

        provided_token = auth_header[7:]  # Strip "Bearer "
        if not hmac.compare_digest(provided_token, self.token):
            self._log_access(auth_status="invalid_token")
            return jsonify({
                "success": False,
                "error": "Invalid authentication token.",
            }), 401

        return None

    def _log_access(self, auth_status: str) -> None:
        logger.info(
            f"api_access: endpoint={request.path}, method={request.method}, "
            f"source_ip={request.remote_addr}, auth_status={auth_status}"
        )
