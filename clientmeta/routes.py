# Routes for the clientmeta blueprint - echo client metadata and record logins.

import logging

from flask import current_app, jsonify, request

from . import clientmeta_bp
from .collector import extract_from_request
from .errors import PersistenceFailure
from .models import LoginTracking
from .tracking import insert_tracking

EXTENSION_KEY = "clientmeta"


def _text_field(payload, name, default=""):
    """String value of payload[name]; `default` only when the key is missing or null."""
    value = payload.get(name)
    return default if value is None else str(value)


def _extract_info():
    """Run the extractor with the resolver and trusted networks set up at startup."""
    state = current_app.extensions.get(EXTENSION_KEY, {})
    return extract_from_request(
        request,
        resolver=state.get("resolver"),
        trusted_networks=state.get("trusted_networks"),
    )


@clientmeta_bp.route("/whoami")
def whoami():
    """
    Return the metadata collected for the current request as JSON.

    Browsers that want gmt_time filled in must send X-Client-UTC-Offset, and
    cross-origin callers need it listed in Access-Control-Allow-Headers.
    """
    info = _extract_info()
    logging.info(info.to_json())
    return jsonify(info.to_dict())


@clientmeta_bp.route("/api/login-tracking", methods=["POST"])
def login_tracking():
    """
    Record a login event for the caller.

    Body (JSON, all optional): user_id, action (default "login"), email,
    mac_address. The rest of the row comes from the request itself.
    """
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    info = _extract_info()
    record = LoginTracking.from_info(
        info,
        user_id=_text_field(payload, "user_id"),
        action=_text_field(payload, "action", "login"),
        email=_text_field(payload, "email"),
        mac_address=_text_field(payload, "mac_address"),
    )

    try:
        insert_tracking(record)
    except PersistenceFailure as e:
        return jsonify({"error": str(e)}), 500

    return jsonify(info.to_dict()), 201
