"""
TOKEN BACKEND API ROUTES - FLASK BLUEPRINT

Endpoints wrapping otp_core.generate / otp_core.verify.
The key lives on the server (app.config["OTP_KEY"]) and never travels in a request.

EXAMPLES:
curl -X POST http://localhost:5000/generate -H "Content-Type: application/json" -d "{}"
curl -X POST http://localhost:5000/verify -H "Content-Type: application/json" -d "{\"token\": \"<96 hex chars>\"}"
"""

from flask import Blueprint, current_app, jsonify, request
import logging

from hmac_otp.otp_core import EntropyError, generate, verify

logger = logging.getLogger(__name__)

otp_bp = Blueprint('otp', __name__)


def _server_key():
    """Configured key as bytes, or None if it is not set."""
    key = current_app.config.get("OTP_KEY")
    if not key:
        return None
    if isinstance(key, str):
        key = key.encode("utf-8")
    return key


@otp_bp.route('/generate', methods=['POST'])
def generate_token():
    """
    CREATE A TOKEN

      curl -X POST http://localhost:5000/generate -H "Content-Type: application/json" -d "{}"

    Output:
      {"token": "<96 hex chars>", "success": true}
    """
    key = _server_key()
    if key is None:
        logger.error("Token requested but OTP_KEY is not configured")
        return jsonify({"token": None, "success": False, "error": "OTP key not configured"}), 500

    try:
        token = generate(key)
    except EntropyError as e:
        logger.exception("Failed to generate token")
        return jsonify({"token": None, "success": False, "error": str(e)}), 500

    logger.info("Generated token %s...", token[:8])
    return jsonify({"token": token, "success": True})


@otp_bp.route('/verify', methods=['POST'])
def verify_token():
    """
    VERIFY A TOKEN

      curl -X POST http://localhost:5000/verify -H "Content-Type: application/json" -d "{\"token\": \"...\"}"

    Input (JSON body):
      {"token": "<96 hex chars>"}

    Output:
      {"valid": true}  or  {"valid": false}

    Malformed and forged tokens both give {"valid": false}.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or "token" not in data:
        return jsonify({"error": "Token is required"}), 400

    key = _server_key()
    if key is None:
        logger.error("Verification requested but OTP_KEY is not configured")
        return jsonify({"error": "OTP key not configured"}), 500

    valid = verify(key, data["token"])
    logger.info("Token verification result: %s", valid)
    return jsonify({"valid": valid})
