"""
FLASK APP MAIN ENTRY POINT - TOKEN BACKEND SERVER
=================================================

Sets up the Flask app, enables CORS and registers the token routes.

MAIN FEATURES
- Flask web server
- CORS enabled for frontend integration
- Key read from the HMAC_OTP_KEY environment variable (app.config["OTP_KEY"])
- Root endpoint listing the available API endpoints
"""
from flask import Flask, jsonify
from flask_cors import CORS
import logging
import os

from hmac_otp.otp_core import KEY_ENV_VAR
from hmac_otp.backend.routes import otp_bp

logger = logging.getLogger(__name__)

# FLASK APP
app = Flask(__name__)
# No fallback key: routes answer 500 until one is configured
app.config["OTP_KEY"] = os.environ.get(KEY_ENV_VAR)

# CORS lets a frontend on another origin call the API
CORS(app)

app.register_blueprint(otp_bp)


@app.route('/', methods=['GET'])
def index():
    """
    HOME - API INFO

      curl http://localhost:5000/
    """
    return jsonify({
        "service": "hmac-otp",
        "endpoints": {
            "POST /generate": "Create a new token",
            "POST /verify": "Check a token, body {\"token\": \"...\"}",
        },
    })


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    if app.config["OTP_KEY"] is None:
        logger.warning("%s is not set; /generate and /verify will fail", KEY_ENV_VAR)
    app.run(debug=True, host='0.0.0.0', port=5000)
