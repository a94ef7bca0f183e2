import logging
import datetime
from flask import Blueprint, jsonify

from dependencies import get_services
from extensions import limiter

status_bp = Blueprint('status_bp', __name__)

@status_bp.route('/status', methods=['GET'])
@limiter.exempt
def status():
    """Reports Firestore and Gemini health. 200 when every check passes, 503 otherwise."""
    services = get_services()
    checks = {
        "firestore": services.store.health_check(),
        "gemini": services.coach.health_check(),
    }

    all_ok = all(check["status"] == "OK" for check in checks.values())
    if not all_ok:
        failing = [name for name, check in checks.items() if check["status"] != "OK"]
        logging.warning(f"Status check failing for: {', '.join(failing)}")

    return jsonify({
        "status": "OK" if all_ok else "ERROR",
        "checkedAt": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "checks": checks,
    }), 200 if all_ok else 503
