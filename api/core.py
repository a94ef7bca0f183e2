import logging
from flask import Blueprint, request, jsonify

from dependencies import get_services
from eco_actions import log_eco_action
from .error_utils import handle_exception, result_error_response, validation_error
from .pydantic_models import LogActionRequest, LogActionResponse
from .sanitization import sanitize_details

core_bp = Blueprint('core_bp', __name__)

MAX_HISTORY_LIMIT = 50

@core_bp.route('/users/<user_id>/actions', methods=['POST'])
def log_action(user_id):
    req_data = LogActionRequest.model_validate(request.get_json())

    result = log_eco_action(get_services().store, user_id, req_data.category, sanitize_details(req_data.details))
    if not result["success"]:
        if result.get("error_code") == "VALIDATION_ERROR":
            return validation_error(result["error"], {"errors": result.get("details")})
        return result_error_response(result)

    return jsonify(LogActionResponse.model_validate(result).model_dump()), 201

@core_bp.route('/users/<user_id>/actions', methods=['GET'])
def get_history(user_id):
    services = get_services()
    limit = request.args.get('limit', default=services.recent_actions_limit, type=int)
    limit = max(1, min(limit, MAX_HISTORY_LIMIT))

    try:
        actions = services.store.list_recent_actions(user_id, limit)
        return jsonify([action.model_dump(mode="json") for action in actions]), 200
    except Exception as e:
        logging.error(f"Error fetching action history for {user_id}: {e}", exc_info=True)
        return handle_exception(e, "get_history endpoint")
