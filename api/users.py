import logging
from flask import Blueprint, request, jsonify

from dependencies import get_services
from eco_actions import get_user_dashboard, register_user
from progress_accumulator import next_badge
from .error_utils import handle_exception, result_error_response, create_error_response
from .pydantic_models import BadgeTier, ProgressResponse, RegisterUserRequest

users_bp = Blueprint('users_bp', __name__)

@users_bp.route('', methods=['POST'])
def create_user():
    """
    Creates the user's progress document on first sign-in.
    Returns 201 when the document was created, 200 when it already existed.
    """
    req_data = RegisterUserRequest.model_validate(request.get_json())
    services = get_services()

    result = register_user(services.store, req_data.uid, req_data.displayName, req_data.email, req_data.photoURL)
    if not result["success"]:
        return result_error_response(result)

    status_code = 201 if result["created"] else 200
    return jsonify({"uid": req_data.uid, "created": result["created"]}), status_code

@users_bp.route('/<user_id>', methods=['GET'])
def get_dashboard(user_id):
    services = get_services()
    result = get_user_dashboard(services.store, user_id, services.recent_actions_limit)
    if "error" in result:
        return result_error_response(result)
    return jsonify(result), 200

@users_bp.route('/<user_id>/progress', methods=['GET'])
def get_progress(user_id):
    try:
        progress = get_services().store.get_user_progress(user_id)
        if progress is None:
            return create_error_response("USER_NOT_FOUND")

        upcoming = next_badge(progress)
        response = ProgressResponse(
            userId=user_id,
            totalCO2e=progress.totalCO2e,
            points=progress.points,
            badges=progress.badges,
            nextBadge=BadgeTier(threshold=upcoming[0], badge=upcoming[1]) if upcoming else None,
        )
        return jsonify(response.model_dump()), 200
    except Exception as e:
        logging.error(f"Error fetching progress for {user_id}: {e}", exc_info=True)
        return handle_exception(e, "get_progress endpoint")
