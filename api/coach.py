from flask import Blueprint, request, jsonify

from dependencies import get_services
from eco_actions import get_coach_response, get_personalized_recommendations
from extensions import limiter, AI_RATE_LIMIT
from .error_utils import result_error_response
from .pydantic_models import CoachQueryRequest, CoachQueryResponse, RecommendationsResponse
from .sanitization import sanitize_query

coach_bp = Blueprint('coach_bp', __name__)

@coach_bp.route('/users/<user_id>/recommendations', methods=['GET'])
@limiter.limit(AI_RATE_LIMIT)
def get_recommendations(user_id):
    services = get_services()
    result = get_personalized_recommendations(services.store, services.coach, user_id, services.recent_actions_limit)
    if "error" in result:
        return result_error_response(result)
    return jsonify(RecommendationsResponse.model_validate(result).model_dump()), 200

@coach_bp.route('/coach', methods=['POST'])
@limiter.limit(AI_RATE_LIMIT)
def ask_coach():
    req_data = CoachQueryRequest.model_validate(request.get_json())

    result = get_coach_response(get_services().coach, sanitize_query(req_data.query))
    if "error" in result:
        return result_error_response(result)
    return jsonify(CoachQueryResponse.model_validate(result).model_dump()), 200
