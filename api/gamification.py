from flask import Blueprint, jsonify

from co2_estimator import DIET_RATES, DIET_DEFAULT_RATE, TRAVEL_RATES, TRAVEL_DEFAULT_RATE, ENERGY_RATES, ENERGY_DEFAULT_RATE
from extensions import limiter
from progress_accumulator import BADGE_THRESHOLDS, BASE_POINTS_PER_ACTION, POINTS_PER_KG_CO2E
from .pydantic_models import BadgeTier

gamification_bp = Blueprint('gamification_bp', __name__)

@gamification_bp.route('/badges', methods=['GET'])
@limiter.exempt
def get_badges():
    """Static badge tiers and the points formula, for clients to render progress bars."""
    tiers = [BadgeTier(threshold=threshold, badge=badge).model_dump() for threshold, badge in BADGE_THRESHOLDS]
    return jsonify({
        "badges": tiers,
        "pointsPerAction": BASE_POINTS_PER_ACTION,
        "pointsPerKgCO2e": POINTS_PER_KG_CO2E,
    }), 200

@gamification_bp.route('/rates', methods=['GET'])
@limiter.exempt
def get_rates():
    """CO2e rate tables used by the estimator. The 'default' entry covers unlisted keys."""
    return jsonify({
        "diet": {"unit": "kg per serving", **DIET_RATES, "default": DIET_DEFAULT_RATE},
        "travel": {"unit": "kg per km", **TRAVEL_RATES, "default": TRAVEL_DEFAULT_RATE},
        "energy": {"unit": "kg per action", **ENERGY_RATES, "default": ENERGY_DEFAULT_RATE},
    }), 200
