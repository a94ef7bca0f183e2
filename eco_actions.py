"""
Caller-facing actions: log an eco action, fetch AI recommendations, ask the Eco-Coach.
Collaborators are passed in explicitly. Every fault is caught here and returned as
{"success": False, "error": ...} or {"error": ...}; nothing propagates to the caller.
Failure results also carry an "error_code" from api.error_utils.ERROR_CODES.
"""

import datetime
import logging

from pydantic import ValidationError

from co2_estimator import estimate_action
from gemini_service import ActionSummary, CoachServiceError, RecommendationInput
from models import CATEGORIES, EcoAction, parse_action_details
from progress_accumulator import apply_action, newly_unlocked

DEFAULT_RECENT_ACTIONS = 10

# Shown when a required detail is missing, keyed by category
MISSING_DETAILS_MESSAGES = {
    "diet": "Please fill all fields for diet.",
    "travel": "Please fill all fields for travel.",
    "energy": "Please select an energy action.",
}


def _failure(error, error_code, **extra):
    return {"success": False, "error": error, "error_code": error_code, **extra}


def log_eco_action(store, user_id, category, details):
    """
    Validates, estimates and stores one action, then folds it into the user's progress.
    Read-modify-write without a transaction: callers serialize updates per user.
    """
    if not user_id:
        return _failure("User not authenticated.", "TOKEN_MISSING")

    if category not in CATEGORIES:
        return _failure(f"Unknown action category: {category}", "VALIDATION_ERROR")

    try:
        parsed = parse_action_details(category, details)
    except ValidationError as e:
        logging.warning(f"Rejected {category} action for {user_id}: {e.errors()}")
        return _failure(MISSING_DETAILS_MESSAGES[category], "VALIDATION_ERROR",
                        details=e.errors(include_url=False, include_context=False, include_input=False))

    try:
        progress = store.get_user_progress(user_id)
        if progress is None:
            logging.error(f"User {user_id} not found while logging action.")
            return _failure("User not found.", "USER_NOT_FOUND")

        # Nothing is written until every value is computed
        co2e = estimate_action(parsed)
        updated = apply_action(progress, co2e)
        action = EcoAction(
            userId=user_id,
            category=category,
            description=parsed.describe(),
            co2e=co2e,
            timestamp=datetime.datetime.now(datetime.timezone.utc),
        )
        action_id = store.append_action(action)
        store.save_user_progress(user_id, updated)

        new_badges = newly_unlocked(progress, updated)
        logging.info(
            f"Logged {category} action for {user_id}: {co2e} kg CO2e, "
            f"+{updated.points - progress.points} points, new badges: {new_badges}"
        )
        return {
            "success": True,
            "action": action.model_copy(update={"id": action_id}).model_dump(mode="json"),
            "progress": updated.model_dump(),
            "pointsGained": updated.points - progress.points,
            "newBadges": new_badges,
        }
    except Exception as e:
        logging.error(f"Error in log_eco_action for {user_id}: {e}", exc_info=True)
        return _failure(f"Failed to log action: {e}", "DATABASE_ERROR")


def get_personalized_recommendations(store, coach, user_id, limit=DEFAULT_RECENT_ACTIONS):
    """Builds the user's context from Firestore and asks the coach for recommendations."""
    try:
        user = store.get_user(user_id)
        if user is None:
            return {"error": "User not found.", "error_code": "USER_NOT_FOUND"}

        recent_actions = store.list_recent_actions(user_id, limit)
        data = RecommendationInput(
            userId=user.uid,
            totalCO2e=user.totalCO2e,
            points=user.points,
            badges=user.badges,
            actions=[
                ActionSummary(
                    category=action.category,
                    description=action.description,
                    co2e=action.co2e,
                    timestamp=action.timestamp.isoformat(),
                )
                for action in recent_actions
            ],
        )

        return {"recommendations": coach.get_recommendations(data)}
    except CoachServiceError as e:
        logging.error(f"Error getting recommendations for {user_id}: {e}")
        return {"error": f"Failed to get personalized recommendations: {e}", "error_code": "EXTERNAL_SERVICE_ERROR"}
    except Exception as e:
        logging.error(f"Error getting recommendations for {user_id}: {e}", exc_info=True)
        return {"error": f"Failed to get personalized recommendations: {e}", "error_code": "DATABASE_ERROR"}


def get_coach_response(coach, query):
    if not query or not query.strip():
        return {"error": "Query cannot be empty.", "error_code": "VALIDATION_ERROR"}

    try:
        return {"response": coach.answer_query(query)}
    except Exception as e:
        logging.error(f"Error getting coach response: {e}", exc_info=True)
        return {
            "error": "Failed to get a response from the Eco-Coach. Please try again.",
            "error_code": "EXTERNAL_SERVICE_ERROR",
        }


def register_user(store, uid, display_name=None, email=None, photo_url=None):
    """Creates the user's progress document on first sign-in. Existing users are left alone."""
    if not uid:
        return _failure("User not authenticated.", "TOKEN_MISSING")

    try:
        created = store.create_user(uid, display_name, email, photo_url)
        return {"success": True, "created": created}
    except Exception as e:
        logging.error(f"Error creating user {uid}: {e}", exc_info=True)
        return _failure(f"Failed to create user: {e}", "DATABASE_ERROR")


def get_user_dashboard(store, user_id, limit=DEFAULT_RECENT_ACTIONS):
    """Progress snapshot plus the most recent actions, most recent first."""
    try:
        progress = store.get_user_progress(user_id)
        if progress is None:
            return {"error": "User not found.", "error_code": "USER_NOT_FOUND"}

        actions = store.list_recent_actions(user_id, limit)
        return {
            "progress": progress.model_dump(),
            "actions": [action.model_dump(mode="json") for action in actions],
        }
    except Exception as e:
        logging.error(f"Error loading dashboard for {user_id}: {e}", exc_info=True)
        return {"error": f"Failed to load user data: {e}", "error_code": "DATABASE_ERROR"}
