import datetime

import pytest

import eco_actions
from eco_actions import (
    get_coach_response,
    get_personalized_recommendations,
    get_user_dashboard,
    log_eco_action,
    register_user,
)


class TestLogEcoAction:
    def test_logs_action_and_updates_progress(self, store):
        store.add_user("u1", points=95)

        result = log_eco_action(store, "u1", "diet", {"mealType": "Chicken", "servings": 1})

        assert result["success"] is True
        assert result["pointsGained"] == 18
        assert result["newBadges"] == ["Seedling Starter"]
        assert result["action"]["id"] == "action-1"
        assert result["action"]["description"] == "1 serving(s) of Chicken"
        assert result["action"]["co2e"] == pytest.approx(1.5)

        user = store.users["u1"]
        assert user.points == 113
        assert user.totalCO2e == pytest.approx(1.5)
        assert user.badges == ["Seedling Starter"]
        assert len(store.actions) == 1

    @pytest.mark.parametrize("category,details,description,co2e", [
        ("diet", {"mealType": "Beef", "servings": 2}, "2 serving(s) of Beef", 6.0),
        ("diet", {"mealType": "Vegetarian"}, "1 serving(s) of Vegetarian", 0.5),
        ("travel", {"mode": "Car", "distance": 12.5}, "12.5 km by Car", 2.5),
        ("travel", {"mode": "Bike", "distance": 5}, "5 km by Bike", 0),
        ("energy", {"action": "Air-dried laundry"}, "Air-dried laundry", 0.5),
    ])
    def test_descriptions_and_estimates(self, store, category, details, description, co2e):
        store.add_user("u1")

        result = log_eco_action(store, "u1", category, details)

        assert result["success"] is True
        assert store.actions[0].description == description
        assert store.actions[0].co2e == pytest.approx(co2e)
        assert store.actions[0].category == category

    def test_requires_user_id(self, store):
        result = log_eco_action(store, "", "diet", {"mealType": "Beef", "servings": 1})
        assert result == {"success": False, "error": "User not authenticated.", "error_code": "TOKEN_MISSING"}

    def test_rejects_unknown_category(self, store):
        store.add_user("u1")
        result = log_eco_action(store, "u1", "shopping", {"item": "Jeans"})
        assert result["success"] is False
        assert result["error_code"] == "VALIDATION_ERROR"
        assert store.actions == []

    @pytest.mark.parametrize("category,details,message", [
        ("diet", {"servings": 2}, "Please fill all fields for diet."),
        ("travel", {"distance": 2}, "Please fill all fields for travel."),
        ("energy", {}, "Please select an energy action."),
        ("diet", {"mealType": "Beef", "servings": -1}, "Please fill all fields for diet."),
    ])
    def test_rejects_missing_details_before_writing(self, store, category, details, message):
        store.add_user("u1", points=10)

        result = log_eco_action(store, "u1", category, details)

        assert result["success"] is False
        assert result["error"] == message
        assert result["error_code"] == "VALIDATION_ERROR"
        assert store.actions == []
        assert store.users["u1"].points == 10

    def test_unknown_user_writes_nothing(self, store):
        result = log_eco_action(store, "ghost", "energy", {"action": "Lowered Thermostat"})
        assert result["success"] is False
        assert result["error"] == "User not found."
        assert result["error_code"] == "USER_NOT_FOUND"
        assert store.actions == []

    @pytest.mark.parametrize("category,details", [
        ("diet", {"mealType": "Beef", "servings": 1e308}),
        ("diet", {"mealType": "Beef", "servings": float("inf")}),
        ("travel", {"mode": "Car", "distance": 1e309}),
        ("travel", {"mode": "Car", "distance": float("nan")}),
    ])
    def test_rejects_oversized_quantities_before_writing(self, store, category, details):
        store.add_user("u1", points=10)

        result = log_eco_action(store, "u1", category, details)

        assert result["success"] is False
        assert result["error_code"] == "VALIDATION_ERROR"
        assert store.actions == []
        assert store.users["u1"].points == 10

    def test_calculation_failure_writes_nothing(self, store, monkeypatch):
        store.add_user("u1", points=10)

        def broken_apply(progress, co2e):
            raise OverflowError("cannot convert float infinity to integer")

        monkeypatch.setattr(eco_actions, "apply_action", broken_apply)

        result = log_eco_action(store, "u1", "energy", {"action": "Lowered Thermostat"})

        assert result["success"] is False
        assert store.actions == []
        assert store.users["u1"].points == 10

    def test_store_failure_is_reported_not_raised(self, store):
        store.add_user("u1")
        store.fail_with = RuntimeError("deadline exceeded")

        result = log_eco_action(store, "u1", "energy", {"action": "Lowered Thermostat"})

        assert result["success"] is False
        assert result["error"] == "Failed to log action: deadline exceeded"
        assert result["error_code"] == "DATABASE_ERROR"


class TestRecommendations:
    def test_passes_user_context_to_coach(self, store, coach):
        store.add_user("u1", points=40, total_co2e=3.0, badges=[])
        log_eco_action(store, "u1", "travel", {"mode": "Car", "distance": 10})
        log_eco_action(store, "u1", "diet", {"mealType": "Beef", "servings": 1})

        result = get_personalized_recommendations(store, coach, "u1")

        assert result == {"recommendations": coach.recommendations}
        data = coach.last_input
        assert data.userId == "u1"
        assert data.points == 40 + 20 + 25
        assert data.totalCO2e == pytest.approx(3.0 + 2.0 + 3.0)
        assert sorted(a.category for a in data.actions) == ["diet", "travel"]
        assert all(datetime.datetime.fromisoformat(a.timestamp).tzinfo for a in data.actions)

    def test_limits_recent_actions(self, store, coach):
        store.add_user("u1")
        for _ in range(5):
            log_eco_action(store, "u1", "energy", {"action": "Air-dried laundry"})

        get_personalized_recommendations(store, coach, "u1", limit=3)

        assert len(coach.last_input.actions) == 3

    def test_unknown_user(self, store, coach):
        result = get_personalized_recommendations(store, coach, "ghost")
        assert result["error"] == "User not found."
        assert coach.last_input is None

    def test_coach_failure(self, store, coach):
        store.add_user("u1")
        coach.fail = True

        result = get_personalized_recommendations(store, coach, "u1")

        assert result["error"] == "Failed to get personalized recommendations: quota exceeded"
        assert result["error_code"] == "EXTERNAL_SERVICE_ERROR"


class TestCoachResponse:
    def test_answers_query(self, coach):
        assert get_coach_response(coach, "How do I save energy?") == {"response": coach.answer}
        assert coach.last_query == "How do I save energy?"

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_empty_query(self, coach, query):
        result = get_coach_response(coach, query)
        assert result["error"] == "Query cannot be empty."
        assert coach.last_query is None

    def test_failure_message(self, coach):
        coach.fail = True
        result = get_coach_response(coach, "Is composting worth it?")
        assert result["error"] == "Failed to get a response from the Eco-Coach. Please try again."


class TestUsers:
    def test_register_user_is_idempotent(self, store):
        assert register_user(store, "u1", "Ada", "ada@example.com") == {"success": True, "created": True}
        assert register_user(store, "u1", "Ada", "ada@example.com") == {"success": True, "created": False}
        assert store.users["u1"].points == 0
        assert store.users["u1"].badges == []

    def test_register_requires_uid(self, store):
        assert register_user(store, "")["error_code"] == "TOKEN_MISSING"

    def test_dashboard(self, store):
        store.add_user("u1")
        log_eco_action(store, "u1", "energy", {"action": "Lowered Thermostat"})

        result = get_user_dashboard(store, "u1")

        assert result["progress"] == {"totalCO2e": 1.0, "points": 15, "badges": []}
        assert result["actions"][0]["description"] == "Lowered Thermostat"

    def test_dashboard_unknown_user(self, store):
        assert get_user_dashboard(store, "ghost")["error_code"] == "USER_NOT_FOUND"
