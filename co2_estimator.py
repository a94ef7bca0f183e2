"""
CO2e estimation for logged actions.
Maps an action category and its details to kilograms of CO2e using fixed rate tables.
Unknown keys fall through to the lowest rate instead of failing.
"""

from typing import Any, Mapping, Union

from pydantic import BaseModel

# kg CO2e per serving
DIET_RATES = {
    "Beef": 3.0,
    "Chicken": 1.5,
}
DIET_DEFAULT_RATE = 0.5  # Vegetarian and anything else

# kg CO2e per km
TRAVEL_RATES = {
    "Car": 0.2,
    "Bus": 0.1,
}
TRAVEL_DEFAULT_RATE = 0.0  # Bike and anything else

# flat kg CO2e per action
ENERGY_RATES = {
    "Lowered Thermostat": 1.0,
}
ENERGY_DEFAULT_RATE = 0.5  # e.g. Air-dried laundry


def _quantity(details: Mapping[str, Any], key: str) -> float:
    return details.get(key) or 1


def estimate_co2e(category: str, details: Union[Mapping[str, Any], BaseModel, None]) -> float:
    """
    Returns the estimated CO2e (kg) for an action. Never negative, never raises.

    Args:
        category: 'diet', 'travel' or 'energy'; anything else estimates to 0
        details: mapping or details model with the category-specific fields
    """
    if isinstance(details, BaseModel):
        details = details.model_dump()
    details = details or {}

    if category == "diet":
        rate = DIET_RATES.get(details.get("mealType"), DIET_DEFAULT_RATE)
        estimate = _quantity(details, "servings") * rate
    elif category == "travel":
        rate = TRAVEL_RATES.get(details.get("mode"), TRAVEL_DEFAULT_RATE)
        estimate = _quantity(details, "distance") * rate
    elif category == "energy":
        estimate = ENERGY_RATES.get(details.get("action"), ENERGY_DEFAULT_RATE)
    else:
        estimate = 0.0

    return max(float(estimate), 0.0)


def estimate_action(details) -> float:
    """Typed convenience wrapper for a validated DietDetails/TravelDetails/EnergyDetails."""
    return estimate_co2e(details.category, details)
