import math
from typing import List, Optional, Tuple

from models import UserProgress

BASE_POINTS_PER_ACTION = 10
POINTS_PER_KG_CO2E = 5

# Ascending point thresholds; a badge is permanent once earned.
BADGE_THRESHOLDS = [
    (100, "Seedling Starter"),
    (500, "Green Giant"),
    (1000, "Eco-Hero"),
]


def points_for(co2e: float) -> int:
    """Points granted for one logged action, rounded half up."""
    return int(math.floor(co2e * POINTS_PER_KG_CO2E + BASE_POINTS_PER_ACTION + 0.5))


def badges_for(points: int) -> List[str]:
    return [badge for threshold, badge in BADGE_THRESHOLDS if points >= threshold]


def newly_unlocked(before: UserProgress, after: UserProgress) -> List[str]:
    return [badge for badge in after.badges if badge not in before.badges]


def apply_action(progress: UserProgress, co2e: float) -> UserProgress:
    """
    Folds one action's CO2e into a user's progress and returns the new snapshot.
    The input snapshot is left untouched. Badges are only ever added.
    """
    new_points = progress.points + points_for(co2e)

    new_badges = list(progress.badges)
    for badge in badges_for(new_points):
        if badge not in new_badges:
            new_badges.append(badge)

    return UserProgress(
        totalCO2e=progress.totalCO2e + co2e,
        points=new_points,
        badges=new_badges,
    )


def next_badge(progress: UserProgress) -> Optional[Tuple[int, str]]:
    """Lowest-threshold badge the user does not hold yet, or None once all are earned."""
    for threshold, badge in BADGE_THRESHOLDS:
        if badge not in progress.badges:
            return threshold, badge
    return None
