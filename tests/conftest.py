import copy

import pytest

from dependencies import Services
from gemini_service import CoachServiceError
from main import create_app
from models import EcoUser, UserProgress


class FakeStore:
    """In-memory stand-in for FirestoreStore."""

    def __init__(self):
        self.users = {}
        self.actions = []
        self.fail_with = None

    def _check(self):
        if self.fail_with:
            raise self.fail_with

    def add_user(self, uid, points=0, total_co2e=0.0, badges=None):
        self.users[uid] = EcoUser(uid=uid, points=points, totalCO2e=total_co2e, badges=list(badges or []))

    def create_user(self, uid, display_name=None, email=None, photo_url=None):
        self._check()
        if uid in self.users:
            return False
        self.users[uid] = EcoUser(uid=uid, displayName=display_name, email=email, photoURL=photo_url)
        return True

    def get_user(self, uid):
        self._check()
        return copy.deepcopy(self.users.get(uid))

    def get_user_progress(self, uid):
        self._check()
        user = self.users.get(uid)
        return user.progress if user else None

    def save_user_progress(self, uid, progress: UserProgress):
        self._check()
        self.users[uid] = self.users[uid].model_copy(update=progress.model_dump())

    def append_action(self, action):
        self._check()
        action_id = f"action-{len(self.actions) + 1}"
        self.actions.append(action.model_copy(update={"id": action_id}))
        return action_id

    def list_recent_actions(self, uid, count):
        self._check()
        mine = [a for a in self.actions if a.userId == uid]
        mine.sort(key=lambda a: a.timestamp, reverse=True)
        return mine[:count]

    def health_check(self):
        return {"status": "OK", "details": "in-memory"}


class FakeCoach:
    def __init__(self):
        self.recommendations = ["Try a meat-free Monday.", "Bike short trips.", "Air-dry your laundry."]
        self.answer = "Switching to LED bulbs saves energy."
        self.fail = False
        self.last_input = None
        self.last_query = None

    def get_recommendations(self, data):
        self.last_input = data
        if self.fail:
            raise CoachServiceError("quota exceeded")
        return list(self.recommendations)

    def answer_query(self, query):
        self.last_query = query
        if self.fail:
            raise CoachServiceError("quota exceeded")
        return self.answer

    def health_check(self):
        return {"status": "OK", "details": "fake"}


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def coach():
    return FakeCoach()


@pytest.fixture
def app(store, coach):
    return create_app(
        services=Services(store=store, coach=coach, recent_actions_limit=10),
        config={"TESTING": True, "RATELIMIT_ENABLED": False},
    )


@pytest.fixture
def client(app):
    return app.test_client()
