"""
Firestore persistence for users and their logged actions.
Point reads and writes only; callers serialize updates per user.
"""

import logging
from typing import List, Optional

from google.cloud import firestore

from models import EcoAction, EcoUser, UserProgress

USERS_COLLECTION = 'users'
ACTIONS_COLLECTION = 'actions'


class FirestoreStore:
    def __init__(self, db):
        self.db = db

    def _user_ref(self, uid: str):
        return self.db.collection(USERS_COLLECTION).document(uid)

    # --- Users ---
    def create_user(self, uid: str, display_name: Optional[str] = None, email: Optional[str] = None,
                    photo_url: Optional[str] = None) -> bool:
        """Creates the user document with zeroed progress. Returns False if it already exists."""
        user_ref = self._user_ref(uid)
        if user_ref.get().exists:
            return False

        user_ref.set({
            'displayName': display_name,
            'email': email,
            'photoURL': photo_url,
            'createdAt': firestore.SERVER_TIMESTAMP,
            'totalCO2e': 0,
            'points': 0,
            'badges': [],
        })
        logging.info(f"Created user document for {uid}")
        return True

    def get_user(self, uid: str) -> Optional[EcoUser]:
        user_doc = self._user_ref(uid).get()
        if not user_doc.exists:
            return None
        return EcoUser.model_validate({'uid': uid, **user_doc.to_dict()})

    def get_user_progress(self, uid: str) -> Optional[UserProgress]:
        user_doc = self._user_ref(uid).get(['totalCO2e', 'points', 'badges'])
        if not user_doc.exists:
            return None
        data = user_doc.to_dict() or {}
        return UserProgress(
            totalCO2e=data.get('totalCO2e') or 0,
            points=data.get('points') or 0,
            badges=data.get('badges') or [],
        )

    def save_user_progress(self, uid: str, progress: UserProgress) -> None:
        self._user_ref(uid).update(progress.model_dump())

    # --- Actions ---
    def append_action(self, action: EcoAction) -> str:
        _, action_ref = self.db.collection(ACTIONS_COLLECTION).add(action.to_firestore())
        return action_ref.id

    def list_recent_actions(self, uid: str, count: int) -> List[EcoAction]:
        # This query requires a composite index in Firestore on (userId, timestamp desc)
        query = self.db.collection(ACTIONS_COLLECTION).where(
            filter=firestore.FieldFilter("userId", "==", uid)
        ).order_by(
            'timestamp', direction=firestore.Query.DESCENDING
        ).limit(count)

        return [EcoAction.model_validate({'id': doc.id, **doc.to_dict()}) for doc in query.stream()]

    def health_check(self) -> dict:
        """Performs a non-destructive read against both collections."""
        try:
            _ = list(self.db.collection(USERS_COLLECTION).limit(1).stream())
            _ = list(self.db.collection(ACTIONS_COLLECTION).limit(1).stream())
            return {"status": "OK", "details": "Firestore users and actions collections are accessible."}
        except Exception as e:
            return {"status": "ERROR", "details": f"Failed to query Firestore collections. Error: {str(e)}"}
