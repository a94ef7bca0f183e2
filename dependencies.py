"""
Dependency injection container for the EcoTrack backend.
Collaborators (Firestore store, Gemini coach) are built once per app by
build_services() and handed to request handlers through get_services(),
so tests can swap in their own Services.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

from dotenv import load_dotenv
from flask import current_app

from api.encryption_utils import get_gemini_api_key
from gemini_service import DEFAULT_MODEL, DEFAULT_TIMEOUT_MS, EcoCoach, create_client

load_dotenv()

EXTENSION_KEY = 'ecotrack'

# --- Environment variables ---
GCP_PROJECT_ID = os.environ.get("GCP_PROJECT_ID")
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", DEFAULT_MODEL)
GEMINI_TIMEOUT_MS = int(os.environ.get("GEMINI_TIMEOUT_MS", DEFAULT_TIMEOUT_MS))
RECENT_ACTIONS_LIMIT = int(os.environ.get("RECENT_ACTIONS_LIMIT", 10))
REDIS_URL = os.environ.get("REDIS_URL", "memory://")


@dataclass
class Services:
    store: Any
    coach: Any
    recent_actions_limit: int = RECENT_ACTIONS_LIMIT


def create_firestore_client():
    """Firestore client from the firebase_admin default app (GOOGLE_APPLICATION_CREDENTIALS)."""
    from firebase_admin import firestore as admin_firestore
    from firebase_init import initialize_firebase

    if not initialize_firebase(GCP_PROJECT_ID):
        raise RuntimeError("Firebase Admin SDK could not be initialized")
    return admin_firestore.client()


def create_coach() -> EcoCoach:
    api_key = get_gemini_api_key()
    if not api_key:
        logging.warning("GEMINI_API_KEY is not set; AI recommendations and coaching are disabled.")
        return EcoCoach(None, GEMINI_MODEL)
    return EcoCoach(create_client(api_key, GEMINI_TIMEOUT_MS), GEMINI_MODEL)


def build_services() -> Services:
    from firestore_store import FirestoreStore

    return Services(store=FirestoreStore(create_firestore_client()), coach=create_coach())


def get_services(app: Optional[Any] = None) -> Services:
    app = app or current_app
    return app.extensions[EXTENSION_KEY]
