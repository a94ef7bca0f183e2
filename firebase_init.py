"""
Centralized Firebase initialization module.
This ensures consistent Firebase initialization across all backend components.
"""

import logging
import firebase_admin
from firebase_admin import credentials

# Global flag to track initialization
_firebase_initialized = False

def initialize_firebase(project_id=None):
    """
    Initialize Firebase Admin SDK with proper error handling.
    Uses GOOGLE_APPLICATION_CREDENTIALS environment variable for credentials.

    Args:
        project_id: Optional GCP project id; inferred from the credentials when None

    Returns:
        bool: True if initialization was successful, False otherwise
    """
    global _firebase_initialized

    if _firebase_initialized:
        logging.debug("Firebase already initialized, skipping.")
        return True

    try:
        if not firebase_admin._apps:
            cred = credentials.ApplicationDefault()
            options = {'projectId': project_id} if project_id else None
            firebase_admin.initialize_app(cred, options)
            logging.info("Firebase Admin SDK initialized successfully.")
        else:
            logging.info("Firebase Admin SDK already initialized.")

        _firebase_initialized = True
        return True

    except Exception as e:
        logging.error(f"Failed to initialize Firebase Admin SDK: {e}")
        return False

__all__ = ['initialize_firebase']
