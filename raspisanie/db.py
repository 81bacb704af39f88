"""Firestore client for the schedule store.

The service-account credentials come from the secrets section named in
:data:`src.config.FIREBASE_SECRETS_SECTION`. The client is created once per
process and shared by every Streamlit session.
"""

import logging
from typing import Optional

import firebase_admin
import streamlit as st
from firebase_admin import credentials, firestore

from src.config import FIREBASE_SECRETS_SECTION, get_firebase_credentials

logger = logging.getLogger(__name__)

_db_client: Optional[firestore.Client] = None
db: Optional[firestore.Client] = None  # tests assign a dummy client here


def _connect() -> firestore.Client:
    if not firebase_admin._apps:
        cred = credentials.Certificate(get_firebase_credentials())
        firebase_admin.initialize_app(cred)
    return firestore.client()


def get_db() -> firestore.Client:
    """Return the shared Firestore client, connecting on first use."""
    global _db_client
    if db is not None:
        return db
    if _db_client is None:
        try:
            _db_client = _connect()
        except Exception as e:
            logger.exception("Firestore init from [%s] failed", FIREBASE_SECRETS_SECTION)
            st.error(f"Не удалось подключиться к базе данных: {e}")
            raise RuntimeError("Firebase initialization failed") from e
        logger.info("Connected to Firestore")
    return _db_client
