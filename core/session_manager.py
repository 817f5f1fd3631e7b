import atexit
import logging

import streamlit as st

from core.config import load_settings, configure_logging
from core.database import init_db
from core.exceptions import StorageUnavailable
from services.queue_service import PatientQueue

logger = logging.getLogger(__name__)


@st.cache_resource
def get_settings():
    settings = load_settings()
    configure_logging(settings.log_level)
    return settings


@st.cache_resource
def get_store():
    """Open the store once per process; it is closed at interpreter exit."""
    store = init_db(get_settings().db_path)
    atexit.register(store.close)
    return store


def init_session_state():
    """Ensure required session keys exist.

    Stops the page with an error if the store cannot be opened.
    """
    if "queue" in st.session_state:
        return
    try:
        store = get_store()
    except StorageUnavailable as e:
        st.error(f"Patient store unavailable: {e}")
        st.stop()
    st.session_state.queue = PatientQueue(store, get_settings().avg_visit_minutes)
    st.session_state.search = ""


def get_queue() -> PatientQueue:
    init_session_state()
    return st.session_state.queue
