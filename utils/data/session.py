"""
Realty Admin Session Management
Keeps the auth context and admin panel controller alive across Streamlit reruns
"""

import streamlit as st
from datetime import datetime

from utils.auth import ANONYMOUS, AuthContext
from utils.data.admin_panel import AdminPanel


def initialize_session_state():
    """Initialize session state variables"""

    # Basic session info
    if 'session_id' not in st.session_state:
        st.session_state.session_id = datetime.now().strftime("%Y%m%d_%H%M%S")

    # Identity
    if 'auth' not in st.session_state:
        st.session_state.auth = ANONYMOUS

    if 'auth_error' not in st.session_state:
        st.session_state.auth_error = None

    # Admin panel state (tabs, stores, drafts, edit targets)
    if 'admin_panel' not in st.session_state:
        st.session_state.admin_panel = AdminPanel()

    st.session_state.initialized = True


def reset_session():
    """Reset session state"""
    for key in list(st.session_state.keys()):
        del st.session_state[key]
    initialize_session_state()


def get_auth_context() -> AuthContext:
    return st.session_state.get('auth', ANONYMOUS)


def set_auth_context(auth: AuthContext, error: str = None):
    """Store a new identity and let the panel react to it."""
    st.session_state.auth = auth
    st.session_state.auth_error = error
    get_admin_panel().sync_auth(auth)


def get_admin_panel() -> AdminPanel:
    if 'admin_panel' not in st.session_state:
        st.session_state.admin_panel = AdminPanel()
    return st.session_state.admin_panel
