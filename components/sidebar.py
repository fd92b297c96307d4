import streamlit as st
import logging

from config import AppConfig
from utils.auth import sign_in, sign_out
from utils.data.session import get_admin_panel, get_auth_context, reset_session, set_auth_context
from utils.database.supabase_client import SupabaseClient
from utils.toast import ToastManager

logger = logging.getLogger(__name__)


def _render_account():
    """Sign-in form or current user with sign-out."""
    st.sidebar.markdown("### 🔑 Account")
    auth = get_auth_context()

    if auth.is_authenticated:
        st.sidebar.markdown(f"Signed in as **{auth.user.email}**")
        st.sidebar.caption("Administrator" if auth.is_admin else "No admin access")
        if st.sidebar.button("Sign out", use_container_width=True, key="sign_out"):
            # drop cached rows and drafts along with the identity
            reset_session()
            set_auth_context(sign_out(auth))
            ToastManager.signed_out()
            st.rerun()
        return

    with st.sidebar.form("sign_in_form"):
        email = st.text_input("Email", key="sign_in_email")
        password = st.text_input("Password", type="password", key="sign_in_password")
        submitted = st.form_submit_button("Sign in", use_container_width=True)

    if submitted:
        if not email or not password:
            st.sidebar.error("Email and password are required")
            return
        auth, error = sign_in(email, password)
        set_auth_context(auth, error)
        if error:
            st.sidebar.error(f"❌ {error}")
            return
        ToastManager.signed_in(auth.user.email)
        st.rerun()


def _render_statistics():
    """Record counts for admins."""
    if not get_auth_context().is_admin:
        return

    st.sidebar.markdown("---")
    st.sidebar.markdown("### 📊 Statistics")
    stats = get_admin_panel().stats()

    col1, col2 = st.sidebar.columns(2)
    with col1:
        st.metric("Properties", stats['properties'])
    with col2:
        st.metric("Questions", stats['quiz_questions'])


def _render_connection_status():
    st.sidebar.markdown("---")
    if SupabaseClient.is_configured():
        st.sidebar.caption("🟢 Supabase configured")
    else:
        st.sidebar.caption("🔴 Supabase not configured (set SUPABASE_URL / SUPABASE_KEY)")


def render_sidebar():
    """Main sidebar rendering function."""

    try:
        st.sidebar.title(f"{AppConfig.APP_ICON} {AppConfig.APP_NAME}")
        st.sidebar.caption(AppConfig.TAGLINE)

        _render_account()
        _render_statistics()
        _render_connection_status()

        st.sidebar.markdown("---")
        st.sidebar.caption(f"v{AppConfig.VERSION}")

    except Exception as e:
        st.sidebar.error("Sidebar error")
        logger.error(f"Sidebar rendering error: {e}", exc_info=True)
