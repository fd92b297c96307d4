"""
Admin Section Router
Gate, loading state and tab routing for the admin panel
"""

import streamlit as st

from utils.data.admin_panel import AdminPanel, PROPERTIES_TAB, QUIZ_TAB, TABS
from utils.data.session import get_admin_panel, get_auth_context
from utils.toast import toast

TAB_LABELS = {
    PROPERTIES_TAB: "🏢 Properties",
    QUIZ_TAB: "💬 Quiz Questions",
}


def render_access_denied():
    """Static denial view - no data calls are made behind it."""
    st.markdown("""
    <div class='access-denied'>
        <h1>Access Denied</h1>
        <p>You don't have permission to access the admin panel.</p>
    </div>
    """, unsafe_allow_html=True)


def render_feedback(panel: AdminPanel):
    """Show the outcome of the last action once, then clear it."""
    if panel.last_message:
        toast(panel.last_message, "success")
    if panel.last_error:
        st.error(f"❌ {panel.last_error}")
        toast(panel.last_error.operation, "error")
    panel.clear_messages()


def render_admin_panel():
    """Main admin page with tabs."""

    auth = get_auth_context()
    if not auth.is_admin:
        render_access_denied()
        return

    panel = get_admin_panel()
    if panel.auth != auth:
        panel.sync_auth(auth)

    if panel.loading:
        with st.spinner("Loading properties and quiz questions..."):
            panel.load_all()

    st.title("Admin Panel")
    st.markdown("Manage properties and quiz questions")

    render_feedback(panel)

    selected = st.radio(
        "Section",
        options=list(TABS),
        index=TABS.index(panel.active_tab),
        format_func=lambda tab: TAB_LABELS[tab],
        horizontal=True,
        label_visibility="collapsed",
        key="admin_active_tab",
    )
    panel.set_active_tab(selected)

    st.markdown("---")

    if panel.active_tab == PROPERTIES_TAB:
        from pages.admin.properties import render_properties_tab
        render_properties_tab(panel)
    else:
        from pages.admin.quiz_questions import render_quiz_questions_tab
        render_quiz_questions_tab(panel)


if __name__ == "__main__":
    render_admin_panel()
