"""
Toast Notification System
Non-intrusive notifications for admin actions
"""

import streamlit as st
from typing import Literal, Optional


class ToastManager:
    """Manage toast notifications with consistent icons"""

    @staticmethod
    def success(message: str, icon: str = "✅"):
        st.toast(message, icon=icon)

    @staticmethod
    def info(message: str, icon: str = "💡"):
        st.toast(message, icon=icon)

    @staticmethod
    def warning(message: str, icon: str = "⚠️"):
        st.toast(message, icon=icon)

    @staticmethod
    def error(message: str, icon: str = "❌"):
        st.toast(message, icon=icon)

    # Convenience methods for common actions

    @staticmethod
    def signed_in(email: str):
        st.toast(f"Signed in as {email}", icon="🔑")

    @staticmethod
    def signed_out():
        st.toast("Signed out", icon="👋")


# Convenience function for quick use
def toast(message: str, type: Literal["success", "info", "warning", "error"] = "info", icon: Optional[str] = None):
    """
    Quick toast function

    Usage:
        toast("Property saved!", "success")
        toast("Delete failed", "error")
    """
    if type == "success":
        ToastManager.success(message, icon or "✅")
    elif type == "warning":
        ToastManager.warning(message, icon or "⚠️")
    elif type == "error":
        ToastManager.error(message, icon or "❌")
    else:
        ToastManager.info(message, icon or "💡")
