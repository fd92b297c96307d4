"""
Realty Admin - Main Application Entry Point

This file is INTENTIONALLY MINIMAL - it only handles:
1. Page configuration
2. Session state initialization
3. Routing to the admin panel

DO NOT add business logic here - put it in appropriate modules!

Run with:
    streamlit run app.py
"""

import logging
import sys
from pathlib import Path

import streamlit as st

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from config import AppConfig
from components.sidebar import render_sidebar
from pages.admin import render_admin_panel
from utils.data.session import initialize_session_state

logging.basicConfig(level=AppConfig.LOG_LEVEL)

# Page configuration
st.set_page_config(
    page_title=AppConfig.APP_NAME,
    page_icon=AppConfig.APP_ICON,
    layout="wide",
    initial_sidebar_state="expanded"
)

# Initialize session state
initialize_session_state()

# Apply custom CSS
st.markdown(AppConfig.CUSTOM_CSS, unsafe_allow_html=True)

# Render sidebar (always visible)
render_sidebar()

render_admin_panel()

# Footer
st.markdown("---")
st.caption(f"{AppConfig.APP_NAME} v{AppConfig.VERSION} | {AppConfig.TAGLINE}")
