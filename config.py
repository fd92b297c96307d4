"""
Realty Admin Configuration
Central configuration for all app settings
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file (for local development)
load_dotenv()


class Colors:
    """Standardized color palette - Muted Blue Theme"""
    # Primary palette
    PRIMARY = "#1d4ed8"      # Main brand color
    SECONDARY = "#3b82f6"    # Secondary actions
    ACCENT = "#1e40af"       # Highlights/active states

    # Backgrounds
    BG_PAGE = "#f9fafb"      # Page background
    BG_CARD = "#ffffff"      # Card background
    BG_SIDEBAR = "#f8f9fa"   # Sidebar background

    # Text
    TEXT_PRIMARY = "#111827"     # Main text
    TEXT_SECONDARY = "#4b5563"   # Secondary text
    TEXT_MUTED = "#6b7280"       # Muted text

    # Status
    SUCCESS = "#16a34a"
    WARNING = "#ffc107"
    ERROR = "#dc2626"
    INFO = "#17a2b8"

    # Borders
    BORDER_LIGHT = "#e5e7eb"
    BORDER_DARK = "#d1d5db"


class AppConfig:
    """Application configuration and settings"""

    # ============================================================================
    # APP IDENTITY
    # ============================================================================
    APP_NAME = "Realty Admin"
    APP_VERSION = "1.0"
    VERSION = "1.0"  # Alias for compatibility
    APP_ICON = "🏢"
    TAGLINE = "Manage properties and quiz questions"

    # ============================================================================
    # LOGGING
    # ============================================================================
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # ============================================================================
    # SUPABASE CONFIGURATION (SECURE - from environment)
    # ============================================================================
    SUPABASE_URL = os.environ.get('SUPABASE_URL', '')
    SUPABASE_KEY = os.environ.get('SUPABASE_KEY', '')
    SUPABASE_JWT_SECRET = os.environ.get('SUPABASE_JWT_SECRET', '')

    # Tables
    PROPERTIES_TABLE = "properties"
    QUIZ_TABLE = "quiz_questions"
    PROFILES_TABLE = "profiles"

    # Role stored in profiles.role that unlocks the admin panel
    ADMIN_ROLE = "admin"

    # ============================================================================
    # ADMIN PANEL BEHAVIOUR
    # ============================================================================
    # Seconds to wait for the initial concurrent load before dropping the spinner
    LOAD_TIMEOUT_SECONDS = float(os.environ.get('ADMIN_LOAD_TIMEOUT', '15'))

    # Re-query the table after every write (read-after-write). When False the
    # row returned by the write is applied to the local store directly.
    REFRESH_AFTER_WRITE = True

    @classmethod
    def use_supabase(cls) -> bool:
        """True when Supabase credentials are present in the environment."""
        return bool(os.getenv('SUPABASE_URL') and os.getenv('SUPABASE_KEY'))

    # ============================================================================
    # CUSTOM CSS (STANDARDIZED COLORS)
    # ============================================================================
    CUSTOM_CSS = f"""
    <style>
    /* Main container */
    .main .block-container {{
        padding-top: 2rem;
        padding-bottom: 2rem;
        max-width: 1280px;
    }}

    h1, h2, h3 {{
        color: {Colors.TEXT_PRIMARY};
        font-family: "Source Sans Pro", sans-serif;
    }}

    /* Record rows */
    .record-card {{
        background: {Colors.BG_CARD};
        padding: 1rem;
        border-radius: 8px;
        border: 1px solid {Colors.BORDER_LIGHT};
        margin-bottom: 0.75rem;
    }}

    .record-card h3 {{
        font-size: 1.05rem;
        margin: 0 0 0.25rem 0;
    }}

    .record-meta {{
        color: {Colors.TEXT_SECONDARY};
        font-size: 0.9rem;
    }}

    .access-denied {{
        background: {Colors.BG_CARD};
        padding: 2rem;
        border-radius: 12px;
        text-align: center;
        box-shadow: 0 1px 3px rgba(0,0,0,0.08);
    }}

    .stButton > button {{
        border-radius: 6px;
        font-weight: 600;
    }}

    section[data-testid="stSidebar"] {{
        background-color: {Colors.BG_SIDEBAR};
    }}

    /* Hide Streamlit branding */
    #MainMenu {{visibility: hidden;}}
    footer {{visibility: hidden;}}
    </style>
    """

    # ============================================================================
    # VALIDATION
    # ============================================================================
    @classmethod
    def validate_config(cls) -> tuple[bool, list[str]]:
        """
        Validate configuration

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        if not os.getenv('SUPABASE_URL'):
            errors.append("SUPABASE_URL not configured in environment variables")
        if not os.getenv('SUPABASE_KEY'):
            errors.append("SUPABASE_KEY not configured in environment variables")
        if cls.LOAD_TIMEOUT_SECONDS <= 0:
            errors.append("ADMIN_LOAD_TIMEOUT must be positive")

        return (len(errors) == 0, errors)

    @classmethod
    def get_config_summary(cls) -> dict:
        """Get summary of current configuration"""
        url = os.getenv('SUPABASE_URL', '')
        return {
            'app_name': cls.APP_NAME,
            'version': cls.APP_VERSION,
            'supabase_configured': cls.use_supabase(),
            'supabase_url': url[:50] + '...' if len(url) > 50 else (url or 'Not configured'),
            'jwt_verification': bool(os.getenv('SUPABASE_JWT_SECRET')),
            'refresh_after_write': cls.REFRESH_AFTER_WRITE,
            'load_timeout_seconds': cls.LOAD_TIMEOUT_SECONDS,
            'log_level': cls.LOG_LEVEL,
        }
