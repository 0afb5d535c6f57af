"""
Main Streamlit application for photowall.

Run with ``streamlit run src/photowall/main.py`` or the ``photowall`` script.
"""

import sys
from pathlib import Path

import streamlit as st
from dotenv import load_dotenv
from streamlit.runtime.scriptrunner_utils.exceptions import RerunException, StopException

from photowall.config import get_api_base_url, get_debug_mode
from photowall.logging_config import configure_structured_logging, get_logger
from photowall.ui.components.common import render_footer
from photowall.ui.components.error_display import error_context, get_error_display_manager
from photowall.ui.handlers.error import error_handler
from photowall.ui.handlers.gallery import initialize_gallery_state
from photowall.ui.handlers.notifications import NOTIFICATIONS_KEY, flush_notifications
from photowall.ui.handlers.upload import initialize_upload_state
from photowall.ui.pages.gallery import render_gallery_page

# Environment variables already set win over .env entries
load_dotenv()
configure_structured_logging()
logger = get_logger(__name__)
error_display = get_error_display_manager()


def initialize_session_state() -> None:
    """Initialize session state variables."""
    if NOTIFICATIONS_KEY not in st.session_state:
        st.session_state[NOTIFICATIONS_KEY] = []

    initialize_gallery_state()
    initialize_upload_state()


def main() -> None:
    """Main application entry point."""
    logger.info("application_starting", api_url=get_api_base_url())

    try:
        st.set_page_config(
            page_title="我的照片墙",
            page_icon="📸",
            layout="wide",
            initial_sidebar_state="collapsed",
            menu_items={
                "Get Help": None,
                "Report a bug": None,
                "About": "photowall - 照片墙",
            },
        )

        initialize_session_state()

        # Messages queued before the last rerun
        flush_notifications()

        with st.container():
            with error_context("照片墙加载时发生错误"):
                render_gallery_page()

        render_footer()

        if get_debug_mode():
            with st.expander("Debug Info"):
                st.write("Session State:", st.session_state)
                st.write("Error counts:", error_handler.get_error_statistics())

    except Exception as e:
        if isinstance(e, (RerunException, StopException)):
            raise

        logger.error("critical_application_error", error=str(e))
        error_display.display_exception(e, context={"operation": "main_application"}, show_details=True)

        if st.button("🔄 重新加载", type="primary"):
            st.rerun()


def run() -> None:
    """Console entry point: launch this file with ``streamlit run``."""
    from streamlit.web import cli as stcli

    sys.argv = ["streamlit", "run", str(Path(__file__).resolve()), *sys.argv[1:]]
    sys.exit(stcli.main())


if __name__ == "__main__":
    main()
