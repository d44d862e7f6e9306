import logging
import os
import sys
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from api.auth_api import AuthApi
from api.category_api import CategoryApi
from api.http_client import ApiClient
from api.transaction_api import TransactionApi

from services.category_service import CategoryService
from services.locale_service import Locale
from services.session import Session
from services.transaction_service import TransactionService

from ui.app_window import AppWindow
from utils.app_config import AppConfig
from utils.logging_setup import LOG_FILE_NAME, setup_logging
from utils.settings import settings

logger = logging.getLogger(__name__)


def main():
    setup_logging(settings.log_level, settings.config_dir / LOG_FILE_NAME)

    # ── Persisted client state ───────────────────────────────────────────────
    config = AppConfig(settings.config_dir)
    session = Session(config)
    session.restore()
    locale = Locale(config)
    locale.restore()

    # ── Backend ──────────────────────────────────────────────────────────────
    client = ApiClient(token_provider=lambda: session.token)
    auth_api = AuthApi(client)
    category_api = CategoryApi(client)
    tx_api = TransactionApi(client)

    # ── Services ─────────────────────────────────────────────────────────────
    tx_svc = TransactionService(tx_api)
    category_svc = CategoryService(category_api)

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode(config.get("appearance_mode", "system"))
    ctk.set_default_color_theme("blue")

    logger.info("Starting", extra={"backend": client.base_url, "locale": locale.code})

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(
        session=session,
        locale=locale,
        auth_api=auth_api,
        tx_service=tx_svc,
        category_service=category_svc,
    )

    def on_close():
        client.close()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_close)
    app.mainloop()


if __name__ == "__main__":
    main()
