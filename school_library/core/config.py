import logging
import os

# -----------------------------
# Configuration & Logging
# -----------------------------
DATABASE_URL = os.getenv("LIBRARY_DB", "sqlite:///./schulbibliothek.db")
LOG_LEVEL = os.getenv("LIBRARY_LOG", "INFO")
SECRET_KEY = os.getenv("LIBRARY_SECRET_KEY", "schulbibliothek-dev-key-change-me")
SESSION_COOKIE = os.getenv("LIBRARY_SESSION_COOKIE", "schulbibliothek_session")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def configure_logging(level=None):
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
