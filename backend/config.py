import os

from dotenv import load_dotenv

# Load .env locally; on Render, env vars are injected automatically.
load_dotenv()


class Config:
    """Flask settings read from the environment."""

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///journal.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    FRONTEND_ORIGIN = os.getenv("FRONTEND_ORIGIN")
    ALLOW_INIT_DB = os.getenv("ALLOW_INIT_DB") == "1"

    PORT = int(os.getenv("PORT", "5000"))
    DEBUG = os.getenv("FLASK_DEBUG") == "1"

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE")

    # 0 = Monday ... 6 = Sunday
    WEEK_STARTS_ON = int(os.getenv("WEEK_STARTS_ON", "6"))
