import os
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DB_PATH = "data/matches.db"
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_LEVEL = "INFO"


def load_env() -> None:
    """Load .env from the working directory if present.

    Existing environment variables win over values in the file.
    """
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)


def db_path() -> Path:
    return Path(os.getenv("SKILLMATCH_DB", DEFAULT_DB_PATH))


def log_dir() -> Path:
    return Path(os.getenv("SKILLMATCH_LOG_DIR", DEFAULT_LOG_DIR))


def log_level() -> str:
    return os.getenv("SKILLMATCH_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
