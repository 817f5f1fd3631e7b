import os
import logging
from dataclasses import dataclass

from dotenv import load_dotenv

# Path: project_root/data/patients.db
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_DB_PATH = os.path.join(BASE_DIR, "data", "patients.db")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    db_path: str = DEFAULT_DB_PATH
    avg_visit_minutes: int = 7
    history_limit: int = 50
    log_level: str = "INFO"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r, expected an integer; using %d", name, raw, default)
        return default


def load_settings() -> Settings:
    """Read settings from the environment (and a .env file, if present)."""
    load_dotenv()
    return Settings(
        db_path=os.getenv("QUEUE_DB_PATH") or DEFAULT_DB_PATH,
        avg_visit_minutes=_int_env("QUEUE_AVG_VISIT_MINUTES", 7),
        history_limit=_int_env("QUEUE_HISTORY_LIMIT", 50),
        log_level=(os.getenv("QUEUE_LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(level: str = "INFO"):
    logging.basicConfig(level=level, format=LOG_FORMAT)
