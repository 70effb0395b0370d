"""Configuration: env, data paths, API bind address, form loading."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of juicetracker package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so JUICETRACKER_* overrides are set
load_dotenv(BASE_DIR / ".env")

DATA_DIR = Path(os.getenv("JUICETRACKER_DATA_DIR", str(BASE_DIR / "data")))
JUICES_PATH = DATA_DIR / "juices.json"

# API
API_HOST = os.getenv("JUICETRACKER_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("JUICETRACKER_API_PORT", "8000"))
# Auto-reload on code changes (development)
API_RELOAD = os.getenv("JUICETRACKER_API_RELOAD", "0").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("JUICETRACKER_LOG_LEVEL", "INFO").upper()

# Entry form: fetch the record being edited on a worker thread (result may arrive after user edits)
BACKGROUND_LOAD = os.getenv("JUICETRACKER_BACKGROUND_LOAD", "1").lower() in ("1", "true", "yes")
LOAD_WORKERS = int(os.getenv("JUICETRACKER_LOAD_WORKERS", "2"))
# Open entry forms kept at once; the oldest is cancelled beyond this
MAX_SESSIONS = int(os.getenv("JUICETRACKER_MAX_SESSIONS", "100"))


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
