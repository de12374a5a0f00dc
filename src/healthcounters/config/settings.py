import os, logging
from pathlib import Path

from dotenv import load_dotenv

# Load .env if present, before anything below reads the environment
load_dotenv()

log = logging.getLogger("healthcounters.settings")


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


PROJECT_ROOT = Path(__file__).resolve().parents[3]

# Read from environment with sensible defaults
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8011"))
PERSON_NAME = os.getenv("PERSON_NAME", "John Doe")
HEALTHY_START_DATE = os.getenv("HEALTHY_START_DATE", "2024-01-01")
DOCTOR_START_DATE = os.getenv("DOCTOR_START_DATE", "2024-01-15")
IS_HEALTHY = _flag("IS_HEALTHY", default=True)
TRUST_PROXY = _flag("TRUST_PROXY")
TEMPLATE_DIR = os.getenv("TEMPLATE_DIR", str(PROJECT_ROOT / "templates"))
STATIC_DIR = os.getenv("STATIC_DIR", str(PROJECT_ROOT / "static"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# counter key -> settings attribute holding its ISO start date
COUNTERS = {
    "healthy": "HEALTHY_START_DATE",
    "doctor": "DOCTOR_START_DATE",
}


def start_dates() -> dict:
    """Current start date for every configured counter, keyed by counter name."""
    module = globals()
    return {key: module[attr] for key, attr in COUNTERS.items()}


def validate() -> list:
    """Log (never raise) every start date that is not a YYYY-MM-DD calendar date."""
    from ..counters.days import parse_start_date

    bad = []
    for key, value in start_dates().items():
        if parse_start_date(value) is None:
            log.warning(f"Start date for '{key}' is not a valid YYYY-MM-DD date: {value!r}; counter will show 0")
            bad.append(key)
    return bad
