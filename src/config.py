"""
Single-source configuration: paths, emission cadence, retry policy,
and export naming.

Everything that might need tweaking lives here.
"""

from pathlib import Path


# ── Project Paths ─────────────────────────────────────────────────────────────

ROOT_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT_DIR / "data"
LOGS_DIR = ROOT_DIR / "logs"


# ── Simulated search ──────────────────────────────────────────────────────────

EMIT_INTERVAL: float = 1.5               # seconds between emitted records
SEED_SET_SIZE: int = 8                   # records synthesised per run

RATING_MIN: float = 3.5
RATING_SPAN: float = 1.5                 # ratings land in [3.5, 5.0]
REVIEWS_MIN: int = 50
REVIEWS_SPAN: int = 500                  # reviews land in [50, 549]

# ── Retry / resilience ───────────────────────────────────────────────────────

MAX_RETRIES: int = 3
RETRY_BACKOFF_BASE: float = 2.0          # exponential backoff base
RETRY_BACKOFF_MAX: float = 30.0          # cap wait time (seconds)

# ── Output ────────────────────────────────────────────────────────────────────

OUTPUT_DIR: Path = DATA_DIR
FILE_SUFFIX: str = "businesses"          # {keyword}_{city}_businesses.<ext>

EXCEL_SHEET_NAME: str = "Business Data"
XML_ROOT_TAG: str = "businesses"
XML_RECORD_TAG: str = "business"
