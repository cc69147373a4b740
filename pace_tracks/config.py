"""Central configuration for the track alignment tools.

All values are constants imported by the rest of the package. Adjust as needed
for your environment. Every value can be overridden from environment variables
(optionally via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _env_choice(key: str, default: str, choices: set[str]) -> str:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in choices:
        return normalized
    return default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except Exception:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------
# How the in-range pass finds the record samples bracketing each base
# checkpoint. "binary" reuses the locator search (O(|B| log |R|)); "scan"
# walks the record linearly per base checkpoint (O(|B| x |R|)). Both return
# identical results.
SEARCH_STRATEGIES = frozenset({"binary", "scan"})
NORMALIZER_SEARCH_STRATEGY = _env_choice(
    "NORMALIZER_SEARCH_STRATEGY", "binary", set(SEARCH_STRATEGIES)
)


# ---------------------------------------------------------------------------
# Input/Output
# ---------------------------------------------------------------------------
# Base name for normalized output when the CLI is not given --output.
OUTPUT_FILE = os.getenv("PACE_OUTPUT_FILE", "normalized_run")

# Append _YYYYMMDD_HHMMSS to the output name when True.
OUTPUT_FILE_TIMESTAMP_ENABLED = _env_bool("PACE_OUTPUT_FILE_TIMESTAMP_ENABLED", True)

# Default table format for generated output ("xlsx" or "csv").
OUTPUT_FORMAT = _env_choice("PACE_OUTPUT_FORMAT", "xlsx", {"xlsx", "csv"})

# Worksheet used when reading or writing checkpoint workbooks.
CHECKPOINT_SHEET = os.getenv("PACE_CHECKPOINT_SHEET", "Checkpoints")


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = _env_choice(
    "PACE_LOG_LEVEL",
    "info",
    {"debug", "info", "warning", "error", "critical"},
).upper()
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
