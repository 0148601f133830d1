"""
Detection thresholds and scoring weights.

Every value can be overridden through an environment variable of the same name.
"""

import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# ── Cycle detection ───────────────────────────────────────────────────
MIN_CYCLE_LENGTH = int(os.getenv("MIN_CYCLE_LENGTH", "3"))
MAX_CYCLE_LENGTH = int(os.getenv("MAX_CYCLE_LENGTH", "6"))

# ── Smurfing (fan-in / fan-out) ───────────────────────────────────────
SMURFING_WINDOW_HOURS = float(os.getenv("SMURFING_WINDOW_HOURS", "72"))
SMURFING_MIN_COUNTERPARTIES = int(os.getenv("SMURFING_MIN_COUNTERPARTIES", "10"))

# ── Shell chains ──────────────────────────────────────────────────────
SHELL_MIN_CHAIN_LENGTH = int(os.getenv("SHELL_MIN_CHAIN_LENGTH", "4"))
SHELL_MAX_CHAIN_LENGTH = int(os.getenv("SHELL_MAX_CHAIN_LENGTH", "6"))
SHELL_MIN_TRANSACTIONS = int(os.getenv("SHELL_MIN_TRANSACTIONS", "2"))
SHELL_MAX_TRANSACTIONS = int(os.getenv("SHELL_MAX_TRANSACTIONS", "3"))

# ── Per-hit score contributions ───────────────────────────────────────
SCORE_CYCLE = float(os.getenv("SCORE_CYCLE", "40"))
SCORE_FAN_IN = float(os.getenv("SCORE_FAN_IN", "25"))
SCORE_FAN_OUT = float(os.getenv("SCORE_FAN_OUT", "25"))
SCORE_SHELL = float(os.getenv("SCORE_SHELL", "15"))
SCORE_HIGH_VELOCITY = float(os.getenv("SCORE_HIGH_VELOCITY", "5"))

# ── High velocity ─────────────────────────────────────────────────────
HIGH_VELOCITY_MIN_TRANSACTIONS = int(os.getenv("HIGH_VELOCITY_MIN_TRANSACTIONS", "5"))
HIGH_VELOCITY_RATE_PER_HOUR = float(os.getenv("HIGH_VELOCITY_RATE_PER_HOUR", "0.5"))

# ── Normalization ─────────────────────────────────────────────────────
# Fixed reference ceiling, not the observed maximum.
SCORE_REFERENCE_MAX = float(os.getenv("SCORE_REFERENCE_MAX", "110"))
CLAMP_SUSPICION_SCORES = _env_bool("CLAMP_SUSPICION_SCORES", True)

# ── Service limits ────────────────────────────────────────────────────
MAX_TRANSACTIONS = int(os.getenv("MAX_TRANSACTIONS", "10000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
APP_VERSION = "1.0.0"
