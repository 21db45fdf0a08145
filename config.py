"""
Configuration settings for the NeuroSense engine.
"""
import os
from pathlib import Path

# ─── Directory Setup ─────────────────────────────────────────────────────
DATA_DIR = Path(os.getenv("NEUROSENSE_DATA_DIR", "./data"))
LOGS_DIR = Path(os.getenv("NEUROSENSE_LOG_DIR", str(DATA_DIR / "logs")))

# ─── Engine Configuration ────────────────────────────────────────────────
ENGINE_CONFIG = {
    "DEFAULT_USER_NAME": os.getenv("DEFAULT_USER_NAME", "User"),
    "PROFILE_CACHE_SIZE": int(os.getenv("PROFILE_CACHE_SIZE", "4")),
    # Profiles are recomputed at most once per simulated minute
    "CACHE_BUCKET_MS": int(os.getenv("CACHE_BUCKET_MS", "60000")),
    "DEBUG_MODE": os.getenv("DEBUG_MODE", "0") == "1",
}

# ─── Logging Settings ────────────────────────────────────────────────────
LOGGING_CONFIG = {
    "LOGGER_NAME": "neurosense",
    "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),
    "LOG_TO_FILE": os.getenv("LOG_TO_FILE", "1") == "1",
    "LOG_MAX_BYTES": int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024))),
    "LOG_BACKUP_COUNT": int(os.getenv("LOG_BACKUP_COUNT", "5")),
}

# ─── Performance Settings ────────────────────────────────────────────────
PERFORMANCE_CONFIG = {
    "ENABLE_PERFORMANCE_MONITORING": os.getenv("ENABLE_PERFORMANCE_MONITORING", "1") == "1",
    "MEMORY_THRESHOLD_MB": int(os.getenv("MEMORY_THRESHOLD_MB", "500")),
    "MAX_ERRORS_PER_HOUR": int(os.getenv("MAX_ERRORS_PER_HOUR", "50")),
}

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ─── Validation Functions ───────────────────────────────────────────────────
def validate_config():
    """Validate configuration values and log warnings for invalid settings"""
    import logging
    logger = logging.getLogger(LOGGING_CONFIG["LOGGER_NAME"])

    if ENGINE_CONFIG["PROFILE_CACHE_SIZE"] < 1:
        logger.warning("PROFILE_CACHE_SIZE should be at least 1")
        ENGINE_CONFIG["PROFILE_CACHE_SIZE"] = 1

    if ENGINE_CONFIG["CACHE_BUCKET_MS"] < 1:
        logger.warning("CACHE_BUCKET_MS should be positive")
        ENGINE_CONFIG["CACHE_BUCKET_MS"] = 60000

    if not ENGINE_CONFIG["DEFAULT_USER_NAME"].strip():
        logger.warning("DEFAULT_USER_NAME is empty, falling back to 'User'")
        ENGINE_CONFIG["DEFAULT_USER_NAME"] = "User"

    if LOGGING_CONFIG["LOG_LEVEL"] not in VALID_LOG_LEVELS:
        logger.warning(f"Unknown LOG_LEVEL {LOGGING_CONFIG['LOG_LEVEL']!r}, using INFO")
        LOGGING_CONFIG["LOG_LEVEL"] = "INFO"

    if LOGGING_CONFIG["LOG_BACKUP_COUNT"] < 0:
        logger.warning("LOG_BACKUP_COUNT should not be negative")
        LOGGING_CONFIG["LOG_BACKUP_COUNT"] = 5

    if PERFORMANCE_CONFIG["MAX_ERRORS_PER_HOUR"] < 1:
        logger.warning("MAX_ERRORS_PER_HOUR should be at least 1")
        PERFORMANCE_CONFIG["MAX_ERRORS_PER_HOUR"] = 50


# Auto-validate on import
validate_config()
