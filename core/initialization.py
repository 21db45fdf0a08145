"""
Initialization utilities for the NeuroSense engine.
"""
from pathlib import Path

from utils.logging_helper import setup_logging


def initialize_engine(data_dir=None, settings_provider=None, log_to_file=None):
    """
    Configure logging and build a profile engine

    Args:
        data_dir: Optional custom data directory path
        settings_provider: Callable returning app settings (``userName``)
        log_to_file: Override LOG_TO_FILE from config

    Returns:
        tuple: (config_dict, profile_engine)
    """
    # Import configuration
    from config import DATA_DIR as CONFIG_DATA_DIR, LOGS_DIR, ENGINE_CONFIG, PERFORMANCE_CONFIG

    # Use provided data directory or default from config
    if data_dir:
        data_dir = Path(data_dir)
        logs_dir = data_dir / "logs"
    else:
        data_dir = CONFIG_DATA_DIR
        logs_dir = LOGS_DIR

    # Set up logging
    logger = setup_logging(logs_dir, log_to_file=log_to_file)
    logger.info("Initializing NeuroSense engine...")

    if ENGINE_CONFIG["DEBUG_MODE"]:
        logger.info("Debug mode enabled")

    from managers.profile_engine import ProfileEngine
    engine = ProfileEngine(settings_provider=settings_provider)
    logger.info(f"Profile cache size: {engine.cache.max_size}, bucket: {engine.bucket_ms} ms")

    config = {
        "data_dir": data_dir,
        "cache_size": engine.cache.max_size,
        "bucket_ms": engine.bucket_ms,
        "debug_mode": ENGINE_CONFIG["DEBUG_MODE"],
        "performance_monitoring": PERFORMANCE_CONFIG["ENABLE_PERFORMANCE_MONITORING"],
    }

    return config, engine
