"""
Memory usage monitoring tools for the NeuroSense engine.
"""
import os
import gc
import psutil
from datetime import datetime


def get_memory_usage():
    """
    Get current memory usage information

    Returns:
        dict: Memory usage information
    """
    process = psutil.Process(os.getpid())
    memory_info = process.memory_info()

    return {
        "rss_mb": memory_info.rss / (1024 * 1024),  # Resident Set Size in MB
        "vms_mb": memory_info.vms / (1024 * 1024),  # Virtual Memory Size in MB
        "percent": process.memory_percent(),
        "timestamp": datetime.now().isoformat()
    }


def log_memory_usage(logger, label=""):
    """
    Log current memory usage

    Args:
        logger: Logger instance
        label: Optional label for the log entry

    Returns:
        dict: The measured memory usage
    """
    memory = get_memory_usage()
    prefix = f"{label}: " if label else ""
    logger.info(f"{prefix}Memory usage: {memory['rss_mb']:.2f} MB (RSS), {memory['percent']:.1f}% of system RAM")
    return memory


def force_garbage_collection():
    """
    Force a full garbage collection

    Returns:
        int: Number of objects collected
    """
    gc.collect(0)
    gc.collect(1)
    return gc.collect(2)


def monitor_memory_threshold(logger, threshold_mb=500, on_exceeded=None):
    """
    Check memory usage once against a threshold

    Args:
        logger: Logger instance
        threshold_mb: Memory threshold in MB
        on_exceeded: Callable invoked when the threshold is exceeded

    Returns:
        bool: True if the threshold was exceeded
    """
    memory = get_memory_usage()
    if memory["rss_mb"] <= threshold_mb:
        return False

    logger.warning(f"Memory threshold exceeded: {memory['rss_mb']:.2f} MB / {threshold_mb} MB")
    if on_exceeded:
        on_exceeded()
    return True
