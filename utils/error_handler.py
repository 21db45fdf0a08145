"""
Error handling and structured logging utilities for the NeuroSense engine.

The analyzers run inline in a render path, so a failure must degrade to a
neutral result instead of propagating into the UI.
"""
import traceback
import functools
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from config import LOGGING_CONFIG, PERFORMANCE_CONFIG

LOGGER_NAME = LOGGING_CONFIG["LOGGER_NAME"]

# Custom level between INFO and WARNING for score transitions
PSYCHE_LEVEL = 25
logging.addLevelName(PSYCHE_LEVEL, 'PSYCHE')


class EngineLogger:
    """Structured logger for engine events"""

    def __init__(self, name: str = LOGGER_NAME):
        self.logger = logging.getLogger(name)

    def log_score_change(self, character_id: str, metric: str, old_value: float, new_value: float):
        """Log a score transition between two profile computations"""
        change = new_value - old_value
        self.logger.log(
            PSYCHE_LEVEL,
            f"Character {character_id} - {metric}: {old_value:.0f} -> {new_value:.0f} ({change:+.0f})"
        )

    def log_status_change(self, character_id: str, metric: str, old_label: str, new_label: str):
        """Log a change of a discrete label (status, tier, mask integrity)"""
        self.logger.log(PSYCHE_LEVEL, f"Character {character_id} - {metric}: {old_label} -> {new_label}")

    def log_error_with_context(self, error: Exception, context: dict = None):
        """Log errors with additional context"""
        context_str = ""
        if context:
            context_items = [f"{k}={v}" for k, v in context.items()]
            context_str = f" | Context: {', '.join(context_items)}"

        self.logger.error(f"Error: {type(error).__name__}: {error}{context_str}")


class ErrorAggregator:
    """Collect and aggregate errors to prevent spam"""

    def __init__(self, max_errors_per_hour: int = 50):
        self.max_errors_per_hour = max_errors_per_hour
        self.error_counts = {}
        self.last_reset = datetime.now(timezone.utc)

    def should_log_error(self, error_key: str) -> bool:
        """Check if error should be logged based on rate limiting"""
        now = datetime.now(timezone.utc)

        # Reset counts every hour
        if (now - self.last_reset).total_seconds() > 3600:
            self.error_counts.clear()
            self.last_reset = now

        current_count = self.error_counts.get(error_key, 0)
        if current_count >= self.max_errors_per_hour:
            return False

        self.error_counts[error_key] = current_count + 1
        return True

    def reset(self):
        """Forget all counted errors"""
        self.error_counts.clear()
        self.last_reset = datetime.now(timezone.utc)


# Global error aggregator
error_aggregator = ErrorAggregator(PERFORMANCE_CONFIG["MAX_ERRORS_PER_HOUR"])


def log_error_with_aggregation(error: Exception, context: str = "", extra_data: dict = None):
    """Log error with aggregation to prevent spam"""
    error_key = f"{context}:{type(error).__name__}:{str(error)[:100]}"

    if error_aggregator.should_log_error(error_key):
        logger = logging.getLogger(LOGGER_NAME)

        error_msg = f"Error in {context}: {type(error).__name__}: {error}"
        if extra_data:
            extra_str = ", ".join(f"{k}={v}" for k, v in extra_data.items())
            error_msg += f" | Extra: {extra_str}"

        logger.error(error_msg)

        # Log full traceback only for new/rare errors
        if error_aggregator.error_counts.get(error_key, 0) <= 3:
            logger.debug(f"Traceback for {error_key}: {traceback.format_exc()}")


def safe_execute(default_return: Any = None, default_factory: Optional[Callable[[], Any]] = None,
                 log_errors: bool = True):
    """
    Decorator that returns a neutral value instead of raising.

    Args:
        default_return: Value returned when the wrapped call fails
        default_factory: Callable building the fallback value; takes precedence
            over ``default_return`` so mutable defaults are never shared
        log_errors: Log the failure through the error aggregator
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if log_errors:
                    log_error_with_aggregation(e, func.__name__)
                if default_factory is not None:
                    return default_factory()
                return default_return

        wrapper.__wrapped_unsafe__ = func
        return wrapper

    return decorator
