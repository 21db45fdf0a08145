"""
Performance utilities for the NeuroSense engine.
"""
import time
import functools
from collections import OrderedDict, defaultdict
from typing import Any, Callable, Optional, Dict


class LRUCache:
    """Simple LRU cache implementation with optional TTL support"""

    def __init__(self, max_size: int = 128, ttl_seconds: Optional[float] = None):
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self.cache = OrderedDict()
        self.timestamps = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: Any) -> Optional[Any]:
        """Get value from cache"""
        if key not in self.cache:
            self.misses += 1
            return None

        # Check TTL
        if self.ttl_seconds is not None and time.time() - self.timestamps[key] > self.ttl_seconds:
            del self.cache[key]
            del self.timestamps[key]
            self.misses += 1
            return None

        # Move to end (most recently used)
        self.cache.move_to_end(key)
        self.hits += 1
        return self.cache[key]

    def put(self, key: Any, value: Any):
        """Put value in cache"""
        if key in self.cache:
            self.cache.move_to_end(key)
        else:
            if len(self.cache) >= self.max_size:
                # Remove least recently used
                oldest_key = next(iter(self.cache))
                del self.cache[oldest_key]
                del self.timestamps[oldest_key]

        self.cache[key] = value
        self.timestamps[key] = time.time()

    def clear(self):
        """Clear the cache"""
        self.cache.clear()
        self.timestamps.clear()
        self.hits = 0
        self.misses = 0

    def size(self) -> int:
        """Get current cache size"""
        return len(self.cache)


class PerformanceMonitor:
    """Monitor performance metrics for optimization"""

    def __init__(self):
        self.metrics = defaultdict(list)
        self.start_times = {}

    def start_timer(self, operation: str):
        """Start timing an operation"""
        self.start_times[operation] = time.perf_counter()

    def end_timer(self, operation: str):
        """End timing an operation and record the duration"""
        if operation in self.start_times:
            duration = time.perf_counter() - self.start_times[operation]
            self.metrics[operation].append(duration)
            del self.start_times[operation]

            # Keep only last 100 measurements
            if len(self.metrics[operation]) > 100:
                self.metrics[operation] = self.metrics[operation][-100:]

    def get_stats(self, operation: str) -> Dict[str, float]:
        """Get statistics for an operation"""
        if operation not in self.metrics or not self.metrics[operation]:
            return {}

        durations = self.metrics[operation]
        return {
            "count": len(durations),
            "avg": sum(durations) / len(durations),
            "min": min(durations),
            "max": max(durations),
            "recent_avg": sum(durations[-10:]) / min(10, len(durations))
        }

    def get_all_stats(self) -> Dict[str, Dict[str, float]]:
        """Get statistics for all operations"""
        return {op: self.get_stats(op) for op in self.metrics.keys()}

    def reset(self):
        self.metrics.clear()
        self.start_times.clear()


# Global performance monitor instance
global_performance_monitor = PerformanceMonitor()


def performance_timer(operation_name: str = None, monitor: PerformanceMonitor = None):
    """Decorator to time function execution"""
    monitor = monitor or global_performance_monitor

    def decorator(func: Callable) -> Callable:
        op_name = operation_name or f"{func.__module__}.{func.__name__}"

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            monitor.start_timer(op_name)
            try:
                return func(*args, **kwargs)
            finally:
                monitor.end_timer(op_name)

        wrapper._monitor = monitor
        return wrapper

    return decorator
