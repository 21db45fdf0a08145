"""
Utility modules for the NeuroSense engine.
"""
from utils.logging_helper import setup_logging, get_logger
from utils.memory_monitor import (
    get_memory_usage, log_memory_usage, force_garbage_collection, monitor_memory_threshold
)
from utils.error_handler import (
    EngineLogger, ErrorAggregator, safe_execute, log_error_with_aggregation
)
from utils.performance_utils import (
    LRUCache, PerformanceMonitor, performance_timer, global_performance_monitor
)
from utils.numeric import clamp, js_round, js_to_fixed, string_hash32, js_remainder

__all__ = [
    'setup_logging', 'get_logger',
    'get_memory_usage', 'log_memory_usage', 'force_garbage_collection', 'monitor_memory_threshold',
    'EngineLogger', 'ErrorAggregator', 'safe_execute', 'log_error_with_aggregation',
    'LRUCache', 'PerformanceMonitor', 'performance_timer', 'global_performance_monitor',
    'clamp', 'js_round', 'js_to_fixed', 'string_hash32', 'js_remainder'
]
