"""
Observability module for the chromatag analysis pipeline.

Performance monitoring and metrics collection for dominant color analysis.
"""

from .metrics import (
    PerformanceMetrics,
    MetricsCollector,
    OperationTracker,
    get_metrics_collector,
    reset_metrics,
    performance_monitor
)

__all__ = [
    'PerformanceMetrics',
    'MetricsCollector',
    'OperationTracker',
    'get_metrics_collector',
    'reset_metrics',
    'performance_monitor'
]
