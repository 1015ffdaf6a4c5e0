"""
Observability metrics collection for the chromatag analysis pipeline.

This module provides performance monitoring and an in-process metrics
collector for dominant color analysis runs.
"""

import time
import psutil
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, asdict
from contextlib import contextmanager
import threading
from collections import defaultdict, deque
import numpy as np
from loguru import logger


@dataclass
class PerformanceMetrics:
    """Performance metrics for one monitored operation."""
    operation_name: str
    duration_ms: float
    memory_usage_mb: float
    pixel_count: int
    cluster_count: int
    timestamp: float
    error: Optional[str] = None


class MetricsCollector:
    """Thread-safe metrics collector for analysis operations."""

    def __init__(self, max_history: int = 1000):
        self.max_history = max_history
        self._lock = threading.Lock()
        self._metrics_history: deque = deque(maxlen=max_history)
        self._operation_counts = defaultdict(int)
        self._error_counts = defaultdict(int)
        self._performance_stats = defaultdict(list)

    def record_performance(self, metrics: PerformanceMetrics) -> None:
        """Record performance metrics for an operation."""
        with self._lock:
            self._metrics_history.append(metrics)
            self._operation_counts[metrics.operation_name] += 1

            if metrics.error:
                self._error_counts[metrics.operation_name] += 1

            self._performance_stats[metrics.operation_name].append({
                'duration_ms': metrics.duration_ms,
                'memory_mb': metrics.memory_usage_mb,
                'cluster_count': metrics.cluster_count
            })

            # Keep only recent stats to prevent memory growth
            if len(self._performance_stats[metrics.operation_name]) > 100:
                self._performance_stats[metrics.operation_name].pop(0)

    def _operation_stats(self, operation_name: str) -> Dict[str, Any]:
        stats = self._performance_stats.get(operation_name)
        if not stats:
            return {}

        durations = [s['duration_ms'] for s in stats]
        memory_usage = [s['memory_mb'] for s in stats]
        clusters = [s['cluster_count'] for s in stats]

        return {
            'operation_name': operation_name,
            'total_calls': self._operation_counts[operation_name],
            'error_count': self._error_counts[operation_name],
            'error_rate': self._error_counts[operation_name] / max(1, self._operation_counts[operation_name]),
            'duration_stats': {
                'mean_ms': float(np.mean(durations)),
                'median_ms': float(np.median(durations)),
                'p95_ms': float(np.percentile(durations, 95)),
                'min_ms': float(np.min(durations)),
                'max_ms': float(np.max(durations))
            },
            'memory_stats': {
                'mean_mb': float(np.mean(memory_usage)),
                'peak_mb': float(np.max(memory_usage))
            },
            'cluster_stats': {
                'mean': float(np.mean(clusters)),
                'max': int(np.max(clusters))
            }
        }

    def get_operation_stats(self, operation_name: str) -> Dict[str, Any]:
        """Get aggregated statistics for a specific operation."""
        with self._lock:
            return self._operation_stats(operation_name)

    def get_all_stats(self) -> Dict[str, Any]:
        """Get aggregated statistics for all operations."""
        with self._lock:
            all_stats = {
                name: self._operation_stats(name)
                for name in self._operation_counts.keys()
            }
            total_ops = sum(self._operation_counts.values())
            total_errors = sum(self._error_counts.values())

            return {
                'operations': all_stats,
                'total_operations': total_ops,
                'total_errors': total_errors,
                'overall_error_rate': total_errors / max(1, total_ops)
            }

    def get_recent_metrics(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Get the most recent performance metrics."""
        with self._lock:
            recent = list(self._metrics_history)[-limit:]
            return [asdict(metric) for metric in recent]

    def reset(self) -> None:
        """Clear all recorded metrics."""
        with self._lock:
            self._metrics_history.clear()
            self._operation_counts.clear()
            self._error_counts.clear()
            self._performance_stats.clear()


# Global metrics collector instance
_metrics_collector = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    """Get the global metrics collector instance."""
    return _metrics_collector


def reset_metrics() -> None:
    """Reset the global metrics collector."""
    _metrics_collector.reset()


class OperationTracker:
    """Mutable counters a monitored block can fill in before it exits."""

    def __init__(self, pixel_count: int = 0, cluster_count: int = 0):
        self.pixel_count = pixel_count
        self.cluster_count = cluster_count
        self.duration_ms = 0.0


@contextmanager
def performance_monitor(operation_name: str, pixel_count: int = 0, cluster_count: int = 0,
                        enabled: bool = True):
    """
    Context manager for monitoring performance of operations.

    The yielded tracker carries the measured duration once the block exits.
    """
    tracker = OperationTracker(pixel_count, cluster_count)
    start_time = time.time()
    if not enabled:
        try:
            yield tracker
        finally:
            tracker.duration_ms = (time.time() - start_time) * 1000
        return

    start_memory = psutil.Process().memory_info().rss / 1024 / 1024  # MB

    error_msg = None

    try:
        yield tracker
    except Exception as e:
        error_msg = str(e)
        raise
    finally:
        end_time = time.time()
        end_memory = psutil.Process().memory_info().rss / 1024 / 1024  # MB
        tracker.duration_ms = (end_time - start_time) * 1000

        metrics = PerformanceMetrics(
            operation_name=operation_name,
            duration_ms=tracker.duration_ms,
            memory_usage_mb=max(end_memory, start_memory),
            pixel_count=tracker.pixel_count,
            cluster_count=tracker.cluster_count,
            timestamp=end_time,
            error=error_msg
        )

        _metrics_collector.record_performance(metrics)

        if error_msg:
            logger.error(f"Operation {operation_name} failed after {metrics.duration_ms:.1f}ms: {error_msg}")
        else:
            logger.info(f"Operation {operation_name} completed in {metrics.duration_ms:.1f}ms "
                        f"(pixels: {tracker.pixel_count}, clusters: {tracker.cluster_count}, "
                        f"memory: {metrics.memory_usage_mb:.1f}MB)")
