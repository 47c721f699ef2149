"""Performance profiler for jqr pipeline stages."""

import time
import psutil
import logging
from typing import Dict, Any, Optional, List
from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class PerformanceMetrics:
    """Performance metrics for one pipeline stage."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    input_size: int
    memory_start_mb: float
    memory_end_mb: float
    throughput_mbps: float


class PerformanceProfiler:
    """
    Records duration, memory and throughput of pipeline stages.

    Each stage (decode, parse, query, render) is wrapped in
    ``profile_operation``; the collected metrics are logged and kept in
    ``metrics_history``.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[PerformanceMetrics] = []
        self.current_operation: Optional[str] = None
        self.start_time: Optional[float] = None
        self.start_memory: Optional[float] = None
        self.input_size: int = 0

    @contextmanager
    def profile_operation(self, operation_name: str, input_size: int = 0):
        """
        Context manager for profiling operations.

        Args:
            operation_name: Name of the operation being profiled
            input_size: Size of input data in bytes
        """
        self.start_profiling(operation_name, input_size)
        try:
            yield self
        finally:
            self.stop_profiling()

    def start_profiling(self, operation_name: str, input_size: int = 0):
        self.current_operation = operation_name
        self.start_time = time.perf_counter()
        self.input_size = input_size
        self.start_memory = self._rss_mb()

        self.logger.debug(f"Started profiling: {operation_name}")

    def stop_profiling(self) -> PerformanceMetrics:
        """
        Stop profiling and return metrics.

        Returns:
            PerformanceMetrics object with collected data

        Raises:
            ValueError: If no operation is being profiled
        """
        if not self.current_operation or self.start_time is None:
            raise ValueError("No active profiling session")

        end_time = time.perf_counter()
        duration = end_time - self.start_time
        end_memory = self._rss_mb()
        throughput = (self.input_size / 1024 / 1024) / duration if duration > 0 else 0  # MB/s

        metrics = PerformanceMetrics(
            operation_name=self.current_operation,
            start_time=self.start_time,
            end_time=end_time,
            duration=duration,
            input_size=self.input_size,
            memory_start_mb=self.start_memory,
            memory_end_mb=end_memory,
            throughput_mbps=throughput
        )
        self.metrics_history.append(metrics)

        self.logger.info(
            f"{self.current_operation}: {duration * 1000:.2f}ms, "
            f"{throughput:.2f} MB/s, memory {self.start_memory:.1f} -> {end_memory:.1f} MB")

        # Reset state
        self.current_operation = None
        self.start_time = None
        self.start_memory = None

        return metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all performance metrics.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        total_duration = sum(m.duration for m in self.metrics_history)
        peak_memory = max(max(m.memory_start_mb, m.memory_end_mb) for m in self.metrics_history)

        return {
            "total_operations": len(self.metrics_history),
            "total_duration": total_duration,
            "peak_memory_mb": peak_memory,
            "operations": [
                {
                    "name": m.operation_name,
                    "duration": m.duration,
                    "throughput": m.throughput_mbps,
                }
                for m in self.metrics_history
            ]
        }

    def _rss_mb(self) -> float:
        try:
            return psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.warning(f"Memory sampling failed: {e}")
            return 0.0
