"""
Benchmarking utility for tracking stage latencies.
Records timing data for the study-session pipeline and narration synthesis.
"""

import json
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from threading import RLock
from typing import Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkEvent:
    """Records a single benchmark event."""
    component: str  # e.g., "Segmenter", "TTSEngine"
    operation: str  # e.g., "segment", "synthesize"
    duration_seconds: float
    timestamp: datetime = field(default_factory=datetime.now)
    metadata: Dict = field(default_factory=dict)

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "component": self.component,
            "operation": self.operation,
            "duration_seconds": self.duration_seconds,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata
        }


class BenchmarkTracker:
    """Tracks benchmarks across the study pipeline."""

    def __init__(self, session_id: Optional[str] = None):
        self.session_id = session_id or datetime.now().strftime("%Y%m%d_%H%M%S")
        self.events: List[BenchmarkEvent] = []
        self._start_times: Dict[str, float] = {}
        self._lock = RLock()

    def start_timer(self, timer_id: str) -> None:
        """Start a timer with the given ID."""
        with self._lock:
            self._start_times[timer_id] = time.perf_counter()

    def end_timer(
        self,
        timer_id: str,
        component: str,
        operation: str,
        metadata: Optional[Dict] = None
    ) -> float:
        """
        End a timer and record the benchmark.

        Args:
            timer_id: The timer ID started with start_timer
            component: Component name
            operation: Operation name
            metadata: Optional metadata to store

        Returns:
            Duration in seconds
        """
        with self._lock:
            if timer_id not in self._start_times:
                raise ValueError(f"Timer '{timer_id}' was never started")

            duration = time.perf_counter() - self._start_times.pop(timer_id)
            self.events.append(BenchmarkEvent(
                component=component,
                operation=operation,
                duration_seconds=duration,
                metadata=metadata or {}
            ))

        logger.debug("[BENCHMARK] %s.%s: %.3fs %s", component, operation, duration, metadata or "")
        return duration

    @contextmanager
    def track(self, component: str, operation: str, metadata: Optional[Dict] = None) -> Iterator[Dict]:
        """
        Time the enclosed block.

        Yields a metadata dict the caller may extend before the block exits.
        The event is only recorded when the block completes without raising.
        """
        timer_id = f"{component}.{operation}.{id(object())}"
        extra: Dict = dict(metadata or {})
        self.start_timer(timer_id)
        try:
            yield extra
        except BaseException:
            with self._lock:
                self._start_times.pop(timer_id, None)
            raise
        self.end_timer(timer_id, component, operation, extra)

    def get_summary(self) -> Dict:
        """Get summary statistics by component and operation."""
        with self._lock:
            summary = {}

            for event in self.events:
                key = f"{event.component}::{event.operation}"
                stats = summary.setdefault(key, {
                    "count": 0,
                    "total_time": 0.0,
                    "min_time": float('inf'),
                    "max_time": 0.0,
                    "avg_time": 0.0
                })
                stats["count"] += 1
                stats["total_time"] += event.duration_seconds
                stats["min_time"] = min(stats["min_time"], event.duration_seconds)
                stats["max_time"] = max(stats["max_time"], event.duration_seconds)
                stats["avg_time"] = stats["total_time"] / stats["count"]

            return summary

    def to_dict(self) -> Dict:
        """Convert all events to dictionary format."""
        with self._lock:
            return {
                "session_id": self.session_id,
                "timestamp": datetime.now().isoformat(),
                "events": [event.to_dict() for event in self.events],
                "summary": self.get_summary()
            }

    def save_json(self, filepath: Path) -> None:
        """Save benchmark data to a JSON file, replacing it atomically."""
        filepath.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = filepath.with_suffix(filepath.suffix + ".tmp")

        with self._lock:
            payload = self.to_dict()

        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2)

        tmp_path.replace(filepath)
        logger.info("Benchmark data saved to %s", filepath)

    def log_summary(self) -> None:
        """Log a per-stage summary of recorded benchmarks."""
        for key, stats in sorted(self.get_summary().items()):
            logger.info(
                "[BENCHMARK] %s count=%d total=%.3fs avg=%.3fs min=%.3fs max=%.3fs",
                key, stats["count"], stats["total_time"], stats["avg_time"],
                stats["min_time"], stats["max_time"]
            )


# Global benchmark tracker instance
_benchmark_tracker: Optional[BenchmarkTracker] = None


def get_benchmark_tracker(session_id: Optional[str] = None) -> BenchmarkTracker:
    """Get or create the global benchmark tracker."""
    global _benchmark_tracker
    if _benchmark_tracker is None:
        _benchmark_tracker = BenchmarkTracker(session_id)
    return _benchmark_tracker


def reset_benchmark_tracker() -> None:
    """Reset the global benchmark tracker."""
    global _benchmark_tracker
    _benchmark_tracker = None
