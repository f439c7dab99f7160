"""Timers, a named-section profiler and latency statistics."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

T = TypeVar("T")


class HighResolutionTimer:
    """Measures elapsed wall time in nanoseconds from its start point."""

    def __init__(self) -> None:
        self._start = time.perf_counter_ns()

    def start(self) -> None:
        self._start = time.perf_counter_ns()

    def elapsed(self) -> int:
        """Nanoseconds since the timer was started."""
        return time.perf_counter_ns() - self._start

    def elapsed_seconds(self) -> float:
        return self.elapsed() * 1e-9

    def elapsed_microseconds(self) -> float:
        return self.elapsed() * 1e-3

    def reset(self) -> None:
        self._start = time.perf_counter_ns()


class ScopedTimer:
    """Context manager that stores the time spent in its block in ``duration_ns``."""

    def __init__(self) -> None:
        self.duration_ns = 0
        self._timer = HighResolutionTimer()

    def __enter__(self) -> "ScopedTimer":
        self._timer.reset()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.duration_ns = self._timer.elapsed()


@dataclass
class ProfileData:
    """Call count and timing totals for one profiled section."""

    call_count: int = 0
    total_time: int = 0
    min_time: int | None = None
    max_time: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def update(self, duration_ns: int) -> None:
        with self._lock:
            self.call_count += 1
            self.total_time += duration_ns
            if self.min_time is None or duration_ns < self.min_time:
                self.min_time = duration_ns
            if duration_ns > self.max_time:
                self.max_time = duration_ns

    def average_time_ns(self) -> float:
        return self.total_time / self.call_count if self.call_count else 0.0

    def min_time_ns(self) -> int:
        """Smallest recorded duration, or 0 if nothing was recorded."""
        return 0 if self.min_time is None else self.min_time

    def _snapshot(self) -> "ProfileData":
        with self._lock:
            return ProfileData(self.call_count, self.total_time, self.min_time, self.max_time)


class PerformanceProfiler:
    """Collects timings of named sections; timers are kept per thread."""

    _instance: "PerformanceProfiler | None" = None
    _instance_lock = threading.Lock()

    def __init__(self) -> None:
        self._profiles: dict[str, ProfileData] = {}
        self._profiles_lock = threading.Lock()
        self._local = threading.local()

    @classmethod
    def instance(cls) -> "PerformanceProfiler":
        """The process-wide shared profiler."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def _timers(self) -> dict[str, HighResolutionTimer]:
        timers = getattr(self._local, "timers", None)
        if timers is None:
            timers = self._local.timers = {}
        return timers

    def start_timing(self, name: str) -> None:
        self._timers().setdefault(name, HighResolutionTimer()).start()

    def end_timing(self, name: str) -> None:
        """Record the time since ``start_timing(name)``; ignored if never started."""
        timer = self._timers().get(name)
        if timer is None:
            return
        duration = timer.elapsed()
        with self._profiles_lock:
            profile = self._profiles.setdefault(name, ProfileData())
        profile.update(duration)

    def get_profile(self, name: str) -> ProfileData:
        with self._profiles_lock:
            profile = self._profiles.get(name)
        return profile._snapshot() if profile is not None else ProfileData()

    def reset_profile(self, name: str) -> None:
        with self._profiles_lock:
            self._profiles[name] = ProfileData()

    def reset_all_profiles(self) -> None:
        with self._profiles_lock:
            self._profiles.clear()

    def get_all_profiles(self) -> list[tuple[str, ProfileData]]:
        with self._profiles_lock:
            items = list(self._profiles.items())
        return [(name, data._snapshot()) for name, data in items]


class AutoProfiler:
    """Context manager that profiles its block under ``name``."""

    def __init__(self, name: str, profiler: PerformanceProfiler | None = None) -> None:
        self.name = name
        self._profiler = profiler if profiler is not None else PerformanceProfiler.instance()

    def __enter__(self) -> "AutoProfiler":
        self._profiler.start_timing(self.name)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._profiler.end_timing(self.name)


def time_function(func: Callable[[], T]) -> tuple[T, int]:
    """Call ``func`` and return its result with the elapsed nanoseconds."""
    timer = HighResolutionTimer()
    result = func()
    return result, timer.elapsed()


class LatencyMeasurement:
    """Keeps up to ``max_samples`` latencies, overwriting the oldest when full."""

    MAX_SAMPLES = 10000

    def __init__(self, max_samples: int = MAX_SAMPLES) -> None:
        if max_samples < 1:
            raise ValueError("max_samples must be positive")
        self._max_samples = max_samples
        self._samples: list[int] = []
        self._next_index = 0

    def add_sample(self, latency_ns: int) -> None:
        if len(self._samples) < self._max_samples:
            self._samples.append(latency_ns)
        else:
            self._samples[self._next_index] = latency_ns
            self._next_index = (self._next_index + 1) % self._max_samples

    def percentile(self, p: float) -> float:
        if not self._samples:
            return 0.0
        ordered = sorted(self._samples)
        return float(ordered[int(p * (len(ordered) - 1))])

    def average(self) -> float:
        if not self._samples:
            return 0.0
        return sum(self._samples) / len(self._samples)

    def minimum(self) -> int:
        return min(self._samples, default=0)

    def maximum(self) -> int:
        return max(self._samples, default=0)

    def reset(self) -> None:
        self._samples.clear()
        self._next_index = 0

    def __len__(self) -> int:
        return len(self._samples)