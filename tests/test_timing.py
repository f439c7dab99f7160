import threading
import time

import pytest

from quickprice.timing import (
    AutoProfiler,
    HighResolutionTimer,
    LatencyMeasurement,
    PerformanceProfiler,
    ProfileData,
    ScopedTimer,
    time_function,
)


def test_timer_measures_sleep():
    timer = HighResolutionTimer()
    time.sleep(0.01)
    elapsed = timer.elapsed()
    assert elapsed >= 10_000_000
    assert timer.elapsed_seconds() >= elapsed * 1e-9
    assert timer.elapsed_microseconds() >= elapsed * 1e-3


def test_timer_reset_and_start():
    timer = HighResolutionTimer()
    time.sleep(0.01)
    before = timer.elapsed()
    timer.reset()
    assert timer.elapsed() < before
    time.sleep(0.005)
    before = timer.elapsed()
    timer.start()
    assert timer.elapsed() < before


def test_scoped_timer_records_duration():
    with ScopedTimer() as scoped:
        time.sleep(0.005)
    assert scoped.duration_ns >= 5_000_000


def test_profile_data_update():
    data = ProfileData()
    durations = [5, 3, 10]
    for d in durations:
        data.update(d)
    assert data.call_count == len(durations)
    assert data.total_time == sum(durations)
    assert data.min_time_ns() == 3
    assert data.max_time == 10
    assert data.average_time_ns() == pytest.approx(sum(durations) / len(durations))


def test_empty_profile_data():
    data = ProfileData()
    assert data.min_time_ns() == 0
    assert data.average_time_ns() == 0.0


def test_profile_data_concurrent_updates():
    data = ProfileData()

    def worker():
        for _ in range(500):
            data.update(2)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert data.call_count == 4 * 500
    assert data.total_time == 2 * 4 * 500


def test_profiler_instance_is_shared():
    name = "shared-instance-section"
    PerformanceProfiler.instance().reset_profile(name)
    PerformanceProfiler.instance().start_timing(name)
    PerformanceProfiler.instance().end_timing(name)
    profile = PerformanceProfiler.instance().get_profile(name)
    assert profile.call_count == 1
    PerformanceProfiler.instance().reset_profile(name)
    assert PerformanceProfiler.instance().get_profile(name).call_count == 0


def test_profiler_start_and_end():
    profiler = PerformanceProfiler()
    profiler.start_timing("section")
    profiler.end_timing("section")
    profiler.start_timing("section")
    profiler.end_timing("section")
    profile = profiler.get_profile("section")
    assert profile.call_count == 2
    assert profile.max_time >= profile.min_time_ns()


def test_profiler_end_without_start_is_ignored():
    profiler = PerformanceProfiler()
    profiler.end_timing("missing")
    assert profiler.get_profile("missing").call_count == 0
    assert profiler.get_all_profiles() == []


def test_profiler_resets():
    profiler = PerformanceProfiler()
    for name in ("a", "b"):
        profiler.start_timing(name)
        profiler.end_timing(name)
    assert sorted(name for name, _ in profiler.get_all_profiles()) == ["a", "b"]
    profiler.reset_profile("a")
    assert profiler.get_profile("a").call_count == 0
    assert profiler.get_profile("b").call_count == 1
    profiler.reset_all_profiles()
    assert profiler.get_all_profiles() == []


def test_auto_profiler():
    profiler = PerformanceProfiler()
    with AutoProfiler("block", profiler):
        time.sleep(0.001)
    profile = profiler.get_profile("block")
    assert profile.call_count == 1
    assert profile.total_time >= 1_000_000


def test_time_function_returns_result_and_duration():
    result, elapsed = time_function(lambda: "value")
    assert result == "value"
    assert elapsed >= 0


def test_latency_statistics():
    stats = LatencyMeasurement()
    samples = [30, 10, 100, 50, 20, 90, 40, 70, 60, 80]
    for s in samples:
        stats.add_sample(s)
    assert stats.minimum() == 10
    assert stats.maximum() == 100
    assert stats.percentile(0.0) == 10.0
    assert stats.percentile(1.0) == 100.0
    assert stats.percentile(0.5) == 50.0
    assert stats.average() == pytest.approx(sum(samples) / len(samples))


def test_latency_empty():
    stats = LatencyMeasurement()
    assert stats.percentile(0.5) == 0.0
    assert stats.average() == 0.0
    assert stats.minimum() == 0
    assert stats.maximum() == 0


def test_latency_ring_buffer_overwrites_oldest():
    stats = LatencyMeasurement(max_samples=3)
    for s in (1, 2, 3, 4):
        stats.add_sample(s)
    assert len(stats) == 3
    assert stats.minimum() == 2
    assert stats.maximum() == 4


def test_latency_reset():
    stats = LatencyMeasurement()
    stats.add_sample(5)
    stats.reset()
    assert len(stats) == 0
    assert stats.maximum() == 0


def test_latency_rejects_bad_capacity():
    with pytest.raises(ValueError):
        LatencyMeasurement(max_samples=0)