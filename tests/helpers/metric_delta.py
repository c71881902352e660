"""
Helpers for validating metric value changes during tests.

Provides context managers to ensure metrics are properly updated by the code under test.
"""

from contextlib import contextmanager


@contextmanager
def metric_delta(metric, expected_delta=1):
    """
    Context manager to validate counter value changes.

    Args:
        metric: Prometheus counter, or a labelled child of one
        expected_delta: Expected change in metric value

    Usage:
        with metric_delta(METRICS["fetch_cache_hits_total"]):
            # Code that should serve exactly one fetch from the cache
            pass

        with metric_delta(METRICS["fetch_requests_total"].labels(outcome="timeout")):
            # Code that should time out once
            pass
    """
    if hasattr(metric, "_value"):
        initial_value = metric._value.get()
    else:
        raise ValueError(f"Metric {metric} doesn't have a _value attribute")

    yield

    final_value = metric._value.get()
    actual_delta = final_value - initial_value

    if actual_delta != expected_delta:
        raise AssertionError(
            f"Expected metric to change by {expected_delta}, "
            f"but it changed by {actual_delta} "
            f"(from {initial_value} to {final_value})"
        )


def get_histogram_count(histogram):
    """Get the current observation count for a histogram (or a labelled child)."""
    for metric in histogram.collect():
        for sample in metric.samples:
            if sample.name.endswith("_count"):
                return sample.value
    return 0.0


@contextmanager
def histogram_observes(histogram, min_observations=1):
    """
    Context manager to validate histogram observations.

    Usage:
        with histogram_observes(METRICS["fetch_latency_seconds"]):
            # Code that should record at least one fetch timing
            pass
    """
    initial_count = get_histogram_count(histogram)

    yield

    final_count = get_histogram_count(histogram)
    actual_observations = final_count - initial_count

    if actual_observations < min_observations:
        raise AssertionError(
            f"Expected at least {min_observations} histogram observations, "
            f"but got {actual_observations} "
            f"(count went from {initial_count} to {final_count})"
        )
