import math

import pytest

from orderlab.metrics import DEFAULT_BUCKETS, Metrics


@pytest.mark.parametrize("n", [1, 3, 10])
def test_request_counter_counts_calls(n):
    metrics = Metrics()
    for _ in range(n):
        metrics.inc_request_counter("set")
    assert metrics.request_count("set") == n
    assert metrics.request_count("get") == 0


def test_bucket_counts_are_cumulative():
    metrics = Metrics()
    observations = [0.001, 0.3, 0.3, 7.0, 42.0]
    for value in observations:
        metrics.store_handler_duration("get", value)
    counts = metrics.bucket_counts("get")
    assert list(counts) == [*DEFAULT_BUCKETS, math.inf]
    values = list(counts.values())
    assert values == sorted(values)
    assert counts[math.inf] == len(observations)
    for bound, total in counts.items():
        assert total == sum(1 for v in observations if v <= bound)


def test_observation_on_bound_falls_in_that_bucket():
    metrics = Metrics()
    metrics.store_handler_duration("get", 0.5)
    counts = metrics.bucket_counts("get")
    assert counts[0.5] == 1
    assert counts[0.25] == 0


def test_bucket_counts_for_unknown_handler_are_zero():
    assert set(Metrics().bucket_counts("nobody").values()) == {0}


def test_render_contains_counter_and_histogram():
    metrics = Metrics()
    metrics.inc_request_counter("get")
    metrics.store_handler_duration("get", 0.5)
    text = metrics.render()
    assert "# TYPE app_handler_request_total_counter counter" in text
    assert 'app_handler_request_total_counter{handler="get"} 1' in text
    assert 'app_handler_duration_histogram_bucket{handler="get",le="+Inf"} 1' in text
    assert 'app_handler_duration_histogram_count{handler="get"} 1' in text


def test_render_empty_when_nothing_recorded():
    assert Metrics().render() == ""