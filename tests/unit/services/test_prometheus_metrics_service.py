from src.adapter.services.prometheus_metrics_service import PrometheusMetricsService


def test_record_cleanup_job_counts_and_observes():
    metrics = PrometheusMetricsService()

    metrics.record_cleanup_job(3, 250.0)
    metrics.record_cleanup_job(2, 3000.0)

    registry = metrics.registry
    assert registry.get_sample_value("session_cleanups_total") == 5
    assert registry.get_sample_value("session_cleanup_duration_seconds_count") == 2
    assert registry.get_sample_value("session_cleanup_duration_seconds_sum") == 3.25
    assert registry.get_sample_value(
        "session_cleanup_duration_seconds_bucket", {"le": "0.1"}
    ) == 0
    assert registry.get_sample_value(
        "session_cleanup_duration_seconds_bucket", {"le": "0.5"}
    ) == 1
    assert registry.get_sample_value(
        "session_cleanup_duration_seconds_bucket", {"le": "5.0"}
    ) == 2


def test_record_cleanup_failure():
    metrics = PrometheusMetricsService()

    metrics.record_cleanup_failure()

    assert metrics.registry.get_sample_value("session_cleanup_failures_total") == 1


def test_increment_counter_with_tags():
    metrics = PrometheusMetricsService()

    metrics.increment_counter("session_refresh", {"outcome": "ok"})
    metrics.increment_counter("session_refresh", {"outcome": "ok"})
    metrics.increment_counter("session_refresh", {"outcome": "replay"})
    # Label set differs from the first call; dropped, not raised
    metrics.increment_counter("session_refresh", {"device": "x"})

    registry = metrics.registry
    assert registry.get_sample_value("session_refresh_total", {"outcome": "ok"}) == 2
    assert registry.get_sample_value("session_refresh_total", {"outcome": "replay"}) == 1


def test_instances_do_not_share_registries():
    first = PrometheusMetricsService()
    second = PrometheusMetricsService()

    first.record_cleanup_failure()

    assert second.registry.get_sample_value("session_cleanup_failures_total") == 0


def test_render_exposes_metric_names():
    metrics = PrometheusMetricsService()
    metrics.record_cleanup_job(1, 10.0)

    text = metrics.render().decode()

    assert "session_cleanups_total 1.0" in text
    assert "session_cleanup_duration_seconds_bucket" in text
