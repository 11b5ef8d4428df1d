"""MetricsCollector: labelled counters, latency histograms, reset."""

import threading

from transaction_cost.observability.metrics import MetricsCollector, get_metrics_collector


def test_counters_are_separated_by_labels():
    m = MetricsCollector()
    m.increment("audit_retry", checkpoint="ENTRY")
    m.increment("audit_retry", checkpoint="ENTRY")
    m.increment("audit_retry", checkpoint="EXIT")

    assert m.counter("audit_retry", checkpoint="ENTRY") == 2
    assert m.counter("audit_retry", checkpoint="EXIT") == 1
    assert m.counter("audit_retry") == 0
    assert "audit_retry{checkpoint=ENTRY}" in m.export_metrics()["counters"]


def test_latency_histogram():
    m = MetricsCollector()
    m.observe_latency("cost_lookup_latency_ms", 10.0)
    m.observe_latency("cost_lookup_latency_ms", 5.0)

    h = m.export_metrics()["histograms"]["cost_lookup_latency_ms"]
    assert h == {"count": 2, "sum": 15.0}


def test_thread_safe_increments():
    m = MetricsCollector()

    def work():
        for _ in range(1000):
            m.increment("hits")

    threads = [threading.Thread(target=work) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert m.counter("hits") == 4000


def test_reset_and_singleton():
    m = MetricsCollector()
    m.increment("x")
    m.reset()
    assert m.export_metrics() == {"counters": {}, "histograms": {}}
    assert get_metrics_collector() is get_metrics_collector()
