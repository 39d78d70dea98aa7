from suitelist.config import defaults as d


def test_defaults_values():
    assert d.LIST_TIMEOUT_MS == d.SUITELIST_LIST_TIMEOUT_MS
    assert 0 <= d.LIST_TIMEOUT_MS <= 600_000
    assert 0.1 <= d.REAP_TIMEOUT_S <= 60.0
    assert 0.05 <= d.OUTPUT_GRACE_S <= 60.0
    assert d.WORKER_MODULE == "suitelist.worker"
    assert d.DEFAULT_INTERFACE == "suitelist.interfaces.bdd"
    assert d.PYTHON_EXECUTABLE
