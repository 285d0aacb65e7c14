"""Pytest configuration for tests.

No sys.path hacks - tests import from the installed zodkit package.
"""

import pytest

from zodkit import reset_config


def pytest_addoption(parser):
    """Add gated perf test option."""
    parser.addoption(
        "--run-perf",
        action="store_true",
        default=False,
        help="Run performance sentinel benchmarks (gated)."
    )


def pytest_collection_modifyitems(config, items):
    """Skip perf-marked tests unless --run-perf is set."""
    if config.getoption("--run-perf"):
        return
    skip_perf = pytest.mark.skip(reason="perf tests gated; pass --run-perf")
    for item in items:
        if "perf" in item.keywords:
            item.add_marker(skip_perf)


@pytest.fixture(autouse=True)
def _fresh_config():
    """Global error maps set by one test must not leak into the next."""
    reset_config()
    yield
    reset_config()
