from __future__ import annotations

import httpx
import pytest
import structlog

from binsweep.fetcher import BinFetcher

BASE_URL = "http://api.myjson.com/bins/"


def bin_id_of(request: httpx.Request) -> str:
    return request.url.path.rsplit("/", 1)[-1]


@pytest.fixture(autouse=True, scope="session")
def stdlib_logging():
    """Route structlog through stdlib logging so caplog sees it."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_fetcher():
    """Build a BinFetcher whose network is a MockTransport around ``handler``."""

    def _make(handler) -> BinFetcher:
        return BinFetcher(BASE_URL, transport=httpx.MockTransport(handler))

    return _make
