import pytest
import structlog

from promu import cli
from promu import logging as promu_logging


@pytest.fixture(autouse=True)
def _uncached_logging(monkeypatch: pytest.MonkeyPatch):
    def _setup(*, debug: bool = False) -> None:
        promu_logging.setup_logging(debug=debug, cache_logger_on_first_use=False)

    monkeypatch.setattr(cli, "setup_logging", _setup)
    yield
    structlog.reset_defaults()
