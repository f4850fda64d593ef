import pytest

from bus_route.data import RouteSession
from config import TestingConfig, clear_config_cache


@pytest.fixture
def session():
    return RouteSession()


@pytest.fixture
def abc_session():
    # A(1, 2) -> B(3, 4) -> C(5, 6) -> back to A
    session = RouteSession()
    session.add_stop_end("A", 4, 1.0, 2.0)
    session.add_stop_end("B", 0, 3.0, 4.0)
    session.add_stop_end("C", 7, 5.0, 6.0)
    return session


@pytest.fixture
def settings():
    return TestingConfig()


@pytest.fixture
def isolated_settings(monkeypatch, tmp_path):
    """Fresh settings cache with logs written to a temp file."""
    monkeypatch.setenv("BUS_ROUTE_LOG_FILE", str(tmp_path / "bus_route.log"))
    clear_config_cache()
    yield
    clear_config_cache()

