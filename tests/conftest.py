import pytest

from odatable import transport
from tests.helpers import GatedTransport


@pytest.fixture
def gated_transport():
    return GatedTransport()


@pytest.fixture(autouse=True)
def clear_services():
    """Each test starts without registered service roots."""
    transport._services.clear()
    yield
    transport._services.clear()
