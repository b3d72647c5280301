import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path / "src"))
sys.path.insert(0, str(root_path))

from dwolla_client.rest.transport import RestClient


@pytest.fixture
def rest_client():
    """Transport double; set ``rest_client.send.return_value`` per test."""
    return AsyncMock(spec=RestClient)
