import io
from unittest.mock import AsyncMock, MagicMock

import pytest
from rich.console import Console


@pytest.fixture
def make_response():
    def _make(status=200, body="", headers=None):
        response = MagicMock()
        response.status = status
        response.text = AsyncMock(return_value=body)
        response.headers = headers or {"Content-Type": "application/json"}
        context = AsyncMock()
        context.__aenter__.return_value = response
        return context

    return _make


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200, color_system=None)
