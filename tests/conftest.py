from unittest.mock import patch

import pytest


@pytest.fixture
def upstream():
    """
    Patch requests.get; tests queue responses (or exceptions) in call order.

    The mock is returned so calls can be inspected afterwards.
    """
    queue = []

    def fake_get(url, params=None, headers=None, timeout=None):
        if not queue:
            raise AssertionError(f"unexpected upstream call to {url}")
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    with patch("requests.get", side_effect=fake_get) as mock_get:
        mock_get.queue = queue
        yield mock_get
