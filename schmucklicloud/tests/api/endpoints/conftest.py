from unittest.mock import AsyncMock, Mock

import pytest

from schmucklicloud.models.result import Result


@pytest.fixture
def mock_http() -> Mock:
    http = Mock()
    http.request = AsyncMock(return_value=Result(200, "OK", None))
    return http
