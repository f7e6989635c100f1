import pytest

from schmucklicloud.config import SchmuckliCloudConfig
from schmucklicloud.tests.constants import API_URL
from schmucklicloud.tests.utils.mock_transport import MockTransport


@pytest.fixture
def config() -> SchmuckliCloudConfig:
    return SchmuckliCloudConfig(api_url=API_URL)


@pytest.fixture
def mock_transport() -> MockTransport:
    return MockTransport()
