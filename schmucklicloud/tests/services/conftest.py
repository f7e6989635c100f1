from collections.abc import AsyncIterator

import pytest_asyncio

from schmucklicloud.config import SchmuckliCloudConfig
from schmucklicloud.services.auth_service import AuthService
from schmucklicloud.services.files_service import FilesService
from schmucklicloud.services.messaging_service import MessagingService
from schmucklicloud.services.storage_service import StorageService
from schmucklicloud.tests.constants import APP_ID, APP_SECRET
from schmucklicloud.tests.utils.mock_transport import MockTransport


@pytest_asyncio.fixture
async def auth_service(
    config: SchmuckliCloudConfig, mock_transport: MockTransport
) -> AsyncIterator[AuthService]:
    async with AuthService(APP_ID, APP_SECRET, config=config, transport=mock_transport) as svc:
        yield svc


@pytest_asyncio.fixture
async def storage_service(
    config: SchmuckliCloudConfig, mock_transport: MockTransport
) -> AsyncIterator[StorageService]:
    async with StorageService(APP_ID, APP_SECRET, config=config, transport=mock_transport) as svc:
        yield svc


@pytest_asyncio.fixture
async def files_service(
    config: SchmuckliCloudConfig, mock_transport: MockTransport
) -> AsyncIterator[FilesService]:
    async with FilesService(APP_ID, APP_SECRET, config=config, transport=mock_transport) as svc:
        yield svc


@pytest_asyncio.fixture
async def messaging_service(
    config: SchmuckliCloudConfig, mock_transport: MockTransport
) -> AsyncIterator[MessagingService]:
    async with MessagingService(
        APP_ID, APP_SECRET, config=config, transport=mock_transport
    ) as svc:
        yield svc
