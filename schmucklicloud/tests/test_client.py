import pytest

from schmucklicloud import SchmuckliCloudClient
from schmucklicloud.config import SchmuckliCloudConfig
from schmucklicloud.tests.constants import API_URL, APP_ID, APP_SECRET, AUTH_TOKEN
from schmucklicloud.tests.utils.mock_transport import MockTransport


def test_services_share_credentials_and_config(config: SchmuckliCloudConfig) -> None:
    client = SchmuckliCloudClient(APP_ID, APP_SECRET, config=config)

    assert client.config is config
    assert client.auth.service_url == f"{API_URL}/auth/"
    assert client.storage.service_url == f"{API_URL}/data/"
    assert client.files.service_url == f"{API_URL}/files/"
    assert client.messaging.service_url == f"{API_URL}/messaging/"
    assert client.storage.credentials == client.files.credentials


def test_set_auth_token_reaches_storage_and_files(config: SchmuckliCloudConfig) -> None:
    client = SchmuckliCloudClient(APP_ID, APP_SECRET, config=config)

    client.set_auth_token(AUTH_TOKEN)

    assert client.storage.session.auth_token == AUTH_TOKEN
    assert client.files.session.auth_token == AUTH_TOKEN


@pytest.mark.asyncio
async def test_login_then_read_flow(
    config: SchmuckliCloudConfig, mock_transport: MockTransport
) -> None:
    mock_transport.add_reply(message="Authorized", body=AUTH_TOKEN)
    mock_transport.add_reply(body=[{"id": 1}])

    async with SchmuckliCloudClient(
        APP_ID, APP_SECRET, config=config, transport=mock_transport
    ) as cloud:
        login = await cloud.auth.authorize_email_password("a@b.com", "pw")
        cloud.set_auth_token(login.data)
        cloud.storage.set_bucket(23)
        rows = await cloud.storage.get_all("customers")

    assert rows.data == [{"id": 1}]
    read = mock_transport.last_request
    assert read.headers["authtoken"] == AUTH_TOKEN
    assert read.url.params["bucket"] == "23"
