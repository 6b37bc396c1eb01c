import pytest

from clientsuccess_sdk.client import ClientSuccessClient
from clientsuccess_sdk.config import ClientSuccessSettings

from .fakes import API_BASE
from .fakes import USAGE_BASE
from .fakes import FakeClientSuccessAPI


@pytest.fixture
def settings():
    """Settings pointing at the in-memory API, isolated from any .env file."""
    return ClientSuccessSettings(
        username="user",
        password="pass",
        base_url=API_BASE,
        usage_url=USAGE_BASE,
        events_project_id="proj-1",
        events_api_key="events-key",
        _env_file=None,
    )


@pytest.fixture
def api():
    return FakeClientSuccessAPI()


@pytest.fixture
def client(settings, api):
    return ClientSuccessClient(settings, transport=api)
