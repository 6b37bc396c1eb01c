"""
Tests for the transports, the sync wrapper and the CLI.
"""

import json

import pytest
from click.testing import CliRunner

from clientsuccess_sdk import ClientSuccessClientSync
from clientsuccess_sdk import ClientSuccessSettings
from clientsuccess_sdk import cli as cli_module
from clientsuccess_sdk.client import ClientSuccessClient
from clientsuccess_sdk.transport import get_transport
from clientsuccess_sdk.transport.aiohttp import AiohttpTransport
from clientsuccess_sdk.transport.httpx import HttpxTransport
from clientsuccess_sdk.transport.requests import RequestsTransport

from .fakes import API_BASE
from .fakes import FakeClientSuccessAPI


def test_transports():
    assert isinstance(get_transport("httpx"), HttpxTransport)
    assert isinstance(get_transport("aiohttp"), AiohttpTransport)
    assert isinstance(get_transport("Requests"), RequestsTransport)

    with pytest.raises(ValueError, match="Unknown transport"):
        get_transport("urllib")


def test_client_builds_configured_transport():
    settings = ClientSuccessSettings(
        username="u", password="p", transport="requests", _env_file=None
    )

    assert isinstance(ClientSuccessClient(settings).transport, RequestsTransport)
    assert isinstance(
        ClientSuccessClient(settings, transport_name="httpx").transport, HttpxTransport
    )


def test_sync_wrapper(settings):
    api = FakeClientSuccessAPI()
    acme = api.add_client(name="Acme", externalId="acme-1")

    with ClientSuccessClientSync(settings, transport=api) as client:
        record = client.upsert_client(client_id=acme["id"], attributes={"name": "Acme Ltd"})
        assert record["name"] == "Acme Ltd"
        assert client.get_client_by_external_id("acme-1")["id"] == acme["id"]
        assert client.get_client_type_id("Business") == 3600

    assert api.closed
    # closing twice is harmless
    client.close()


@pytest.fixture
def cli_api(monkeypatch):
    """Route the CLI's client to an in-memory API."""
    api = FakeClientSuccessAPI()

    def make_client(settings, middlewares=None):
        return ClientSuccessClient(settings, middlewares=middlewares, transport=api)

    monkeypatch.setattr(cli_module, "ClientSuccessClient", make_client)
    monkeypatch.setenv("CLIENTSUCCESS_USERNAME", "user")
    monkeypatch.setenv("CLIENTSUCCESS_PASSWORD", "pass")
    monkeypatch.setenv("CLIENTSUCCESS_BASE_URL", API_BASE)
    return api


def test_cli_help():
    result = CliRunner().invoke(cli_module.cli, ["--help"])

    assert result.exit_code == 0
    assert "upsert-client" in result.output
    assert "track-activity" in result.output


def test_cli_test_auth(cli_api):
    result = CliRunner().invoke(cli_module.cli, ["test-auth"])

    assert result.exit_code == 0
    assert "Authenticated successfully" in result.output
    assert cli_api.auth_calls == 1


def test_cli_upsert_client(cli_api):
    result = CliRunner().invoke(
        cli_module.cli,
        ["upsert-client", "--attributes", '{"name": "Acme", "externalId": "acme-1"}'],
    )

    assert result.exit_code == 0, result.output
    assert json.dumps("Acme") in result.output
    (record,) = cli_api.clients.values()
    assert record["externalId"] == "acme-1"
    assert f"\"id\": {record['id']}" in result.output


def test_cli_reports_errors(cli_api):
    result = CliRunner().invoke(cli_module.cli, ["get-client", "--client-id", "999"])

    assert result.exit_code == 1


def test_cli_rejects_malformed_json(cli_api):
    result = CliRunner().invoke(
        cli_module.cli, ["upsert-client", "--attributes", "[1, 2]"]
    )

    assert result.exit_code == 2
    assert "not a JSON object" in result.output
