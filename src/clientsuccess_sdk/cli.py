"""
Command-line interface for ClientSuccess SDK.

All commands read their configuration from CLIENTSUCCESS_* environment
variables (or a .env file), run the async client under the hood and print
the resulting record as JSON.

Available commands:
- test-auth: Authenticate and report success
- get-client: Print a client record
- upsert-client: Create or update a client
- close-client: Mark a client as Terminated
- get-contact: Print a contact record
- upsert-contact: Create or update a contact
- client-type-id: Resolve a client type title to its ID
- track-activity: Send a usage event
"""

import asyncio
import json
import logging
import sys

import click

from clientsuccess_sdk.client import ClientSuccessClient
from clientsuccess_sdk.config import ClientSuccessSettings
from clientsuccess_sdk.exceptions import ClientSuccessError
from clientsuccess_sdk.logging_middleware import LoggingMiddleware
from clientsuccess_sdk.models import ActivityEvent
from clientsuccess_sdk.models import ClientUpsert
from clientsuccess_sdk.models import ContactUpsert

logger = logging.getLogger("clientsuccess_sdk.cli")


class JSONObject(click.ParamType):
    """A JSON object given on the command line, e.g. '{"name": "Acme"}'."""

    name = "json"

    def convert(self, value, param, ctx):
        if isinstance(value, dict):
            return value
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError as exc:
            self.fail(f"{value!r} is not valid JSON: {exc}", param, ctx)
        if not isinstance(parsed, dict):
            self.fail(f"{value!r} is not a JSON object", param, ctx)
        return parsed


JSON_OBJECT = JSONObject()


def _run(operation):
    """
    Build a client from the environment, await ``operation(client)`` and
    print its result. SDK errors are logged and exit with status 1.
    """

    async def _main():
        settings = ClientSuccessSettings()
        middlewares = [LoggingMiddleware(level=logging.DEBUG)]
        async with ClientSuccessClient(settings, middlewares=middlewares) as client:
            return await operation(client)

    try:
        result = asyncio.run(_main())
    except ClientSuccessError as exc:
        logger.error(
            "Request failed (%s): %s%s",
            exc.status,
            exc.message,
            f" - {exc.user_message}" if exc.user_message else "",
        )
        sys.exit(1)

    if result is not None:
        click.echo(json.dumps(result, indent=2, default=str))


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log HTTP traffic")
def cli(verbose):
    """ClientSuccess SDK CLI"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


@cli.command()
def test_auth():
    """Authenticate with the configured credentials."""

    async def operation(client):
        await client.authenticate()
        click.echo("Authenticated successfully")

    _run(operation)


@cli.command()
@click.option("--client-id", required=True, help="ClientSuccess client ID")
def get_client(client_id):
    """Print a client record."""
    _run(lambda client: client.get_client(client_id))


@cli.command()
@click.option("--client-id", default=None, help="Client to update; omit to create")
@click.option("--attributes", type=JSON_OBJECT, default="{}", help="Client attributes as JSON")
@click.option(
    "--custom-attributes",
    type=JSON_OBJECT,
    default="{}",
    help="Custom field values keyed by label, as JSON",
)
def upsert_client(client_id, attributes, custom_attributes):
    """Create or update a client."""
    options = ClientUpsert(
        client_id=client_id,
        attributes=attributes,
        custom_attributes=custom_attributes,
    )
    _run(lambda client: client.upsert_client(options))


@cli.command()
@click.option("--client-id", required=True, help="ClientSuccess client ID")
def close_client(client_id):
    """Mark a client as Terminated."""
    _run(lambda client: client.close_client(client_id))


@cli.command()
@click.option("--client-id", required=True, help="ClientSuccess client ID")
@click.option("--contact-id", required=True, help="ClientSuccess contact ID")
def get_contact(client_id, contact_id):
    """Print a contact record."""
    _run(lambda client: client.get_contact(client_id, contact_id))


@cli.command()
@click.option("--client-id", required=True, help="Client that owns the contact")
@click.option("--contact-id", default=None, help="Contact to update; omit to create")
@click.option("--attributes", type=JSON_OBJECT, default="{}", help="Contact attributes as JSON")
@click.option(
    "--custom-attributes",
    type=JSON_OBJECT,
    default="{}",
    help="Custom field values keyed by label, as JSON",
)
def upsert_contact(client_id, contact_id, attributes, custom_attributes):
    """Create or update a contact."""
    options = ContactUpsert(
        client_id=client_id,
        contact_id=contact_id,
        attributes=attributes,
        custom_attributes=custom_attributes,
    )
    _run(lambda client: client.upsert_contact(options))


@cli.command()
@click.option("--title", required=True, help="Client type title, e.g. 'Business'")
def client_type_id(title):
    """Resolve a client type title to its ID."""
    _run(lambda client: client.get_client_type_id(title))


@cli.command()
@click.option("--client-id", required=True, help="ClientSuccess client ID")
@click.option("--contact-id", default=None, help="Contact the activity came from")
@click.option("--activity", required=True, help="Activity name, e.g. 'Login'")
@click.option("--occurrences", type=int, default=1, show_default=True)
@click.option("--timestamp", default=None, help="ISO 8601 time of the activity")
def track_activity(client_id, contact_id, activity, occurrences, timestamp):
    """Send a usage event to the ClientSuccess usage module."""
    event = ActivityEvent(
        client_id=client_id,
        contact_id=contact_id,
        activity=activity,
        occurrences=occurrences,
        timestamp=timestamp,
    )

    async def operation(client):
        response = await client.track_activity(event)
        click.echo(f"Activity recorded ({response.status_code})")

    _run(operation)


if __name__ == "__main__":
    cli()
