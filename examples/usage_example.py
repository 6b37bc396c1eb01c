"""
Example usage of the ClientSuccess SDK.

Keeps a customer account and its primary contact in sync with ClientSuccess
and records a login event. Credentials come from CLIENTSUCCESS_* environment
variables.
"""

import asyncio
import logging

from clientsuccess_sdk import ClientSuccessClient
from clientsuccess_sdk import ClientSuccessSettings
from clientsuccess_sdk import ClientUpsert
from clientsuccess_sdk import ContactUpsert
from clientsuccess_sdk import NotFoundError
from clientsuccess_sdk.logging_middleware import LoggingMiddleware

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def sync_account():
    settings = ClientSuccessSettings()
    middlewares = [LoggingMiddleware(level=logging.DEBUG)]

    async with ClientSuccessClient(settings, middlewares=middlewares) as client:
        business = await client.get_client_type_id("Business")

        account = await client.upsert_client(
            ClientUpsert(
                attributes={
                    "name": "Acme Corp",
                    "externalId": "acme-1",
                    "clientSegmentId": business,
                },
                custom_attributes={"Account Notes": "Signed annual plan"},
            )
        )
        logger.info(f"Client {account['id']} is up to date")

        contact = await client.upsert_contact(
            ContactUpsert(
                client_id=account["id"],
                attributes={
                    "firstName": "Ada",
                    "lastName": "Lovelace",
                    "email": "ada@example.com",
                },
            )
        )
        logger.info(f"Contact {contact['id']} is up to date")

        try:
            subscriptions = await client.get_client_active_subscriptions(account["id"])
            logger.info(f"{len(subscriptions)} active subscription(s)")
        except NotFoundError:
            logger.info("No subscriptions yet")

        if settings.events_project_id and settings.events_api_key:
            await client.track_activity(
                client_id=account["id"], contact_id=contact["id"], activity="Login"
            )


if __name__ == "__main__":
    asyncio.run(sync_account())
