"""
Interactive example app.

    DWOLLA_KEY=... DWOLLA_SECRET=... python -m example.app
"""

import asyncio
import logging

from dwolla_client import AppTokenProvider, DwollaClient, DwollaSettings

from .tasks import TaskContext, dispatch


async def main() -> None:
    settings = DwollaSettings.from_env()
    async with DwollaClient.from_settings(settings) as client:
        ctx = TaskContext(client=client, tokens=AppTokenProvider(client, settings.key, settings.secret))
        print(f"Connected to {client.api_base_address}. Type 'help' for commands.")
        while await dispatch(await asyncio.to_thread(input, "> "), ctx):
            pass


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
