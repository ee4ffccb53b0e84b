#!/usr/bin/env python3

"""Example script exercising pyhomebridge against a running bridge."""

import asyncio
import logging
import os

from pyhomebridge import HomeKit, HomebridgeException, RequestFailed, SwitchConfig
from pyhomebridge.const import DEFAULT_HOST

# --- Configuration ---
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)

# Read bridge address and switch id from environment variables
HOST = os.getenv("HOMEBRIDGE_HOST", DEFAULT_HOST)
SWITCH_ID = os.getenv("HOMEBRIDGE_SWITCH_ID", "demo-switch")


async def main():
    """Create a switch, flip it, list switches, then delete it."""
    logging.info("Connecting to bridge at %s", HOST)
    async with HomeKit.connect(HOST) as homekit:
        try:
            config = SwitchConfig(SWITCH_ID, "Demo Lamp").with_on_url(
                "http://example.invalid/on"
            )
            switch = await homekit.add_switch(config)
            logging.info("Created %r", switch)

            await switch.set(True)
            logging.info("Switch is on: %s", await switch.is_on())

            switches = await homekit.switches()
            logging.info("Found %d switches:", len(switches))
            for i, sw in enumerate(switches, start=1):
                logging.info("  %d. Name: '%s', ID: %s", i, sw.name, sw.id)

            await switch.delete()
            logging.info(
                "After delete, lookup returns: %s", await homekit.get_switch(SWITCH_ID)
            )
        except RequestFailed as e:
            logging.error("Bridge refused request: status=%s %s", e.status_code, e)
        except HomebridgeException as e:
            logging.error("pyhomebridge error: %s", e)


if __name__ == "__main__":
    asyncio.run(main())
