"""Entry point of pyhomebridge: switches on a bridge, without the wire model."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import aiohttp

from .accessory import SwitchAccessory
from .client import HomebridgeClient
from .exceptions import DecodeError
from .models import SwitchConfig
from .switch import Switch

_LOGGER = logging.getLogger(__name__)


class HomeKit:
    """Owns one ``HomebridgeClient`` and hands out ``Switch`` handles sharing it."""

    def __init__(self, client: HomebridgeClient) -> None:
        """Initialize the facade around an existing client."""
        self._client = client

    @classmethod
    def connect(
        cls,
        host: str,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: Optional[aiohttp.ClientTimeout] = None,
    ) -> HomeKit:
        """Bind to the bridge at ``host``.

        Nothing is sent yet; an unreachable bridge surfaces on the first
        operation as ``TransportError``.
        """
        return cls(HomebridgeClient(host, session=session, timeout=timeout))

    async def __aenter__(self) -> HomeKit:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    @property
    def client(self) -> HomebridgeClient:
        return self._client

    async def close(self) -> None:
        """Release the HTTP session if the client owns it."""
        await self._client.close_session()

    async def add_switch(self, config: SwitchConfig) -> Switch:
        """Create a switch on the bridge and return its handle."""
        await self._client.create_switch(config)
        return Switch(config, self._client)

    async def get_switch(self, accessory_id: str) -> Optional[Switch]:
        """Return the switch with this id, or ``None`` if there is no such switch."""
        try:
            accessory = await self._client.get_accessory(accessory_id)
        except DecodeError as err:
            _LOGGER.debug("Accessory %s is not a switch: %s", accessory_id, err)
            return None
        if not isinstance(accessory, SwitchAccessory):
            if accessory is not None:
                _LOGGER.debug(
                    "Accessory %s is a %s, not a switch.", accessory_id, accessory.kind
                )
            return None
        return Switch(accessory.config, self._client)

    async def switches(self) -> List[Switch]:
        """Return every switch on the bridge, in the bridge's order."""
        return [
            Switch(accessory.config, self._client)
            for accessory in await self._client.list_accessories()
            if isinstance(accessory, SwitchAccessory)
        ]
