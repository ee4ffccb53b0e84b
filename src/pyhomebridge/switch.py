"""Handle for one switch accessory on the bridge."""

import logging
from typing import Optional

from .client import HomebridgeClient
from .exceptions import SwitchDeletedError
from .models import SwitchConfig, SwitchState

_LOGGER = logging.getLogger(__name__)


class Switch:
    """A switch on the bridge, bound to the client that reaches it.

    The config is fixed for the life of the handle. State is never cached:
    ``is_on`` and ``set`` each make one round trip. After ``delete()`` the
    handle is consumed and every member raises ``SwitchDeletedError``.
    """

    def __init__(self, config: SwitchConfig, client: HomebridgeClient) -> None:
        """Initialize the handle. Use ``HomeKit`` rather than calling this directly."""
        self._config = config
        self._client = client
        self._deleted = False

    def __repr__(self) -> str:
        status = " deleted" if self._deleted else ""
        return f"<Switch {self._config.id!r} ({self._config.name!r}){status}>"

    def _ensure_alive(self) -> None:
        if self._deleted:
            err_msg = f"Switch {self._config.id!r} has been deleted"
            raise SwitchDeletedError(err_msg)

    @property
    def deleted(self) -> bool:
        return self._deleted

    @property
    def config(self) -> SwitchConfig:
        self._ensure_alive()
        return self._config

    @property
    def id(self) -> str:
        self._ensure_alive()
        return self._config.id

    @property
    def name(self) -> str:
        self._ensure_alive()
        return self._config.name

    @property
    def on_url(self) -> Optional[str]:
        self._ensure_alive()
        return self._config.on_url

    @property
    def off_url(self) -> Optional[str]:
        self._ensure_alive()
        return self._config.off_url

    async def is_on(self) -> bool:
        """Fetch the current state from the bridge."""
        state = await self._poll()
        return state.on

    async def set(self, on: bool) -> None:
        """Turn the switch on or off."""
        self._ensure_alive()
        _LOGGER.debug("Setting switch %s to %s", self._config.id, on)
        await self._client.set_state(self._config.id, SwitchState(on=on))

    async def _poll(self) -> SwitchState:
        self._ensure_alive()
        return await self._client.get_state(self._config.id, SwitchState)

    async def delete(self) -> None:
        """Remove the switch from the bridge and consume this handle.

        The handle is consumed even if the request fails.
        """
        self._ensure_alive()
        self._deleted = True
        await self._client.delete_accessory(self._config.id)
