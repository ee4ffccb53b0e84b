"""Async HTTP client for the bridge's accessory API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional, Type, TypeVar
from urllib.parse import quote

import aiohttp

from .accessory import AccessoriesResponse, Accessory, decode_accessory
from .const import (
    ACCESSORIES_ENDPOINT,
    ACCESSORY_ENDPOINT,
    ACCESSORY_STATE_ENDPOINT,
    CONTENT_TYPE_JSON,
    STATUS_NOT_FOUND,
)
from .exceptions import DecodeError, RequestFailed, TransportError
from .models import AccessoryState, StateMsg, SwitchConfig

_LOGGER = logging.getLogger(__name__)

S = TypeVar("S", bound=AccessoryState)

# Returned by _async_request when a 404 is accepted as "no such accessory"
_NOT_FOUND = object()


def _is_success(status: int) -> bool:
    return 200 <= status < 300


class HomebridgeClient:
    """Maps typed accessory operations onto the bridge's REST endpoints.

    Every operation sends exactly one request and never retries. The client
    holds no per-accessory state, so one instance can be shared by any number
    of handles and used from concurrent tasks.

    Attributes:
        host (str): Base URL of the bridge, without trailing slash.

    """

    def __init__(
        self,
        host: str,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: Optional[aiohttp.ClientTimeout] = None,
    ) -> None:
        """Initialize the client. No request is made until the first operation.

        Args:
            host (str): Base URL of the bridge, e.g. ``http://bridge.local:8080``.
            session (Optional[aiohttp.ClientSession]): Session to borrow. When
                omitted the client creates and owns one.
            timeout (Optional[aiohttp.ClientTimeout]): Per-request timeout. When
                omitted the session's own default applies.

        """
        self.host = host.rstrip("/")
        self._session = session
        self._managed_session = session is None
        self._timeout = timeout

    async def __aenter__(self) -> HomebridgeClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close_session()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            _LOGGER.debug("Creating new aiohttp ClientSession for %s.", self.host)
            self._session = aiohttp.ClientSession()
            self._managed_session = True
        return self._session

    async def close_session(self) -> None:
        """Close the aiohttp session if it's managed by this instance."""
        if self._session and not self._session.closed and self._managed_session:
            await self._session.close()
            self._session = None
            _LOGGER.debug("Managed aiohttp session closed.")
        elif self._session and not self._managed_session:
            _LOGGER.debug("Session provided externally, not closing.")

    async def _async_request(
        self,
        method: str,
        endpoint: str,
        json_data: Any = None,
        expect_body: bool = False,
        allow_not_found: bool = False,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Returns ``None`` when ``expect_body`` is false and ``_NOT_FOUND`` when
        ``allow_not_found`` is set and the bridge answered 404.

        Raises:
            RequestFailed: On any other non-2xx status.
            DecodeError: If an expected body is not valid JSON.
            TransportError: If the request could not be completed.

        """
        url = self.host + endpoint
        session = await self._get_session()
        headers = {"Accept": "application/json"}
        if json_data is not None:
            headers["Content-Type"] = CONTENT_TYPE_JSON

        _LOGGER.debug("Making ASYNC %s request to %s", method, url)
        _LOGGER.debug("JSON Data: %s", json_data)

        kwargs: dict = {"headers": headers, "json": json_data}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        try:
            async with session.request(method, url, **kwargs) as response:
                _LOGGER.debug("Response status code: %s", response.status)

                if allow_not_found and response.status == STATUS_NOT_FOUND:
                    return _NOT_FOUND

                if not _is_success(response.status):
                    error_text = await response.text()
                    _LOGGER.warning(
                        "Bridge error response (%s) for %s %s: %s",
                        response.status,
                        method,
                        url,
                        error_text,
                    )
                    raise RequestFailed(response.status, error_text)

                if not expect_body:
                    return None

                try:
                    # The bridge does not always label its JSON
                    return await response.json(content_type=None)
                except ValueError as err:
                    err_msg = f"Invalid JSON in response to {method} {url}: {err}"
                    raise DecodeError(err_msg) from err

        except asyncio.TimeoutError as timeout_err:
            _LOGGER.error("Request timed out: %s %s", method, url)
            err_msg = f"Request timed out: {method} {url}"
            raise TransportError(err_msg) from timeout_err
        except aiohttp.ClientError as req_err:
            _LOGGER.error("Request error during %s %s: %s", method, url, req_err)
            err_msg = f"Request error: {req_err}"
            raise TransportError(err_msg) from req_err

    @staticmethod
    def _accessory_path(template: str, accessory_id: str) -> str:
        return template.format(accessory_id=quote(accessory_id, safe=""))

    async def get_accessory(self, accessory_id: str) -> Optional[Accessory]:
        """Fetch one accessory, or ``None`` if the bridge does not know the id."""
        data = await self._async_request(
            "GET",
            self._accessory_path(ACCESSORY_ENDPOINT, accessory_id),
            expect_body=True,
            allow_not_found=True,
        )
        if data is _NOT_FOUND:
            _LOGGER.debug("Accessory %s not found.", accessory_id)
            return None
        return decode_accessory(data)

    async def list_accessories(self) -> List[Accessory]:
        """Fetch every accessory in the order the bridge reports them."""
        data = await self._async_request("GET", ACCESSORIES_ENDPOINT, expect_body=True)
        accessories = AccessoriesResponse.from_dict(data).accessories
        _LOGGER.debug("Bridge listed %d accessories.", len(accessories))
        return accessories

    async def delete_accessory(self, accessory_id: str) -> None:
        """Remove an accessory from the bridge."""
        await self._async_request(
            "DELETE", self._accessory_path(ACCESSORY_ENDPOINT, accessory_id)
        )
        _LOGGER.info("Deleted accessory %s.", accessory_id)

    async def get_state(self, accessory_id: str, state_type: Type[S]) -> S:
        """Read an accessory's state, decoded through ``state_type.from_dict``.

        The bridge wraps the value as ``{"state": ...}``.
        """
        data = await self._async_request(
            "GET",
            self._accessory_path(ACCESSORY_STATE_ENDPOINT, accessory_id),
            expect_body=True,
        )
        return StateMsg.from_dict(data, state_type).state

    async def set_state(self, accessory_id: str, state: AccessoryState) -> None:
        """Write an accessory's state.

        Unlike the GET envelope, the bridge expects the bare state object as
        the request body.
        """
        await self._async_request(
            "PUT",
            self._accessory_path(ACCESSORY_STATE_ENDPOINT, accessory_id),
            json_data=state.to_dict(),
        )

    async def create_switch(self, config: SwitchConfig) -> None:
        """Register a new switch accessory on the bridge."""
        await self._async_request(
            "POST", ACCESSORIES_ENDPOINT, json_data=config.to_dict()
        )
        _LOGGER.info("Created switch %s (%s).", config.id, config.name)
