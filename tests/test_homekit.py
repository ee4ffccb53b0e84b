"""
Tests for the HomeKit facade, including the end-to-end switch lifecycle.
"""

import pytest

from pyhomebridge import HomeKit, SwitchConfig, SwitchDeletedError, TransportError


class TestConnect:
    """Tests for HomeKit.connect."""

    @pytest.mark.asyncio
    async def test_connect_is_lazy(self):
        """Test connecting to an unreachable host only fails on first use."""
        async with HomeKit.connect("http://127.0.0.1:1") as homekit:
            assert homekit.client.host == "http://127.0.0.1:1"
            with pytest.raises(TransportError):
                await homekit.switches()


class TestHomeKit:
    """Tests for facade lookups."""

    @pytest.mark.asyncio
    async def test_add_switch_returns_handle(self, bridge, homekit):
        config = SwitchConfig("sw1", "Lamp")

        switch = await homekit.add_switch(config)

        assert switch.config is config
        assert "sw1" in bridge.accessories
        # No re-fetch after create
        assert [r[0] for r in bridge.requests] == ["POST"]

    @pytest.mark.asyncio
    async def test_get_switch(self, bridge, homekit):
        bridge.add_switch("sw1", "Lamp")

        switch = await homekit.get_switch("sw1")

        assert switch.id == "sw1"
        assert switch.name == "Lamp"

    @pytest.mark.asyncio
    async def test_get_switch_missing(self, homekit):
        assert await homekit.get_switch("nope") is None

    @pytest.mark.asyncio
    async def test_get_switch_non_switch_is_none(self, bridge, homekit):
        """Test an accessory of another kind is filtered out, not an error."""
        bridge.add_switch("a", "A")
        bridge.add_raw("t1", {"kind": "thermostat", "target": 20})

        assert await homekit.get_switch("t1") is None
        assert [s.id for s in await homekit.switches()] == ["a"]

    @pytest.mark.asyncio
    async def test_switches_filters_and_keeps_order(self, bridge, homekit):
        """Test non-switch accessories are dropped and order kept."""
        bridge.add_switch("b", "B")
        bridge.add_raw("t1", {"kind": "thermostat", "target": 20})
        bridge.add_switch("a", "A")

        switches = await homekit.switches()

        assert [s.id for s in switches] == ["b", "a"]

    @pytest.mark.asyncio
    async def test_switches_share_client(self, bridge, homekit):
        bridge.add_switch("a", "A")
        bridge.add_switch("b", "B")

        first, second = await homekit.switches()

        assert first._client is second._client is homekit.client


class TestScenario:
    """End-to-end switch lifecycle."""

    @pytest.mark.asyncio
    async def test_lifecycle(self, homekit):
        switch = await homekit.add_switch(SwitchConfig("sw1", "Lamp"))
        assert await switch.is_on() is False

        await switch.set(True)
        assert await switch.is_on() is True

        await switch.delete()
        with pytest.raises(SwitchDeletedError):
            await switch.set(False)

        assert await homekit.get_switch("sw1") is None
        assert await homekit.switches() == []
