"""Data models for pyhomebridge."""

from dataclasses import dataclass, replace
from typing import Any, Dict, Generic, Optional, Protocol, Type, TypeVar

from .exceptions import DecodeError

T = TypeVar("T", bound="AccessoryState")


class AccessoryState(Protocol):
    """Shape every accessory state type must provide to travel on the wire."""

    @classmethod
    def from_dict(cls: Type[T], data: Any) -> T:
        ...

    def to_dict(self) -> Dict[str, Any]:
        ...


def _require_object(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        err_msg = f"{what} must be a JSON object, got {type(data).__name__}"
        raise DecodeError(err_msg)
    return data


def _require_str(data: Dict[str, Any], key: str, what: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        err_msg = f"{what}.{key} must be a string, got {value!r}"
        raise DecodeError(err_msg)
    return value


def _optional_str(data: Dict[str, Any], key: str, what: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        err_msg = f"{what}.{key} must be a string or null, got {value!r}"
        raise DecodeError(err_msg)
    return value


@dataclass(frozen=True)
class SwitchConfig:
    """Identity and static metadata of a switch accessory.

    ``on_url`` and ``off_url`` describe URLs the bridge itself may call when
    the switch flips; the client never requests them.
    """

    id: str
    name: str
    on_url: Optional[str] = None
    off_url: Optional[str] = None

    def with_on_url(self, on_url: str) -> "SwitchConfig":
        """Return a copy of this config with ``on_url`` set."""
        return replace(self, on_url=on_url)

    def with_off_url(self, off_url: str) -> "SwitchConfig":
        """Return a copy of this config with ``off_url`` set."""
        return replace(self, off_url=off_url)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "on_url": self.on_url,
            "off_url": self.off_url,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "SwitchConfig":
        data = _require_object(data, "config")
        return cls(
            id=_require_str(data, "id", "config"),
            name=_require_str(data, "name", "config"),
            on_url=_optional_str(data, "on_url", "config"),
            off_url=_optional_str(data, "off_url", "config"),
        )


@dataclass(frozen=True)
class SwitchState:
    """Runtime state of a switch."""

    on: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"on": self.on}

    @classmethod
    def from_dict(cls, data: Any) -> "SwitchState":
        data = _require_object(data, "state")
        on = data.get("on")
        # bool is checked explicitly so that 0/1 are rejected
        if not isinstance(on, bool):
            err_msg = f"state.on must be a boolean, got {on!r}"
            raise DecodeError(err_msg)
        return cls(on=on)


@dataclass(frozen=True)
class SwitchDeclaration:
    """The bridge's full view of one switch: its state and its config."""

    state: SwitchState
    config: SwitchConfig

    def to_dict(self) -> Dict[str, Any]:
        return {"state": self.state.to_dict(), "config": self.config.to_dict()}

    @classmethod
    def from_dict(cls, data: Any) -> "SwitchDeclaration":
        data = _require_object(data, "switch declaration")
        if "state" not in data or "config" not in data:
            err_msg = "switch declaration requires both 'state' and 'config'"
            raise DecodeError(err_msg)
        return cls(
            state=SwitchState.from_dict(data["state"]),
            config=SwitchConfig.from_dict(data["config"]),
        )


@dataclass(frozen=True)
class StateMsg(Generic[T]):
    """Envelope ``{"state": ...}`` returned when reading an accessory's state."""

    state: T

    @classmethod
    def from_dict(cls, data: Any, state_type: Type[T]) -> "StateMsg[T]":
        data = _require_object(data, "state message")
        if "state" not in data:
            err_msg = "state message is missing 'state'"
            raise DecodeError(err_msg)
        return cls(state=state_type.from_dict(data["state"]))
