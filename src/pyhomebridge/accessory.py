"""Accessory kinds known to pyhomebridge and their untagged decoding.

The bridge sends accessories without a type field. ``decode_accessory`` tries
every class in ``ACCESSORY_VARIANTS`` in order and keeps the first one whose
shape matches. New variants must therefore have shapes that no earlier
variant accepts, otherwise they are silently decoded as the earlier kind.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
from typing import Any, Dict, List, Tuple, Type

from .exceptions import DecodeError
from .models import SwitchConfig, SwitchDeclaration, SwitchState

_LOGGER = logging.getLogger(__name__)


class Accessory(ABC):
    """Base class of every accessory kind the bridge can report."""

    kind: str = ""

    @property
    @abstractmethod
    def id(self) -> str:
        """Return the accessory id."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Return the untagged wire representation."""

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Any) -> "Accessory":
        """Decode the payload, raising DecodeError if the shape does not match."""


@dataclass(frozen=True)
class SwitchAccessory(Accessory):
    """An on/off switch."""

    declaration: SwitchDeclaration
    kind = "switch"

    @property
    def id(self) -> str:
        return self.declaration.config.id

    @property
    def config(self) -> SwitchConfig:
        return self.declaration.config

    @property
    def state(self) -> SwitchState:
        return self.declaration.state

    def to_dict(self) -> Dict[str, Any]:
        return self.declaration.to_dict()

    @classmethod
    def from_dict(cls, data: Any) -> "SwitchAccessory":
        return cls(SwitchDeclaration.from_dict(data))


# Decode order matters, see module docstring.
ACCESSORY_VARIANTS: Tuple[Type[Accessory], ...] = (SwitchAccessory,)


def decode_accessory(data: Any) -> Accessory:
    """Decode one accessory payload into the first matching variant.

    Raises:
        DecodeError: If no known variant accepts the payload.

    """
    failures = []
    for variant in ACCESSORY_VARIANTS:
        try:
            accessory = variant.from_dict(data)
        except DecodeError as err:
            failures.append(f"{variant.__name__}: {err}")
            continue
        _LOGGER.debug("Decoded accessory %s as %s", accessory.id, variant.__name__)
        return accessory

    err_msg = "Payload matches no known accessory kind (" + "; ".join(failures) + ")"
    raise DecodeError(err_msg)


@dataclass(frozen=True)
class AccessoriesResponse:
    """Envelope ``{"accessories": [...]}`` returned by the list endpoint.

    Entries of a kind this library does not know are skipped, so a bridge
    hosting other accessories still lists its switches.
    """

    accessories: List[Accessory]

    @classmethod
    def from_dict(cls, data: Any) -> "AccessoriesResponse":
        if not isinstance(data, dict) or not isinstance(data.get("accessories"), list):
            err_msg = "accessories response must be an object with an 'accessories' array"
            raise DecodeError(err_msg)

        accessories = []
        for item in data["accessories"]:
            try:
                accessories.append(decode_accessory(item))
            except DecodeError as err:
                _LOGGER.debug("Skipping unknown accessory in list: %s", err)
        return cls(accessories=accessories)
