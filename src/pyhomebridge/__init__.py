"""Python library for controlling accessories on a home-automation bridge."""

# Import main classes for easier access
from .homekit import HomeKit
from .switch import Switch
from .client import HomebridgeClient
from .accessory import Accessory, SwitchAccessory, decode_accessory
from .models import SwitchConfig, SwitchDeclaration, SwitchState

# Import exceptions for easier handling
from .exceptions import (
    HomebridgeException,
    RequestFailed,
    DecodeError,
    TransportError,
    SwitchDeletedError,
)

__version__ = "0.1.0"

# Define what gets imported with 'from pyhomebridge import *'
__all__ = [
    "HomeKit",
    "Switch",
    "HomebridgeClient",
    "Accessory",
    "SwitchAccessory",
    "decode_accessory",
    "SwitchConfig",
    "SwitchDeclaration",
    "SwitchState",
    "HomebridgeException",
    "RequestFailed",
    "DecodeError",
    "TransportError",
    "SwitchDeletedError",
    "__version__",
]
