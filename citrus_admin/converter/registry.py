"""
Converter Registry.

Maps a converter's type key ("send", "ssh.client", ...) to the converter
instance handling it. Action and endpoint converters are kept in
separate registries since their keys describe different things.
"""

from __future__ import annotations

from typing import Dict, Generic, Iterable, List, TypeVar

from loguru import logger

from citrus_admin.converter.actions import (
    EchoActionConverter,
    ReceiveMessageActionConverter,
    SendMessageActionConverter,
    SleepActionConverter,
)
from citrus_admin.converter.base import ActionConverter, EndpointModelConverter
from citrus_admin.converter.endpoints import (
    HttpClientModelConverter,
    JmsEndpointModelConverter,
    SshClientModelConverter,
)

C = TypeVar("C")


class UnknownConverterError(KeyError):
    """Raised when no converter is registered for a type key."""

    pass


class ConverterRegistry(Generic[C]):
    """Type key -> converter lookup table."""

    def __init__(self, converters: Iterable[C] = ()) -> None:
        self._converters: Dict[str, C] = {}
        for converter in converters:
            self.register(converter)

    def register(self, converter: C) -> None:
        """Register a converter under its type key, replacing any previous one."""
        key = getattr(converter, "type")
        if key in self._converters:
            logger.warning(f"Replacing converter registered for type '{key}'")
        self._converters[key] = converter
        logger.debug(f"Registered converter {converter!r}")

    def get(self, key: str) -> C:
        """
        Look up the converter for a type key.

        Raises:
            UnknownConverterError: If nothing is registered for the key.
        """
        try:
            return self._converters[key]
        except KeyError:
            raise UnknownConverterError(
                f"No converter registered for type '{key}'. Known types: {self.types()}"
            ) from None

    def types(self) -> List[str]:
        return sorted(self._converters)

    def __contains__(self, key: object) -> bool:
        return key in self._converters

    def __len__(self) -> int:
        return len(self._converters)


def default_action_converters() -> ConverterRegistry[ActionConverter]:
    """Registry holding every action converter shipped with the console."""
    return ConverterRegistry([
        SendMessageActionConverter(),
        ReceiveMessageActionConverter(),
        SleepActionConverter(),
        EchoActionConverter(),
    ])


def default_endpoint_converters() -> ConverterRegistry[EndpointModelConverter]:
    """Registry holding every endpoint model converter shipped with the console."""
    return ConverterRegistry([
        SshClientModelConverter(),
        HttpClientModelConverter(),
        JmsEndpointModelConverter(),
    ])
