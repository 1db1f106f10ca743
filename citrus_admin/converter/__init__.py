"""
Converter Module.

Bidirectional translators between framework objects and their models:
- Action converters: runtime action <-> XML definition (+ UI view).
- Endpoint model converters: endpoint <-> bean model (+ Java DSL).
- Registries keyed by the action/endpoint type.
"""

from citrus_admin.converter.base import ActionConverter, EndpointModelConverter, MethodCallDecorator
from citrus_admin.converter.registry import (
    ConverterRegistry,
    UnknownConverterError,
    default_action_converters,
    default_endpoint_converters,
)

__all__ = [
    "ActionConverter",
    "ConverterRegistry",
    "EndpointModelConverter",
    "MethodCallDecorator",
    "UnknownConverterError",
    "default_action_converters",
    "default_endpoint_converters",
]
