"""
Converter Base Module.

Provides the two converter families:
- ActionConverter: runtime test action <-> XML action definition, plus the
  UI TestAction view of a definition.
- EndpointModelConverter: runtime endpoint <-> endpoint bean model, with
  per-property argument decorators applied when rebuilding the endpoint.

Converters assume their input was validated by the framework's own
parsing; a missing required field is a defect, not a runtime condition.
"""

from __future__ import annotations

import dataclasses
import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Generic, Mapping, Optional, Type, TypeVar

from citrus_admin.framework.definitions import ActionDefinition, EndpointModel
from citrus_admin.framework.endpoints import Endpoint, EndpointConfiguration, TestActor
from citrus_admin.model.testcase import Property, TestAction

D = TypeVar("D", bound=ActionDefinition)
A = TypeVar("A")
M = TypeVar("M", bound=EndpointModel)
E = TypeVar("E", bound=Endpoint)


class ActionConverter(ABC, Generic[D, A]):
    """
    Bidirectional converter for one action type.

    Subclasses declare the action type key and the definition class and
    implement the two conversion directions.
    """

    def __init__(self, action_type: str, definition_class: Type[D]) -> None:
        self.type = action_type
        self.definition_class = definition_class

    @property
    def model_class(self) -> str:
        return self.definition_class.__name__

    @abstractmethod
    def convert(self, action: A) -> D:
        """Convert a runtime action into its XML definition."""
        ...

    @abstractmethod
    def convert_model(
        self, definition: D, endpoints: Optional[Mapping[str, Endpoint]] = None
    ) -> A:
        """Rebuild a runtime action from its XML definition."""
        ...

    def to_test_action(self, definition: D) -> TestAction:
        """
        Create the UI view of a definition.

        The default lists every simple definition field with its value.
        """
        action = TestAction(self.type, self.model_class)
        for f in dataclasses.fields(definition):
            value = getattr(definition, f.name)
            if value is None or isinstance(value, (str, int, float, bool)):
                action.add(self.create_property(f.name, definition))
        return action

    @staticmethod
    def create_property(
        field_name: str,
        definition: Any,
        default: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> Property:
        """
        Build a UI property from a definition field.

        Absent values fall back to ``default``.
        """
        value = getattr(definition, field_name, None)
        if value is None:
            value = default
        return Property(
            id=field_name,
            name=display_name or field_name.replace("_", " ").capitalize(),
            value=None if value is None else str(value),
        )

    @staticmethod
    def resolve_endpoint(
        name: Optional[str], endpoints: Optional[Mapping[str, Endpoint]]
    ) -> Optional[Endpoint]:
        """Look up an endpoint by name, creating a bare reference when unknown."""
        if name is None:
            return None
        if endpoints and name in endpoints:
            return endpoints[name]
        return Endpoint(name=name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self.type!r})"


class MethodCallDecorator:
    """
    Transforms a single builder argument before it is set on an endpoint configuration.

    Attributes:
        property_name: Configuration property the decorator applies to.
    """

    def __init__(self, property_name: str, func: Callable[[Any], Any]) -> None:
        self.property_name = property_name
        self._func = func

    def decorate_argument(self, arg: Any) -> Any:
        return self._func(arg)

    @staticmethod
    def integer(property_name: str) -> "MethodCallDecorator":
        return MethodCallDecorator(property_name, lambda arg: int(str(arg)))

    @staticmethod
    def boolean(property_name: str) -> "MethodCallDecorator":
        return MethodCallDecorator(property_name, lambda arg: str(arg).strip().lower() == "true")


class EndpointModelConverter(ABC, Generic[M, E]):
    """
    Bidirectional converter between an endpoint and its bean model.

    Configuration fields are copied by name. Values are written to the
    model as strings; on the way back each property's decorator, if
    declared, is applied exactly once.
    """

    def __init__(
        self,
        endpoint_type: str,
        model_class: Type[M],
        endpoint_class: Type[E],
        configuration_class: Type[EndpointConfiguration],
    ) -> None:
        self.type = endpoint_type
        self.model_class = model_class
        self.endpoint_class = endpoint_class
        self.configuration_class = configuration_class
        self._decorators: Dict[str, MethodCallDecorator] = {}

    def add_decorator(self, decorator: MethodCallDecorator) -> None:
        self._decorators[decorator.property_name] = decorator

    def get_decorator(self, property_name: str) -> Optional[MethodCallDecorator]:
        return self._decorators.get(property_name)

    def convert(self, id: str, endpoint: E) -> M:
        """Convert an endpoint into its bean model registered under ``id``."""
        model = self.model_class()
        model.id = id
        if endpoint.actor is not None:
            model.actor = endpoint.actor.name

        for name in self._shared_fields():
            value = getattr(endpoint.configuration, name)
            setattr(model, name, self._to_model_value(value))
        return model

    def convert_model(self, model: M) -> E:
        """Rebuild an endpoint from its bean model."""
        arguments: Dict[str, Any] = {}
        for name in self._shared_fields():
            value = getattr(model, name)
            if value is None:
                continue
            decorator = self._decorators.get(name)
            arguments[name] = decorator.decorate_argument(value) if decorator else value

        configuration = self.configuration_class(**arguments)
        actor = TestActor(model.actor) if model.actor else None
        return self.endpoint_class(name=model.id or "", configuration=configuration, actor=actor)

    @abstractmethod
    def get_java_config(self, model: M) -> str:
        """Render the Java DSL bean definition for a model."""
        ...

    def render_java_config(self, model: M, builder: str) -> str:
        """Render a ``@Bean`` method building the endpoint with ``CitrusEndpoints``."""
        bean_id = model.id or self.endpoint_class.__name__[0].lower() + self.endpoint_class.__name__[1:]
        lines = [
            "@Bean",
            f"public {self.endpoint_class.__name__} {_camel_case(bean_id)}() {{",
            "    return CitrusEndpoints",
            f"        .{builder}",
        ]
        for name in self._shared_fields():
            value = getattr(model, name)
            if value is None:
                continue
            decorator = self._decorators.get(name)
            argument = f'"{value}"' if decorator is None else str(value)
            lines.append(f"        .{_camel_case(name)}({argument})")
        lines.append("        .build();")
        lines.append("}")
        return "\n".join(lines)

    def _shared_fields(self) -> list[str]:
        model_fields = {f.name for f in dataclasses.fields(self.model_class)}
        return [
            f.name
            for f in dataclasses.fields(self.configuration_class)
            if f.name in model_fields
        ]

    @staticmethod
    def _to_model_value(value: Any) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self.type!r})"


def _camel_case(name: str) -> str:
    parts = re.split(r"[_\-.]", name)
    return parts[0] + "".join(p[:1].upper() + p[1:] for p in parts[1:])
