"""
Action Converters.

One converter per action type, each a direct field mapping between the
runtime action and its XML definition:
- send: endpoint, description, actor (action first, then endpoint), fork.
- receive: endpoint, description, actor, timeout, message selector.
- sleep: delay in milliseconds (seconds accepted on the way in).
- echo: message.
"""

from __future__ import annotations

from typing import Mapping, Optional

from citrus_admin.converter.base import ActionConverter
from citrus_admin.framework.actions import (
    EchoAction,
    Message,
    ReceiveMessageAction,
    SendMessageAction,
    SleepAction,
)
from citrus_admin.framework.definitions import (
    EchoDefinition,
    MessageDefinition,
    ReceiveDefinition,
    SendDefinition,
    SleepDefinition,
)
from citrus_admin.framework.endpoints import Endpoint, TestActor
from citrus_admin.model.testcase import TestAction

DEFAULT_ACTOR = "TestActor"


def _actor_name(actor: Optional[TestActor], endpoint: Optional[Endpoint]) -> Optional[str]:
    if actor is not None:
        return actor.name
    if endpoint is not None and endpoint.actor is not None:
        return endpoint.actor.name
    return None


def _message_definition(message: Message) -> MessageDefinition:
    return MessageDefinition(
        payload=message.payload,
        headers=dict(message.headers),
        name=message.name,
    )


def _message(definition: MessageDefinition) -> Message:
    return Message(
        payload=definition.payload,
        headers=dict(definition.headers),
        name=definition.name,
    )


class SendMessageActionConverter(ActionConverter[SendDefinition, SendMessageAction]):
    """
    Converts send actions.

    An action without an actor takes the actor of its endpoint. Converting
    such an action back therefore yields an action that carries that actor
    itself, so the round trip is not exact in this one case.
    """

    def __init__(self) -> None:
        super().__init__("send", SendDefinition)

    def convert(self, action: SendMessageAction) -> SendDefinition:
        return SendDefinition(
            description=action.description,
            endpoint=action.endpoint.name if action.endpoint else None,
            actor=_actor_name(action.actor, action.endpoint),
            fork="true" if action.fork_mode else "false",
            message=_message_definition(action.message),
        )

    def convert_model(
        self, definition: SendDefinition, endpoints: Optional[Mapping[str, Endpoint]] = None
    ) -> SendMessageAction:
        return SendMessageAction(
            description=definition.description,
            actor=TestActor(definition.actor) if definition.actor else None,
            endpoint=self.resolve_endpoint(definition.endpoint, endpoints),
            fork_mode=(definition.fork or "false").lower() == "true",
            message=_message(definition.message),
        )

    def to_test_action(self, definition: SendDefinition) -> TestAction:
        action = TestAction(self.type, self.model_class)
        action.add(self.create_property("endpoint", definition))
        action.add(self.create_property("actor", definition, DEFAULT_ACTOR))
        action.add(self.create_property("fork", definition, "false").with_options("true", "false"))
        action.add(self.create_property("description", definition))
        return action


class ReceiveMessageActionConverter(ActionConverter[ReceiveDefinition, ReceiveMessageAction]):

    def __init__(self) -> None:
        super().__init__("receive", ReceiveDefinition)

    def convert(self, action: ReceiveMessageAction) -> ReceiveDefinition:
        return ReceiveDefinition(
            description=action.description,
            endpoint=action.endpoint.name if action.endpoint else None,
            actor=_actor_name(action.actor, action.endpoint),
            timeout=str(action.receive_timeout) if action.receive_timeout else None,
            select=action.message_selector,
            message=_message_definition(action.message),
        )

    def convert_model(
        self, definition: ReceiveDefinition, endpoints: Optional[Mapping[str, Endpoint]] = None
    ) -> ReceiveMessageAction:
        return ReceiveMessageAction(
            description=definition.description,
            actor=TestActor(definition.actor) if definition.actor else None,
            endpoint=self.resolve_endpoint(definition.endpoint, endpoints),
            receive_timeout=int(definition.timeout) if definition.timeout else 0,
            message_selector=definition.select,
            message=_message(definition.message),
        )

    def to_test_action(self, definition: ReceiveDefinition) -> TestAction:
        action = TestAction(self.type, self.model_class)
        action.add(self.create_property("endpoint", definition))
        action.add(self.create_property("actor", definition, DEFAULT_ACTOR))
        action.add(self.create_property("timeout", definition))
        action.add(self.create_property("select", definition, display_name="Message selector"))
        action.add(self.create_property("description", definition))
        return action


class SleepActionConverter(ActionConverter[SleepDefinition, SleepAction]):

    def __init__(self) -> None:
        super().__init__("sleep", SleepDefinition)

    def convert(self, action: SleepAction) -> SleepDefinition:
        return SleepDefinition(description=action.description, milliseconds=action.milliseconds)

    def convert_model(
        self, definition: SleepDefinition, endpoints: Optional[Mapping[str, Endpoint]] = None
    ) -> SleepAction:
        action = SleepAction(description=definition.description)
        if definition.milliseconds:
            action.milliseconds = definition.milliseconds
        elif definition.seconds:
            action.milliseconds = str(int(float(definition.seconds) * 1000))
        return action

    def to_test_action(self, definition: SleepDefinition) -> TestAction:
        action = TestAction(self.type, self.model_class)
        action.add(self.create_property("milliseconds", definition, "5000"))
        action.add(self.create_property("seconds", definition))
        action.add(self.create_property("description", definition))
        return action


class EchoActionConverter(ActionConverter[EchoDefinition, EchoAction]):

    def __init__(self) -> None:
        super().__init__("echo", EchoDefinition)

    def convert(self, action: EchoAction) -> EchoDefinition:
        return EchoDefinition(description=action.description, message=action.message)

    def convert_model(
        self, definition: EchoDefinition, endpoints: Optional[Mapping[str, Endpoint]] = None
    ) -> EchoAction:
        return EchoAction(description=definition.description, message=definition.message)
