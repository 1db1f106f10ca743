"""
Tests for the Converter Module.

Covers:
- Action converters: send, receive, sleep, echo (both directions and UI view).
- Endpoint model converters: ssh, http, jms (decorators, Java config).
- ConverterRegistry lookups.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import List

import pytest

from citrus_admin.converter.actions import (
    EchoActionConverter,
    ReceiveMessageActionConverter,
    SendMessageActionConverter,
    SleepActionConverter,
)
from citrus_admin.converter.base import MethodCallDecorator
from citrus_admin.converter.endpoints import (
    HttpClientModelConverter,
    JmsEndpointModelConverter,
    SshClientModelConverter,
)
from citrus_admin.converter.registry import (
    ConverterRegistry,
    UnknownConverterError,
    default_action_converters,
    default_endpoint_converters,
)
from citrus_admin.framework.actions import (
    EchoAction,
    Message,
    ReceiveMessageAction,
    SendMessageAction,
    SleepAction,
)
from citrus_admin.framework.definitions import (
    SendDefinition,
    SleepDefinition,
    SshClientModel,
)
from citrus_admin.framework.endpoints import (
    Endpoint,
    HttpClient,
    HttpEndpointConfiguration,
    JmsEndpoint,
    JmsEndpointConfiguration,
    SshClient,
    SshEndpointConfiguration,
    TestActor,
)


# ---------------------------------------------------------------------------
# Send / Receive Tests
# ---------------------------------------------------------------------------


class TestSendMessageActionConverter:

    def test_convert(self) -> None:
        endpoint = Endpoint("helloClient")
        action = SendMessageAction(
            description="Say hello",
            actor=TestActor("client"),
            endpoint=endpoint,
            fork_mode=True,
            message=Message(payload="<hello/>", headers={"op": "greet"}),
        )

        definition = SendMessageActionConverter().convert(action)

        assert definition.endpoint == "helloClient"
        assert definition.actor == "client"
        assert definition.fork == "true"
        assert definition.description == "Say hello"
        assert definition.message.payload == "<hello/>"
        assert definition.message.headers == {"op": "greet"}

    def test_actor_falls_back_to_endpoint_actor(self) -> None:
        endpoint = Endpoint("helloClient", actor=TestActor("endpointActor"))

        definition = SendMessageActionConverter().convert(SendMessageAction(endpoint=endpoint))

        assert definition.actor == "endpointActor"
        assert definition.fork == "false"

    def test_endpoint_actor_becomes_action_actor(self) -> None:
        converter = SendMessageActionConverter()
        endpoint = Endpoint("helloClient", actor=TestActor("endpointActor"))

        restored = converter.convert_model(
            converter.convert(SendMessageAction(endpoint=endpoint)), {"helloClient": endpoint}
        )

        assert restored.actor == TestActor("endpointActor")
        assert restored.endpoint is endpoint

    def test_no_actor_anywhere(self) -> None:
        definition = SendMessageActionConverter().convert(SendMessageAction(endpoint=Endpoint("e")))
        assert definition.actor is None

    def test_round_trip(self) -> None:
        converter = SendMessageActionConverter()
        endpoint = Endpoint("helloClient")
        action = SendMessageAction(
            description="d",
            actor=TestActor("client"),
            endpoint=endpoint,
            fork_mode=True,
            message=Message(payload="p"),
        )

        restored = converter.convert_model(converter.convert(action), {"helloClient": endpoint})

        assert restored == action

    def test_unknown_endpoint_becomes_reference(self) -> None:
        restored = SendMessageActionConverter().convert_model(SendDefinition(endpoint="other"))
        assert restored.endpoint == Endpoint("other")

    def test_to_test_action_defaults(self) -> None:
        converter = SendMessageActionConverter()

        action = converter.to_test_action(SendDefinition(endpoint="helloClient"))

        assert action.type == "send"
        assert action.model_class == "SendDefinition"
        assert [p.id for p in action.properties] == ["endpoint", "actor", "fork", "description"]
        assert action.get_property("actor").value == "TestActor"
        assert action.get_property("fork").value == "false"
        assert action.get_property("fork").options == ["true", "false"]
        assert action.get_property("description").value is None


class TestReceiveMessageActionConverter:

    def test_round_trip(self) -> None:
        converter = ReceiveMessageActionConverter()
        endpoint = Endpoint("helloServer")
        action = ReceiveMessageAction(
            endpoint=endpoint,
            actor=TestActor("server"),
            receive_timeout=2500,
            message_selector="op = 'greet'",
        )

        definition = converter.convert(action)
        assert definition.timeout == "2500"
        assert definition.select == "op = 'greet'"

        assert converter.convert_model(definition, {"helloServer": endpoint}) == action

    def test_to_test_action(self) -> None:
        definition = ReceiveMessageActionConverter().convert(
            ReceiveMessageAction(endpoint=Endpoint("e"), receive_timeout=1000)
        )
        action = ReceiveMessageActionConverter().to_test_action(definition)
        assert action.get_property("timeout").value == "1000"
        assert action.get_property("select").name == "Message selector"


# ---------------------------------------------------------------------------
# Sleep / Echo Tests
# ---------------------------------------------------------------------------


class TestSleepActionConverter:

    def test_round_trip(self) -> None:
        converter = SleepActionConverter()
        action = SleepAction(milliseconds="1500", description="wait")
        assert converter.convert_model(converter.convert(action)) == action

    def test_seconds_converted_to_milliseconds(self) -> None:
        action = SleepActionConverter().convert_model(SleepDefinition(seconds="2.5"))
        assert action.milliseconds == "2500"

    def test_default_delay(self) -> None:
        action = SleepActionConverter().to_test_action(SleepDefinition())
        assert action.get_property("milliseconds").value == "5000"


class TestEchoActionConverter:

    def test_round_trip(self) -> None:
        converter = EchoActionConverter()
        action = EchoAction(message="Hello Citrus")
        assert converter.convert_model(converter.convert(action)) == action

    def test_parse_from_xml(self) -> None:
        element = ET.fromstring("<echo><description>say</description><message> Hi </message></echo>")
        definition = EchoActionConverter().definition_class.from_element(element)
        assert definition.message == "Hi"
        assert definition.description == "say"

    def test_default_ui_view(self) -> None:
        converter = EchoActionConverter()
        action = converter.to_test_action(converter.convert(EchoAction(message="Hi")))
        assert {p.id: p.value for p in action.properties} == {"description": None, "message": "Hi"}


# ---------------------------------------------------------------------------
# Endpoint Converter Tests
# ---------------------------------------------------------------------------


class TestSshClientModelConverter:

    def _client(self) -> SshClient:
        return SshClient(
            name="sshClient",
            actor=TestActor("ops"),
            configuration=SshEndpointConfiguration(
                host="ssh.example.com",
                port=9022,
                user="citrus",
                strict_host_checking=True,
                command_timeout=1000,
            ),
        )

    def test_convert(self) -> None:
        model = SshClientModelConverter().convert("sshClient", self._client())

        assert model.id == "sshClient"
        assert model.actor == "ops"
        assert model.host == "ssh.example.com"
        assert model.port == "9022"
        assert model.strict_host_checking == "true"
        assert model.password is None

    def test_round_trip(self) -> None:
        converter = SshClientModelConverter()
        client = self._client()
        assert converter.convert_model(converter.convert("sshClient", client)) == client

    def test_decorators_applied_once(self) -> None:
        calls: List[str] = []
        converter = SshClientModelConverter()
        inner = converter.get_decorator("port")
        def counting(arg: str) -> int:
            calls.append(arg)
            return inner.decorate_argument(arg)

        converter.add_decorator(MethodCallDecorator("port", counting))

        endpoint = converter.convert_model(SshClientModel(id="ssh", port="2200", strict_host_checking="TRUE"))

        assert calls == ["2200"]
        assert endpoint.configuration.port == 2200
        assert endpoint.configuration.strict_host_checking is True

    def test_invalid_integer_property(self) -> None:
        with pytest.raises(ValueError):
            SshClientModelConverter().convert_model(SshClientModel(id="ssh", port="not-a-port"))

    def test_java_config(self) -> None:
        converter = SshClientModelConverter()
        config = converter.get_java_config(SshClientModel(id="ssh-client", host="localhost", port="2222"))

        assert config.splitlines() == [
            "@Bean",
            "public SshClient sshClient() {",
            "    return CitrusEndpoints",
            "        .ssh().client()",
            '        .host("localhost")',
            "        .port(2222)",
            "        .build();",
            "}",
        ]


class TestHttpAndJmsConverters:

    def test_http_round_trip(self) -> None:
        converter = HttpClientModelConverter()
        client = HttpClient(
            name="httpClient",
            configuration=HttpEndpointConfiguration(request_url="http://localhost:8080", handle_cookies=True),
        )

        model = converter.convert("httpClient", client)

        assert model.request_url == "http://localhost:8080"
        assert model.default_accept_header == "true"
        assert converter.convert_model(model) == client

    def test_jms_round_trip(self) -> None:
        converter = JmsEndpointModelConverter()
        endpoint = JmsEndpoint(
            name="jmsEndpoint",
            configuration=JmsEndpointConfiguration(destination_name="orders", pub_sub_domain=True),
        )
        assert converter.convert_model(converter.convert("jmsEndpoint", endpoint)) == endpoint

    def test_jms_java_config(self) -> None:
        config = JmsEndpointModelConverter().get_java_config(
            JmsEndpointModelConverter().convert("orders", JmsEndpoint("orders"))
        )
        assert ".jms().asynchronous()" in config
        assert ".pubSubDomain(false)" in config


# ---------------------------------------------------------------------------
# ConverterRegistry Tests
# ---------------------------------------------------------------------------


class TestConverterRegistry:

    def test_default_registries(self) -> None:
        assert default_action_converters().types() == ["echo", "receive", "send", "sleep"]
        assert default_endpoint_converters().types() == ["http.client", "jms.endpoint", "ssh.client"]

    def test_get(self) -> None:
        registry = default_endpoint_converters()
        assert isinstance(registry.get("ssh.client"), SshClientModelConverter)
        assert "ssh.client" in registry
        assert len(registry) == 3

    def test_unknown_type(self) -> None:
        with pytest.raises(UnknownConverterError, match="ftp.client"):
            default_endpoint_converters().get("ftp.client")

    def test_replacing_converter_warns(self, log_messages: List[str]) -> None:
        registry = ConverterRegistry([SleepActionConverter()])
        replacement = SleepActionConverter()

        registry.register(replacement)

        assert registry.get("sleep") is replacement
        assert any("sleep" in m for m in log_messages)
