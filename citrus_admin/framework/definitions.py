"""
XML-bound definitions.

Serializable counterparts of framework actions and endpoints as they
appear in XML test cases and Spring bean configuration. All attribute
values are kept as strings, exactly as written in XML.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field, fields
from typing import Dict, Optional, Type


@dataclass
class ActionDefinition:
    """Base for action definitions parsed from XML test cases."""

    ELEMENT = ""

    description: Optional[str] = None

    @classmethod
    def from_element(cls, element: ET.Element) -> "ActionDefinition":
        """Create a definition from an XML element's attributes."""
        values = {}
        for f in fields(cls):
            attribute = f.name.replace("_", "-")
            if attribute in element.attrib:
                values[f.name] = element.attrib[attribute]

        description = _child(element, "description")
        if description is not None and description.text:
            values["description"] = description.text.strip()

        definition = cls(**values)
        definition._read_children(element)
        return definition

    def _read_children(self, element: ET.Element) -> None:
        pass


@dataclass
class MessageDefinition:
    payload: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    name: Optional[str] = None


@dataclass
class SendDefinition(ActionDefinition):
    ELEMENT = "send"

    endpoint: Optional[str] = None
    actor: Optional[str] = None
    fork: Optional[str] = None
    message: MessageDefinition = field(default_factory=MessageDefinition)

    def _read_children(self, element: ET.Element) -> None:
        self.message = _read_message(element)


@dataclass
class ReceiveDefinition(ActionDefinition):
    ELEMENT = "receive"

    endpoint: Optional[str] = None
    actor: Optional[str] = None
    timeout: Optional[str] = None
    select: Optional[str] = None
    message: MessageDefinition = field(default_factory=MessageDefinition)

    def _read_children(self, element: ET.Element) -> None:
        self.message = _read_message(element)


@dataclass
class SleepDefinition(ActionDefinition):
    ELEMENT = "sleep"

    milliseconds: Optional[str] = None
    seconds: Optional[str] = None


@dataclass
class EchoDefinition(ActionDefinition):
    ELEMENT = "echo"

    message: Optional[str] = None

    def _read_children(self, element: ET.Element) -> None:
        node = _child(element, "message")
        if node is not None and node.text is not None:
            self.message = node.text.strip()


ACTION_DEFINITIONS: Dict[str, Type[ActionDefinition]] = {
    d.ELEMENT: d for d in (SendDefinition, ReceiveDefinition, SleepDefinition, EchoDefinition)
}


# ---------------------------------------------------------------------------
# Endpoint models
# ---------------------------------------------------------------------------


@dataclass
class EndpointModel:
    """Base for endpoint bean definitions."""

    id: Optional[str] = None
    actor: Optional[str] = None
    timeout: Optional[str] = None


@dataclass
class SshClientModel(EndpointModel):
    host: Optional[str] = None
    port: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    private_key_path: Optional[str] = None
    private_key_password: Optional[str] = None
    strict_host_checking: Optional[str] = None
    known_hosts_path: Optional[str] = None
    command_timeout: Optional[str] = None
    connection_timeout: Optional[str] = None
    polling_interval: Optional[str] = None


@dataclass
class HttpClientModel(EndpointModel):
    request_url: Optional[str] = None
    request_method: Optional[str] = None
    content_type: Optional[str] = None
    charset: Optional[str] = None
    default_accept_header: Optional[str] = None
    handle_cookies: Optional[str] = None
    polling_interval: Optional[str] = None


@dataclass
class JmsEndpointModel(EndpointModel):
    destination_name: Optional[str] = None
    connection_factory: Optional[str] = None
    pub_sub_domain: Optional[str] = None
    use_object_messages: Optional[str] = None


def local_name(tag: str) -> str:
    """Strip an ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> Optional[ET.Element]:
    return next((c for c in element if local_name(c.tag) == name), None)


def _read_message(element: ET.Element) -> MessageDefinition:
    message = _child(element, "message")
    if message is None:
        return MessageDefinition()

    payload = _child(message, "payload")
    data = _child(message, "data")
    text: Optional[str] = None
    if payload is not None:
        text = "".join(ET.tostring(c, encoding="unicode") for c in payload).strip() or (payload.text or "").strip()
    elif data is not None and data.text:
        text = data.text.strip()

    headers: Dict[str, str] = {}
    header = _child(element, "header")
    if header is not None:
        for node in header:
            if local_name(node.tag) == "element" and "name" in node.attrib:
                headers[node.attrib["name"]] = node.attrib.get("value", "")

    return MessageDefinition(payload=text, headers=headers, name=message.attrib.get("name"))
