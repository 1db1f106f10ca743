"""
Framework test actions.

Plain data holders mirroring the runtime action objects of the test
framework that the console converts to and from their XML definitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from citrus_admin.framework.endpoints import Endpoint, TestActor


@dataclass
class TestAction:
    """Common runtime action attributes."""

    __test__ = False

    name: str = ""
    description: Optional[str] = None
    actor: Optional[TestActor] = None


@dataclass
class Message:
    """Message payload and headers used by send/receive actions."""

    payload: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    name: Optional[str] = None


@dataclass
class SendMessageAction(TestAction):
    """Sends a message through an endpoint."""

    name: str = "send"
    endpoint: Optional[Endpoint] = None
    fork_mode: bool = False
    message: Message = field(default_factory=Message)


@dataclass
class ReceiveMessageAction(TestAction):
    """Receives and validates a message from an endpoint."""

    name: str = "receive"
    endpoint: Optional[Endpoint] = None
    receive_timeout: int = 0
    message_selector: Optional[str] = None
    message: Message = field(default_factory=Message)


@dataclass
class SleepAction(TestAction):
    """Pauses the test for a number of milliseconds."""

    name: str = "sleep"
    milliseconds: str = "5000"


@dataclass
class EchoAction(TestAction):
    """Logs a message to the test output."""

    name: str = "echo"
    message: Optional[str] = None
