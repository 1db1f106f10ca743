"""
Framework endpoints.

Runtime endpoint objects and their configurations as exposed by the
test framework. Each endpoint pairs a name with a typed configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TestActor:
    """Named participant a test action or endpoint belongs to."""

    __test__ = False

    name: str
    disabled: bool = False


@dataclass
class EndpointConfiguration:
    """Settings shared by all endpoint configurations."""

    timeout: int = 5000


@dataclass
class SshEndpointConfiguration(EndpointConfiguration):
    host: str = "localhost"
    port: int = 2222
    user: Optional[str] = None
    password: Optional[str] = None
    private_key_path: Optional[str] = None
    private_key_password: Optional[str] = None
    strict_host_checking: bool = False
    known_hosts_path: Optional[str] = None
    command_timeout: int = 1000 * 60 * 5
    connection_timeout: int = 1000 * 60
    polling_interval: int = 500


@dataclass
class HttpEndpointConfiguration(EndpointConfiguration):
    request_url: Optional[str] = None
    request_method: str = "POST"
    content_type: str = "text/plain"
    charset: str = "UTF-8"
    default_accept_header: bool = True
    handle_cookies: bool = False
    polling_interval: int = 500


@dataclass
class JmsEndpointConfiguration(EndpointConfiguration):
    destination_name: Optional[str] = None
    connection_factory: Optional[str] = None
    pub_sub_domain: bool = False
    use_object_messages: bool = False


@dataclass
class Endpoint:
    """An endpoint instance registered under a name."""

    name: str
    configuration: EndpointConfiguration = field(default_factory=EndpointConfiguration)
    actor: Optional[TestActor] = None


@dataclass
class SshClient(Endpoint):
    configuration: SshEndpointConfiguration = field(default_factory=SshEndpointConfiguration)


@dataclass
class HttpClient(Endpoint):
    configuration: HttpEndpointConfiguration = field(default_factory=HttpEndpointConfiguration)


@dataclass
class JmsEndpoint(Endpoint):
    configuration: JmsEndpointConfiguration = field(default_factory=JmsEndpointConfiguration)
