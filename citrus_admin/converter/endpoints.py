"""
Endpoint Model Converters.

Map endpoint instances to the bean models shown and edited in the
console, and render the equivalent Java DSL configuration.
"""

from __future__ import annotations

from citrus_admin.converter.base import EndpointModelConverter, MethodCallDecorator
from citrus_admin.framework.definitions import HttpClientModel, JmsEndpointModel, SshClientModel
from citrus_admin.framework.endpoints import (
    HttpClient,
    HttpEndpointConfiguration,
    JmsEndpoint,
    JmsEndpointConfiguration,
    SshClient,
    SshEndpointConfiguration,
)


class SshClientModelConverter(EndpointModelConverter[SshClientModel, SshClient]):

    def __init__(self) -> None:
        super().__init__("ssh.client", SshClientModel, SshClient, SshEndpointConfiguration)

        for name in ("port", "timeout", "command_timeout", "connection_timeout", "polling_interval"):
            self.add_decorator(MethodCallDecorator.integer(name))
        self.add_decorator(MethodCallDecorator.boolean("strict_host_checking"))

    def get_java_config(self, model: SshClientModel) -> str:
        return self.render_java_config(model, "ssh().client()")


class HttpClientModelConverter(EndpointModelConverter[HttpClientModel, HttpClient]):

    def __init__(self) -> None:
        super().__init__("http.client", HttpClientModel, HttpClient, HttpEndpointConfiguration)

        for name in ("timeout", "polling_interval"):
            self.add_decorator(MethodCallDecorator.integer(name))
        for name in ("default_accept_header", "handle_cookies"):
            self.add_decorator(MethodCallDecorator.boolean(name))

    def get_java_config(self, model: HttpClientModel) -> str:
        return self.render_java_config(model, "http().client()")


class JmsEndpointModelConverter(EndpointModelConverter[JmsEndpointModel, JmsEndpoint]):

    def __init__(self) -> None:
        super().__init__("jms.endpoint", JmsEndpointModel, JmsEndpoint, JmsEndpointConfiguration)

        self.add_decorator(MethodCallDecorator.integer("timeout"))
        for name in ("pub_sub_domain", "use_object_messages"):
            self.add_decorator(MethodCallDecorator.boolean(name))

    def get_java_config(self, model: JmsEndpointModel) -> str:
        return self.render_java_config(model, "jms().asynchronous()")
