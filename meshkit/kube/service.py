"""Discovery of reachable endpoints for Kubernetes services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol
from urllib.parse import urlsplit

from meshkit.errors import MeshkitError
from meshkit.kube.errors import err_endpoint_not_found, err_invalid_api_server, err_service_discovery
from meshkit.network import Endpoint, HostPort, MockOptions, tcp_check


@dataclass
class ServicePort:
    name: str = ""
    port: int = 0
    node_port: int = 0


@dataclass
class LoadBalancerIngress:
    ip: str = ""
    hostname: str = ""


@dataclass
class Service:
    name: str = ""
    namespace: str = ""
    cluster_ip: str = ""
    ports: list[ServicePort] = field(default_factory=list)
    type: str = "ClusterIP"
    ingress: list[LoadBalancerIngress] = field(default_factory=list)


@dataclass
class ServiceOptions:
    """Which service, and which of its ports, to discover."""

    name: str = ""
    namespace: str = ""
    port_selector: str = ""
    api_server_url: str = ""
    worker_node_ip: str = ""
    mock: MockOptions | None = None


class _ServiceReader(Protocol):
    def get_service(self, namespace: str, name: str) -> Service: ...


def _split_host_port(hostport: str) -> str:
    if hostport.startswith("["):
        end = hostport.find("]")
        if end < 0 or hostport[end + 1:end + 2] != ":":
            raise ValueError(f"invalid host:port {hostport!r}")
        return hostport[1:end]
    host, sep, _ = hostport.rpartition(":")
    if not sep or ":" in host:
        raise ValueError(f"invalid host:port {hostport!r}")
    return host


def _api_server_host(url: str) -> str:
    try:
        netloc = urlsplit(url).netloc
        return _split_host_port(netloc.rpartition("@")[2])
    except ValueError as exc:
        raise err_invalid_api_server() from exc


def _with_endpoint(error: MeshkitError, endpoint: Endpoint) -> MeshkitError:
    error.endpoint = endpoint
    return error


def get_endpoint(options: ServiceOptions, service: Service) -> Endpoint:
    """Return the internal and external endpoints of ``service``.

    Raises MeshkitError when the API server URL is invalid or no external
    endpoint is reachable; the endpoint found so far is on ``error.endpoint``.
    """
    worker_node_ip = options.worker_node_ip or "localhost"
    node_port = cluster_port = 0
    for port in service.ports:
        node_port, cluster_port = port.node_port, port.port
        if options.port_selector and port.name == options.port_selector:
            break

    internal = HostPort(service.cluster_ip, cluster_port)
    external = HostPort(worker_node_ip, node_port)

    first = service.ingress[0] if service.ingress else None
    if first is not None and (first.ip or first.hostname):
        if not first.ip:
            external = HostPort(first.hostname, cluster_port)
        elif first.ip in (service.cluster_ip, "<pending>"):
            if options.api_server_url:
                external = HostPort(_api_server_host(options.api_server_url), node_port)
            else:
                external = HostPort(service.cluster_ip, cluster_port)
        else:
            external = HostPort(first.ip, cluster_port)

    if external.port == 0:
        return Endpoint(internal=internal)

    endpoint = Endpoint(internal=internal, external=external)
    if not tcp_check(external, options.mock) and external.address != "localhost":
        try:
            host = _api_server_host(options.api_server_url)
        except MeshkitError as exc:
            raise _with_endpoint(exc, endpoint) from exc.__cause__
        external.address = host
        if not tcp_check(external, options.mock) and external.address != "localhost":
            external.port = node_port
            if not tcp_check(external, options.mock):
                raise _with_endpoint(err_endpoint_not_found(), endpoint)
    return endpoint


def get_service_endpoint(client: _ServiceReader, options: ServiceOptions) -> Endpoint:
    """Look up the service through ``client`` and return its endpoint."""
    try:
        service = client.get_service(options.namespace, options.name)
    except Exception as exc:
        raise err_service_discovery(exc) from exc
    return get_endpoint(options, service)