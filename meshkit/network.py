"""Network endpoints and reachability checks."""

from __future__ import annotations

import socket
from dataclasses import dataclass

TCP_TIMEOUT = 5.0


@dataclass
class HostPort:
    address: str
    port: int

    def __str__(self) -> str:
        return f"{self.address}:{self.port}"


@dataclass
class Endpoint:
    name: str = ""
    internal: HostPort | None = None
    external: HostPort | None = None


@dataclass(frozen=True)
class MockOptions:
    """Replaces real connections: only ``desired_endpoint`` is reachable."""

    desired_endpoint: str


def tcp_check(host_port: HostPort, mock: MockOptions | None = None) -> bool:
    """Return whether a TCP connection to ``host_port`` can be opened."""
    if mock is not None:
        return mock.desired_endpoint == str(host_port)
    try:
        with socket.create_connection((host_port.address, host_port.port), timeout=TCP_TIMEOUT):
            return True
    except OSError:
        return False