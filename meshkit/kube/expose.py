"""Generation of Services that expose Kubernetes workloads.

Objects are Kubernetes manifests as decoded from YAML or JSON: mappings
with ``apiVersion``, ``kind``, ``metadata`` and ``spec``.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from meshkit.errors import MeshkitError
from meshkit.kube.describe import GroupKind
from meshkit.kube.expose_errors import (
    err_cannot_expose_object,
    err_failed_to_extract_pod_selector,
    err_failed_to_extract_ports,
    err_failed_to_extract_protocols,
    err_generate_service,
    err_invalid_deployment_no_selectors,
    err_invalid_deployment_no_selectors_labels,
    err_invalid_replica_no_selectors_labels,
    err_invalid_replica_set_no_selectors,
    err_label_based_map,
    err_match_expressions_conversion,
    err_no_ports_found_for_headless_resource,
    err_pod_has_no_labels,
    err_port_parsing,
    err_protocol_based_map,
    err_resource_cannot_be_exposed,
    err_selector_based_map,
    err_service_has_no_selectors,
    err_unknown_session_affinity,
)

DNS1035_LABEL_MAX_LENGTH = 63
CLUSTER_IP_NONE = "None"
DEFAULT_PROTOCOL = "TCP"


class SessionAffinity(str, Enum):
    NONE = "None"
    CLIENT_IP = "ClientIP"


class ServiceType(str, Enum):
    CLUSTER_IP = "ClusterIP"
    NODE_PORT = "NodePort"
    LOAD_BALANCER = "LoadBalancer"


@dataclass
class ExposeConfig:
    """How the generated Service should look.

    An empty ``type`` leaves the Service type to the cluster default
    (ClusterIP); ``namespace`` defaults to that of the exposed object.
    """

    type: ServiceType | str = ""
    load_balancer_ip: str = ""
    cluster_ip: str = ""
    namespace: str = ""
    session_affinity: SessionAffinity | str = ""
    name: str = ""
    annotations: dict[str, str] = field(default_factory=dict)


_Key = tuple[str, str]

_RC: _Key = ("v1", "ReplicationController")
_POD: _Key = ("v1", "Pod")
_SERVICE: _Key = ("v1", "Service")
_LENIENT_DEPLOYMENT: _Key = ("extensions/v1beta1", "Deployment")
_LENIENT_REPLICA_SET: _Key = ("extensions/v1beta1", "ReplicaSet")
_STRICT_DEPLOYMENTS = frozenset(
    {("apps/v1", "Deployment"), ("apps/v1beta2", "Deployment"), ("apps/v1beta1", "Deployment")}
)
_STRICT_REPLICA_SETS = frozenset({("apps/v1", "ReplicaSet"), ("apps/v1beta2", "ReplicaSet")})
_TEMPLATED = frozenset(
    {_RC, _LENIENT_DEPLOYMENT, _LENIENT_REPLICA_SET} | _STRICT_DEPLOYMENTS | _STRICT_REPLICA_SETS
)

_EXPOSABLE = frozenset(
    {
        GroupKind("", "ReplicationController"),
        GroupKind("", "Service"),
        GroupKind("", "Pod"),
        GroupKind("apps", "Deployment"),
        GroupKind("apps", "ReplicaSet"),
        GroupKind("extensions", "Deployment"),
        GroupKind("extensions", "ReplicaSet"),
    }
)


def _value(item: Any) -> str:
    return item.value if isinstance(item, Enum) else str(item or "")


def _get(obj: Any, *path: str) -> Any:
    for name in path:
        if not isinstance(obj, Mapping):
            return None
        obj = obj.get(name)
    return obj


def _key(obj: Mapping[str, Any]) -> _Key:
    return (str(obj.get("apiVersion") or ""), str(obj.get("kind") or ""))


def _kind(obj: Mapping[str, Any]) -> str:
    return str(obj.get("kind") or "")


def can_be_exposed(api_version: str, kind: str) -> GroupKind:
    """Return the group and kind if such an object can be exposed, else raise."""
    group = api_version.rpartition("/")[0]
    group_kind = GroupKind(group, kind)
    if group_kind not in _EXPOSABLE:
        raise err_cannot_expose_object(group, kind)
    return group_kind


def _lenient_selector(obj: Mapping[str, Any], error: Callable[[], MeshkitError]) -> dict[str, str]:
    selector = _get(obj, "spec", "selector")
    if selector is not None:
        expressions = _get(selector, "matchExpressions")
        if expressions:
            raise err_match_expressions_conversion(expressions)
        labels = _get(selector, "matchLabels")
    else:
        labels = _get(obj, "spec", "template", "metadata", "labels")
    if not labels:
        raise error()
    return dict(labels)


def _strict_selector(obj: Mapping[str, Any], error: Callable[[], MeshkitError]) -> dict[str, str]:
    selector = _get(obj, "spec", "selector")
    if selector is None or not _get(selector, "matchLabels"):
        raise error()
    expressions = _get(selector, "matchExpressions")
    if expressions:
        raise err_match_expressions_conversion(expressions)
    return dict(selector["matchLabels"])


def selectors_for_object(obj: Mapping[str, Any]) -> dict[str, str]:
    """Return the map-based pod selector of a workload.

    Raises MeshkitError when the object has no usable selector, uses
    set-based match expressions, or is of a kind that has no selector.
    """
    key = _key(obj)
    if key == _RC:
        return dict(_get(obj, "spec", "selector") or {})
    if key == _POD:
        labels = _get(obj, "metadata", "labels")
        if not labels:
            raise err_pod_has_no_labels()
        return dict(labels)
    if key == _SERVICE:
        selector = _get(obj, "spec", "selector")
        if selector is None:
            raise err_service_has_no_selectors()
        return dict(selector)
    if key == _LENIENT_DEPLOYMENT:
        return _lenient_selector(obj, err_invalid_deployment_no_selectors_labels)
    if key == _LENIENT_REPLICA_SET:
        return _lenient_selector(obj, err_invalid_replica_no_selectors_labels)
    if key in _STRICT_DEPLOYMENTS:
        return _strict_selector(obj, err_invalid_deployment_no_selectors)
    if key in _STRICT_REPLICA_SETS:
        return _strict_selector(obj, err_invalid_replica_set_no_selectors)
    raise err_failed_to_extract_pod_selector(_kind(obj))


def _container_ports(pod_spec: Any) -> Iterable[Mapping[str, Any]]:
    for container in _get(pod_spec, "containers") or []:
        yield from _get(container, "ports") or []


def _pod_spec(obj: Mapping[str, Any]) -> Any:
    if _key(obj) == _POD:
        return _get(obj, "spec")
    return _get(obj, "spec", "template", "spec")


def _service_ports(obj: Mapping[str, Any]) -> Iterable[Mapping[str, Any]]:
    return _get(obj, "spec", "ports") or []


def protocols_for_object(obj: Mapping[str, Any]) -> dict[str, str]:
    """Map each exposed port, as a string, to its protocol (TCP when unset)."""
    key = _key(obj)
    if key == _SERVICE:
        return {str(port.get("port", 0)): port.get("protocol") or DEFAULT_PROTOCOL for port in _service_ports(obj)}
    if key == _POD or key in _TEMPLATED:
        return {
            str(port.get("containerPort", 0)): port.get("protocol") or DEFAULT_PROTOCOL
            for port in _container_ports(_pod_spec(obj))
        }
    raise err_failed_to_extract_protocols(_kind(obj))


def ports_for_object(obj: Mapping[str, Any]) -> list[str]:
    """Return the ports a workload exposes, as strings, in declaration order."""
    key = _key(obj)
    if key == _SERVICE:
        return [str(port.get("port", 0)) for port in _service_ports(obj)]
    if key == _POD or key in _TEMPLATED:
        return [str(port.get("containerPort", 0)) for port in _container_ports(_pod_spec(obj))]
    raise err_failed_to_extract_ports(_kind(obj))


def generate_service(
    config: ExposeConfig,
    selectors: Mapping[str, str] | None,
    labels: Mapping[str, str] | None,
    protocols: Mapping[str, str] | None,
    ports: Iterable[str],
) -> dict[str, Any]:
    """Build a Service manifest; empty fields are left out.

    Raises ValueError for a port that is not a number and MeshkitError for
    an unknown session affinity.
    """
    port_list = list(ports)
    protocols = protocols or {}
    service_ports = []
    for number, port in enumerate(port_list, start=1):
        value = int(port)
        entry: dict[str, Any] = {}
        if len(port_list) > 1:
            entry["name"] = f"port-{number}"
        entry["protocol"] = protocols.get(port, DEFAULT_PROTOCOL)
        entry["port"] = value
        entry["targetPort"] = value
        service_ports.append(entry)

    metadata: dict[str, Any] = {}
    if config.name:
        metadata["name"] = config.name
    if config.namespace:
        metadata["namespace"] = config.namespace
    if labels:
        metadata["labels"] = dict(labels)
    if config.annotations:
        metadata["annotations"] = dict(config.annotations)

    spec: dict[str, Any] = {}
    if service_ports:
        spec["ports"] = service_ports
    if selectors:
        spec["selector"] = dict(selectors)

    service_type = _value(config.type)
    if service_type:
        spec["type"] = service_type
    if service_type == ServiceType.LOAD_BALANCER.value and config.load_balancer_ip:
        spec["loadBalancerIP"] = config.load_balancer_ip

    affinity = _value(config.session_affinity)
    if affinity:
        try:
            spec["sessionAffinity"] = SessionAffinity(affinity).value
        except ValueError as exc:
            raise err_unknown_session_affinity(config.session_affinity) from exc

    if config.cluster_ip:
        spec["clusterIP"] = CLUSTER_IP_NONE if config.cluster_ip == CLUSTER_IP_NONE else config.cluster_ip

    return {"apiVersion": "v1", "kind": "Service", "metadata": metadata, "spec": spec}


def build_service_for_object(obj: Mapping[str, Any], config: ExposeConfig) -> dict[str, Any]:
    """Return the Service manifest that exposes ``obj``.

    The namespace defaults to the object's and the name is cut to the
    DNS label limit. Every failure is raised as a MeshkitError.
    """
    namespace = config.namespace or str(_get(obj, "metadata", "namespace") or "")
    config = dataclasses.replace(config, namespace=namespace, name=config.name[:DNS1035_LABEL_MAX_LENGTH])

    api_version, kind = _key(obj)
    try:
        can_be_exposed(api_version, kind)
    except MeshkitError as exc:
        raise err_resource_cannot_be_exposed(exc, kind) from exc

    try:
        selectors = selectors_for_object(obj)
    except MeshkitError as exc:
        raise err_selector_based_map(exc) from exc

    headless = config.cluster_ip == CLUSTER_IP_NONE

    try:
        protocols = protocols_for_object(obj)
    except MeshkitError as exc:
        raise err_protocol_based_map(exc) from exc

    labels = _get(obj, "metadata", "labels")
    if labels is not None and not isinstance(labels, Mapping):
        raise err_label_based_map(TypeError("metadata.labels is not a mapping"))

    try:
        ports = ports_for_object(obj)
    except MeshkitError as exc:
        raise err_port_parsing(exc) from exc
    if not ports and not headless:
        raise err_port_parsing(err_no_ports_found_for_headless_resource())

    try:
        return generate_service(config, selectors, labels, protocols, ports)
    except (MeshkitError, ValueError) as exc:
        raise err_generate_service(exc) from exc