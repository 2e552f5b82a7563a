"""Kubernetes resource kinds that can be described."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType

from meshkit.errors import MeshkitError, err_get_describer_func

CORE_GROUP = ""
APPS_GROUP = "apps"
BATCH_GROUP = "batch"
CERTIFICATES_GROUP = "certificates.k8s.io"
DISCOVERY_GROUP = "discovery.k8s.io"
NETWORKING_GROUP = "networking.k8s.io"
RBAC_GROUP = "rbac.authorization.k8s.io"


class DescribeType(IntEnum):
    """The Kubernetes resource that is to be described."""

    SERVICE = 0
    POD = 1
    NAMESPACE = 2
    JOB = 3
    CRON_JOB = 4
    DEPLOYMENT = 5
    DAEMON_SET = 6
    REPLICA_SET = 7
    STATEFUL_SET = 8
    SECRET = 9
    SERVICE_ACCOUNT = 10
    NODE = 11
    LIMIT_RANGE = 12
    RESOURCE_QUOTA = 13
    PERSISTENT_VOLUME = 14
    PERSISTENT_VOLUME_CLAIM = 15
    ENDPOINTS = 16
    CONFIG_MAP = 17
    PRIORITY_CLASS = 18
    INGRESS = 19
    ROLE = 20
    CLUSTER_ROLE = 21
    ROLE_BINDING = 22
    CLUSTER_ROLE_BINDING = 23
    NETWORK_POLICY = 24
    REPLICATION_CONTROLLER = 25
    CERTIFICATE_SIGNING_REQUEST = 26
    ENDPOINT_SLICE = 27


@dataclass(frozen=True)
class GroupKind:
    group: str
    kind: str

    def __str__(self) -> str:
        if not self.group:
            return self.kind
        return f"{self.kind}.{self.group}"


@dataclass
class DescriberOptions:
    """Which Kubernetes object to describe, and how."""

    name: str = ""
    namespace: str = ""
    show_events: bool = False
    chunk_size: int = 0
    type: DescribeType = DescribeType.SERVICE


RESOURCE_MAP = MappingProxyType({
    DescribeType.POD: GroupKind(CORE_GROUP, "Pod"),
    DescribeType.DEPLOYMENT: GroupKind(APPS_GROUP, "Deployment"),
    DescribeType.JOB: GroupKind(BATCH_GROUP, "Job"),
    DescribeType.CRON_JOB: GroupKind(BATCH_GROUP, "CronJob"),
    DescribeType.STATEFUL_SET: GroupKind(APPS_GROUP, "StatefulSet"),
    DescribeType.DAEMON_SET: GroupKind(APPS_GROUP, "DaemonSet"),
    DescribeType.REPLICA_SET: GroupKind(APPS_GROUP, "ReplicaSet"),
    DescribeType.SECRET: GroupKind(CORE_GROUP, "Secret"),
    DescribeType.SERVICE: GroupKind(CORE_GROUP, "Service"),
    DescribeType.SERVICE_ACCOUNT: GroupKind(CORE_GROUP, "ServiceAccount"),
    DescribeType.NODE: GroupKind(CORE_GROUP, "Node"),
    DescribeType.LIMIT_RANGE: GroupKind(CORE_GROUP, "LimitRange"),
    DescribeType.RESOURCE_QUOTA: GroupKind(CORE_GROUP, "ResourceQuota"),
    DescribeType.PERSISTENT_VOLUME: GroupKind(CORE_GROUP, "PersistentVolume"),
    DescribeType.PERSISTENT_VOLUME_CLAIM: GroupKind(CORE_GROUP, "PersistentVolumeClaim"),
    DescribeType.NAMESPACE: GroupKind(CORE_GROUP, "Namespace"),
    DescribeType.ENDPOINTS: GroupKind(CORE_GROUP, "Endpoints"),
    DescribeType.CONFIG_MAP: GroupKind(CORE_GROUP, "ConfigMap"),
    DescribeType.PRIORITY_CLASS: GroupKind(CORE_GROUP, "PriorityClass"),
    DescribeType.INGRESS: GroupKind(NETWORKING_GROUP, "Ingress"),
    DescribeType.ROLE: GroupKind(RBAC_GROUP, "Role"),
    DescribeType.CLUSTER_ROLE: GroupKind(RBAC_GROUP, "ClusterRole"),
    DescribeType.ROLE_BINDING: GroupKind(RBAC_GROUP, "RoleBinding"),
    DescribeType.CLUSTER_ROLE_BINDING: GroupKind(RBAC_GROUP, "ClusterRoleBinding"),
    DescribeType.NETWORK_POLICY: GroupKind(NETWORKING_GROUP, "NetworkPolicy"),
    DescribeType.REPLICATION_CONTROLLER: GroupKind(CORE_GROUP, "ReplicationController"),
    DescribeType.CERTIFICATE_SIGNING_REQUEST: GroupKind(CERTIFICATES_GROUP, "CertificateSigningRequest"),
    DescribeType.ENDPOINT_SLICE: GroupKind(DISCOVERY_GROUP, "EndpointSlice"),
})


def group_kind_for(describe_type: DescribeType | int) -> GroupKind:
    """Return the API group and kind of a describable resource type.

    Raises MeshkitError when the type has no describer.
    """
    try:
        key = DescribeType(describe_type)
    except ValueError as exc:
        raise err_get_describer_func() from exc
    group_kind = RESOURCE_MAP.get(key)
    if group_kind is None:
        raise err_get_describer_func()
    return group_kind


__all__ = [
    "DescribeType",
    "DescriberOptions",
    "GroupKind",
    "MeshkitError",
    "RESOURCE_MAP",
    "group_kind_for",
]