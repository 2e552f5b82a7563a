"""Reading kubeconfig files and custom resource definitions."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True)
class GroupVersionResource:
    group: str
    version: str
    resource: str


def _default_kubeconfig_path() -> Path:
    env = os.environ.get("KUBECONFIG", "")
    if env:
        return Path(env)
    return Path.home() / ".kube" / "config"


def load_kubeconfig(path: str | os.PathLike | None = None) -> dict[str, Any]:
    """Parse a kubeconfig file.

    Without ``path``, $KUBECONFIG is used, falling back to ~/.kube/config.
    """
    target = Path(path) if path is not None else _default_kubeconfig_path()
    try:
        text = target.read_text(encoding="utf-8")
    except OSError as exc:
        raise OSError(exc.errno, f"could not read kubeconfig: {exc.strerror}", str(target)) from exc
    config = yaml.safe_load(text)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"kubeconfig {target} is not a mapping")
    return config


def current_context(path: str | os.PathLike | None = None) -> str:
    """Return the current context named in the kubeconfig, or an empty string."""
    return str(load_kubeconfig(path).get("current-context") or "")


def gvr_for_custom_resource(crd: Mapping[str, Any]) -> GroupVersionResource:
    """Return the group, first version and plural name of a CRD item."""
    spec = crd.get("spec") or {}
    versions = spec.get("versions") or []
    if not versions:
        raise ValueError("custom resource definition has no versions")
    names = spec.get("names") or {}
    return GroupVersionResource(
        group=spec.get("group") or "",
        version=versions[0].get("name") or "",
        resource=names.get("plural") or "",
    )


def custom_resources_from_list(crd_list: str | bytes | Mapping[str, Any]) -> list[GroupVersionResource]:
    """Return the resources of every CRD in a CustomResourceDefinitionList."""
    if isinstance(crd_list, (str, bytes, bytearray)):
        crd_list = json.loads(crd_list)
    if not isinstance(crd_list, Mapping):
        raise ValueError("custom resource definition list is not an object")
    return [gvr_for_custom_resource(item) for item in crd_list.get("items") or []]


def is_crd(manifest: str) -> bool:
    """Return whether the YAML manifest is a CustomResourceDefinition."""
    try:
        document = yaml.safe_load(manifest)
    except yaml.YAMLError:
        return False
    if not isinstance(document, Mapping):
        return False
    return document.get("kind") == "CustomResourceDefinition"