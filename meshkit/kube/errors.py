"""Errors raised by the Kubernetes helpers."""

from __future__ import annotations

from collections.abc import Iterable

from meshkit.errors import MeshkitError, Severity

ERR_APPLY_MANIFEST_CODE = "meshkit-11190"
ERR_SERVICE_DISCOVERY_CODE = "meshkit-11191"
ERR_APPLY_HELM_CHART_CODE = "meshkit-11192"
ERR_NEW_KUBE_CLIENT_CODE = "meshkit-11193"
ERR_NEW_DYN_CLIENT_CODE = "meshkit-11194"
ERR_NEW_DISCOVERY_CODE = "meshkit-11195"
ERR_NEW_INFORMER_CODE = "meshkit-11196"
ERR_ENDPOINT_NOT_FOUND_CODE = "meshkit-11197"
ERR_INVALID_API_SERVER_CODE = "meshkit-11198"
ERR_LOAD_CONFIG_CODE = "meshkit-11199"
ERR_VALIDATE_CONFIG_CODE = "meshkit-11200"
ERR_CREATING_HELM_INDEX_CODE = "meshkit-11201"
ERR_ENTRY_WITH_APP_VERSION_NOT_EXISTS_CODE = "meshkit-11202"
ERR_HELM_REPOSITORY_NOT_FOUND_CODE = "meshkit-11203"
ERR_ENTRY_WITH_CHART_VERSION_NOT_EXISTS_CODE = "meshkit-11204"
ERR_REST_CONFIG_FROM_KUBE_CONFIG_CODE = "meshkit-11205"

_CONFIG_CAUSE = "Kubernetes config is not accessible to meshery or not valid"
_CONFIG_REMEDY = (
    "Upload your kubernetes config via the settings dashboard. "
    "If uploaded, wait for a minute for it to get initialized"
)


def _alert(
    code: str,
    short: Iterable[str],
    long: Iterable[str] = (),
    probable: Iterable[str] = (),
    remedy: Iterable[str] = (),
) -> MeshkitError:
    return MeshkitError(code, Severity.ALERT, short, long, probable, remedy)


def err_apply_manifest(err: BaseException) -> MeshkitError:
    return _alert(
        ERR_APPLY_MANIFEST_CODE,
        ["Error Applying manifest"],
        [str(err)],
        ["Manifest could be invalid"],
        ["Make sure manifest yaml is valid"],
    )


def err_service_discovery(err: BaseException) -> MeshkitError:
    return _alert(
        ERR_SERVICE_DISCOVERY_CODE,
        ["Error discovering service"],
        [str(err)],
        ["Network not reachable to the service"],
        ["Make sure the endpoint is reachable"],
    )


def err_apply_helm_chart(err: BaseException) -> MeshkitError:
    return _alert(
        ERR_APPLY_HELM_CHART_CODE,
        ["Error applying helm chart"],
        [str(err)],
        ["Chart could be invalid"],
        ["Make sure to apply valid chart"],
    )


def err_new_kube_client(err: BaseException) -> MeshkitError:
    return _alert(
        ERR_NEW_KUBE_CLIENT_CODE,
        ["Error creating kubernetes clientset"],
        [str(err)],
        [_CONFIG_CAUSE],
        [_CONFIG_REMEDY],
    )


def err_new_dyn_client(err: BaseException) -> MeshkitError:
    return _alert(
        ERR_NEW_DYN_CLIENT_CODE,
        ["Error creating dynamic client"],
        [str(err)],
        [_CONFIG_CAUSE],
        [_CONFIG_REMEDY],
    )


def err_new_discovery(err: BaseException) -> MeshkitError:
    return _alert(
        ERR_NEW_DISCOVERY_CODE,
        ["Error creating discovery client"],
        [str(err)],
        ["Discovery resource is invalid or doesnt exist"],
        ["Makes sure the you input valid resource for discovery"],
    )


def err_new_informer(err: BaseException) -> MeshkitError:
    return _alert(
        ERR_NEW_INFORMER_CODE,
        ["Error creating informer client"],
        [str(err)],
        ["Informer is invalid or doesnt exist"],
        ["Makes sure the you input valid resource for the informer"],
    )


def err_load_config(err: BaseException) -> MeshkitError:
    return _alert(
        ERR_LOAD_CONFIG_CODE,
        ["Error loading kubernetes config"],
        [str(err)],
        [_CONFIG_CAUSE],
        [_CONFIG_REMEDY],
    )


def err_validate_config(err: BaseException) -> MeshkitError:
    return _alert(
        ERR_VALIDATE_CONFIG_CODE,
        ["Validation failed in the kubernetes config"],
        [str(err)],
        [_CONFIG_CAUSE],
        [_CONFIG_REMEDY],
    )


def err_creating_helm_index(err: BaseException) -> MeshkitError:
    return _alert(ERR_CREATING_HELM_INDEX_CODE, ["Error while creating Helm Index"], [str(err)])


def err_entry_with_app_version_not_exists(entry: str, app_version: str) -> MeshkitError:
    return _alert(
        ERR_ENTRY_WITH_APP_VERSION_NOT_EXISTS_CODE,
        ["Entry for the app version does not exist"],
        [f"entry {entry} with app version {app_version} does not exists"],
    )


def err_entry_with_chart_version_not_exists(entry: str, chart_version: str) -> MeshkitError:
    return _alert(
        ERR_ENTRY_WITH_CHART_VERSION_NOT_EXISTS_CODE,
        ["Entry for the chart version does not exist"],
        [f"entry {entry} with chart version {chart_version} does not exists"],
    )


def err_helm_repository_not_found(repo: str, err: BaseException) -> MeshkitError:
    return _alert(
        ERR_HELM_REPOSITORY_NOT_FOUND_CODE,
        ["Helm repo not found"],
        [f"either the repo {repo} does not exists or is corrupt: {err}"],
    )


def err_rest_config_from_kube_config(err: BaseException) -> MeshkitError:
    return _alert(
        ERR_REST_CONFIG_FROM_KUBE_CONFIG_CODE,
        ["Failed to create REST config from kubeconfig."],
        [f"Error occured while creating REST config from kubeconfig: {err}"],
        [
            "The provided kubeconfig data might be invalid or corrupted.",
            "The kubeconfig might be incomplete or missing required fields.",
        ],
        [
            "Verify that the kubeconfig data is valid.",
            "Ensure the kubeconfig contains all necessary cluster, user, and context information.",
            "Check if the kubeconfig data was properly read and passed to the function.",
        ],
    )


def err_endpoint_not_found() -> MeshkitError:
    return _alert(ERR_ENDPOINT_NOT_FOUND_CODE, ["Unable to discover an endpoint"])


def err_invalid_api_server() -> MeshkitError:
    return _alert(ERR_INVALID_API_SERVER_CODE, ["Invalid API Server URL"])