import pytest

from meshkit.errors import MeshkitError, Severity
from meshkit.kube import errors as kerr


@pytest.mark.parametrize(
    "factory, code, short",
    [
        (kerr.err_apply_manifest, "meshkit-11190", "Error Applying manifest"),
        (kerr.err_service_discovery, "meshkit-11191", "Error discovering service"),
        (kerr.err_apply_helm_chart, "meshkit-11192", "Error applying helm chart"),
        (kerr.err_new_kube_client, "meshkit-11193", "Error creating kubernetes clientset"),
        (kerr.err_new_dyn_client, "meshkit-11194", "Error creating dynamic client"),
        (kerr.err_new_discovery, "meshkit-11195", "Error creating discovery client"),
        (kerr.err_new_informer, "meshkit-11196", "Error creating informer client"),
        (kerr.err_load_config, "meshkit-11199", "Error loading kubernetes config"),
        (kerr.err_validate_config, "meshkit-11200", "Validation failed in the kubernetes config"),
        (kerr.err_creating_helm_index, "meshkit-11201", "Error while creating Helm Index"),
    ],
)
def test_wrapping_errors_carry_code_and_cause(factory, code, short):
    cause = RuntimeError("boom")
    error = factory(cause)
    assert isinstance(error, MeshkitError)
    assert error.code == code
    assert error.severity is Severity.ALERT
    assert error.short_description == [short]
    assert error.long_description == ["boom"]
    assert str(error) == short


def test_errors_can_be_raised():
    error = kerr.err_load_config(ValueError("bad file"))
    assert error.code == "meshkit-11199"
    assert error.long_description == ["bad file"]
    with pytest.raises(MeshkitError, match="Error loading kubernetes config"):
        raise error


def test_entry_version_errors_name_the_entry():
    app = kerr.err_entry_with_app_version_not_exists("istio", "1.2")
    assert app.code == "meshkit-11202"
    assert app.long_description == ["entry istio with app version 1.2 does not exists"]
    chart = kerr.err_entry_with_chart_version_not_exists("istio", "1.2")
    assert chart.code == "meshkit-11204"
    assert chart.long_description == ["entry istio with chart version 1.2 does not exists"]


def test_helm_repository_not_found_mentions_repo_and_cause():
    error = kerr.err_helm_repository_not_found("charts", OSError("gone"))
    assert error.code == "meshkit-11203"
    assert error.short_description == ["Helm repo not found"]
    assert error.long_description == ["either the repo charts does not exists or is corrupt: gone"]


def test_rest_config_error_lists_causes_and_remedies():
    error = kerr.err_rest_config_from_kube_config(ValueError("oops"))
    assert error.code == "meshkit-11205"
    assert error.long_description[0].endswith(": oops")
    assert len(error.probable_cause) == 2
    assert len(error.suggested_remediation) == 3


def test_endpoint_and_api_server_errors():
    assert kerr.err_endpoint_not_found().code == "meshkit-11197"
    assert str(kerr.err_endpoint_not_found()) == "Unable to discover an endpoint"
    assert kerr.err_invalid_api_server().code == "meshkit-11198"
    assert str(kerr.err_invalid_api_server()) == "Invalid API Server URL"