import pytest

from meshkit.errors import MeshkitError, Severity, err_get_describer_func


def test_describer_error_fields():
    err = err_get_describer_func()
    assert err.code == "meshkit-11189"
    assert err.severity is Severity.FATAL
    assert err.short_description == ["Failed to get describer for the resource"]
    assert err.long_description == [
        "invalid kubernetes object type or object type not supported in meshkit",
        "Describer not found for the defined Resource",
    ]
    assert err.probable_cause == []
    assert err.suggested_remediation == []


def test_str_joins_short_description():
    err = MeshkitError("code-1", Severity.ALERT, ["first", "second"])
    assert str(err) == "first second"


def test_severity_is_normalised_from_int():
    err = MeshkitError("code-2", 2, ["x"], ["y"], ["z"], ["w"])
    assert err.severity is Severity.CRITICAL
    assert err.suggested_remediation == ["w"]


def test_error_can_be_raised_and_caught():
    err = err_get_describer_func()
    assert err.code == "meshkit-11189"
    assert str(err) == "Failed to get describer for the resource"
    with pytest.raises(MeshkitError, match="Failed to get describer for the resource"):
        raise err


def test_invalid_severity_rejected():
    with pytest.raises(ValueError):
        MeshkitError("code-3", 42, ["x"])