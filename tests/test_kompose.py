import pytest
import yaml

from meshkit.errors import MeshkitError
from meshkit.kompose import (
    ERR_CVRT_KOMPOSE_CODE,
    ERR_INCOMPATIBLE_VERSION_CODE,
    ERR_NO_VERSION_CODE,
    ERR_VALIDATE_DOCKER_COMPOSE_FILE_CODE,
    err_convert_kompose,
    err_incompatible_version,
    err_no_version,
    err_validate_docker_compose_file,
    format_compose_file,
    validate_compose_file,
    version_check,
)

SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["services"],
    "properties": {"version": {"type": "string"}, "services": {"type": "object"}},
}

COMPOSE = b'version: "3.3"\nservices:\n  web:\n    image: nginx\n'


def test_error_codes_and_details():
    assert err_convert_kompose(RuntimeError("boom")).code == ERR_CVRT_KOMPOSE_CODE == "meshkit-11229"
    err = err_validate_docker_compose_file(RuntimeError("boom"))
    assert err.code == ERR_VALIDATE_DOCKER_COMPOSE_FILE_CODE
    assert err.long_description == ["boom"]
    assert err_incompatible_version().code == ERR_INCOMPATIBLE_VERSION_CODE == "meshkit-11231"
    assert str(err_no_version()) == "version not found in the docker compose file"


def test_validate_returns_document():
    document = validate_compose_file(COMPOSE, SCHEMA)
    assert document["services"]["web"]["image"] == "nginx"


def test_validate_accepts_json_schema_text():
    import json

    document = validate_compose_file(COMPOSE.decode(), json.dumps(SCHEMA))
    assert document["version"] == "3.3"


def test_validate_rejects_document():
    with pytest.raises(MeshkitError) as info:
        validate_compose_file(b'version: "3.3"\n', SCHEMA)
    assert info.value.code == ERR_VALIDATE_DOCKER_COMPOSE_FILE_CODE


def test_validate_rejects_bad_schema():
    with pytest.raises(MeshkitError) as info:
        validate_compose_file(COMPOSE, b"{not json")
    assert info.value.code == ERR_VALIDATE_DOCKER_COMPOSE_FILE_CODE


@pytest.mark.parametrize("text", [COMPOSE, b"version: 3.3\n", b"version: '2'\n", b"version: 3.9\n"])
def test_version_check_accepts(text):
    assert version_check(text) is None


def test_version_check_too_new():
    with pytest.raises(MeshkitError) as info:
        version_check(b"version: '4.0'\n")
    assert info.value.code == ERR_INCOMPATIBLE_VERSION_CODE


@pytest.mark.parametrize("text", [b"services: {}\n", b"", b"version:\n"])
def test_version_check_missing(text):
    with pytest.raises(MeshkitError) as info:
        version_check(text)
    assert info.value.code == ERR_NO_VERSION_CODE


def test_version_check_not_a_number():
    with pytest.raises(ValueError):
        version_check(b"version: latest\n")


def test_version_check_not_a_mapping():
    with pytest.raises(ValueError):
        version_check(b"- a\n- b\n")


def test_format_keeps_only_version_as_string():
    formatted = format_compose_file(b"version: 3.3\nservices: {}\n")
    assert yaml.safe_load(formatted) == {"version": "3.3"}
    assert version_check(formatted) is None


def test_format_without_version():
    assert yaml.safe_load(format_compose_file(b"services: {}\n")) == {}


def test_format_unreadable_input_unchanged():
    broken = b"key: [unclosed\n"
    assert format_compose_file(broken) == broken