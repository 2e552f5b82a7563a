"""Validation and preparation of docker compose files."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import jsonschema
import yaml

from meshkit.errors import MeshkitError, Severity

ERR_CVRT_KOMPOSE_CODE = "meshkit-11229"
ERR_VALIDATE_DOCKER_COMPOSE_FILE_CODE = "meshkit-11230"
ERR_INCOMPATIBLE_VERSION_CODE = "meshkit-11231"
ERR_NO_VERSION_CODE = "meshkit-11232"

MAX_SUPPORTED_VERSION = 3.9


def err_convert_kompose(err: BaseException) -> MeshkitError:
    return MeshkitError(
        ERR_CVRT_KOMPOSE_CODE,
        Severity.ALERT,
        ["Error converting the docker compose file into kubernetes manifests"],
        [str(err)],
        ["Could not convert docker-compose file into kubernetes manifests"],
        ["Make sure the docker-compose file is valid", ""],
    )


def err_validate_docker_compose_file(err: BaseException) -> MeshkitError:
    return MeshkitError(
        ERR_VALIDATE_DOCKER_COMPOSE_FILE_CODE,
        Severity.ALERT,
        ["Invalid docker compose file"],
        [str(err)],
        [""],
        ["Make sure that the compose file is valid,", "Make sure that the schema is valid"],
    )


def err_incompatible_version() -> MeshkitError:
    return MeshkitError(
        ERR_INCOMPATIBLE_VERSION_CODE,
        Severity.ALERT,
        ["This version of docker compose file is not compatible."],
        ["This docker compose file is invalid since it's version is incompatible."],
        ["docker compose file with version greater than 3.3 is probably being used"],
        ["Make sure that the compose file has version less than or equal to 3.3,", ""],
    )


def err_no_version() -> MeshkitError:
    return MeshkitError(
        ERR_NO_VERSION_CODE,
        Severity.ALERT,
        ["version not found in the docker compose file"],
        ["Version field not found"],
        [
            "Since the Docker Compose specification does not mandate the version field "
            "from version 3 onwards, most sources do not provide them."
        ],
        [
            "Make sure that the compose file has version specified,",
            "Add any version less than or equal to 3.3 if you cannot get the exact version from the source",
        ],
    )


def _text(data: bytes | str) -> str:
    return data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data


def validate_compose_file(compose: bytes | str, schema: bytes | str | Mapping[str, Any]) -> Any:
    """Validate a compose document against a JSON schema and return it parsed."""
    try:
        schema_doc = json.loads(_text(schema)) if isinstance(schema, (bytes, bytearray, str)) else schema
        validator_class = jsonschema.validators.validator_for(schema_doc)
        validator_class.check_schema(schema_doc)
        document = yaml.safe_load(_text(compose))
        validator_class(schema_doc).validate(document)
    except (ValueError, yaml.YAMLError, jsonschema.exceptions.SchemaError, jsonschema.exceptions.ValidationError) as exc:
        raise err_validate_docker_compose_file(exc) from exc
    return document


def _version_text(compose: bytes | str) -> str:
    """Return the literal text of the top-level ``version`` field, or ``""``."""
    try:
        root = yaml.compose(_text(compose))
    except yaml.YAMLError as exc:
        raise ValueError(f"error unmarshalling compose file: {exc}") from exc
    if root is None:
        return ""
    if not isinstance(root, yaml.MappingNode):
        raise ValueError("error unmarshalling compose file: document is not a mapping")
    for key, value in root.value:
        if isinstance(key, yaml.ScalarNode) and key.value == "version":
            if not isinstance(value, yaml.ScalarNode):
                raise ValueError("error unmarshalling compose file: version is not a scalar")
            if value.tag == "tag:yaml.org,2002:null":
                return ""
            return value.value
    return ""


def version_check(compose: bytes | str) -> None:
    """Raise unless the compose file names a version no newer than 3.9.

    Raises MeshkitError for a missing or too new version and ValueError for
    a document that cannot be read or a version that is not a number.
    """
    version = _version_text(compose)
    if not version:
        raise err_no_version()
    try:
        number = float(version)
    except ValueError as exc:
        raise ValueError(f"expected type float for version, got {version!r}") from exc
    if number > MAX_SUPPORTED_VERSION:
        raise err_incompatible_version()


def format_compose_file(compose: bytes | str) -> bytes:
    """Reduce the document to its version, written as a quoted string.

    A document that cannot be read is returned unchanged.
    """
    try:
        version = _version_text(compose)
    except ValueError:
        return compose.encode("utf-8") if isinstance(compose, str) else bytes(compose)
    data = {"version": version} if version else {}
    return yaml.safe_dump(data, default_flow_style=False).encode("utf-8")