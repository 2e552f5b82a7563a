import json

import pytest

from meshkit.manifests.readable import (
    OpenApiRefResolver,
    deformat_readable_string,
    format_to_readable_string,
    remove_helm_templating_from_crd,
    remove_non_crd_values,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("APIService", "API Service"),
        ("TrafficSplit", "Traffic Split"),
        ("CIDRsRanges", "CIDRs Ranges"),
        ("IPFamiliesWithIPs", "IP Families With IPs"),
        ("idConnectedToIPs", "id Connected To IPs"),
        ("MeshSync", "MeshSync"),
    ],
)
def test_format_to_readable_string(text, expected):
    assert format_to_readable_string(text) == expected


def test_format_empty():
    assert format_to_readable_string("") == ""


def test_format_dictionary_word():
    assert format_to_readable_string("caBundle") == "CA Bundle"
    assert format_to_readable_string("mtls") == "mTLS"


@pytest.mark.parametrize("text", ["APIService", "TrafficSplit", "IPFamiliesWithIPs", "idConnectedToIPs"])
def test_deformat_round_trip(text):
    assert deformat_readable_string(format_to_readable_string(text)) == text


def test_deformat_dictionary():
    assert deformat_readable_string("CA Bundle") == "caBundle"
    assert deformat_readable_string("MeshSync") == "MeshSync"


def test_remove_helm_templating():
    crd = "a: {{ .Values.x }}\n---\n\n---\nb: 1"
    assert remove_helm_templating_from_crd(crd) == "a: meshery\n---\nb: 1"


def test_remove_helm_templating_untouched():
    crd = "kind: CustomResourceDefinition"
    assert remove_helm_templating_from_crd(crd) == crd


def test_remove_non_crd_values():
    assert remove_non_crd_values(["", "a", " ", "null", "{}"]) == ["a", "{}"]


DEFINITIONS = {
    "io.k8s.Foo": {"type": "object", "properties": {"bar": {"$ref": "#/definitions/io.k8s.Bar"}}},
    "io.k8s.Bar": {"type": "string"},
    "x.JSONSchemaProps": {"properties": {"inner": {"$ref": "#/definitions/x.JSONSchemaProps"}}},
}


def test_resolve_nested_reference():
    result = OpenApiRefResolver().resolve({"$ref": "#/definitions/io.k8s.Foo"}, DEFINITIONS)
    assert result == {"type": "object", "properties": {"bar": {"type": "string"}}}


def test_resolve_reference_in_list():
    manifest = {"allOf": [{"$ref": "#/definitions/io.k8s.Bar"}, 1]}
    assert OpenApiRefResolver().resolve(manifest, DEFINITIONS) == {"allOf": [{"type": "string"}, 1]}


def test_resolve_accepts_json_text():
    manifest = json.dumps({"spec": {"$ref": "#/definitions/io.k8s.Bar"}})
    assert OpenApiRefResolver().resolve(manifest, json.dumps(DEFINITIONS)) == {"spec": {"type": "string"}}


def test_self_referencing_json_schema_props():
    result = OpenApiRefResolver().resolve({"$ref": "#/definitions/x.JSONSchemaProps"}, DEFINITIONS)
    assert result == {"properties": {"inner": {"$ref": "string"}}}


def test_cache_is_filled():
    cache = {}
    OpenApiRefResolver().resolve({"$ref": "#/definitions/io.k8s.Foo"}, DEFINITIONS, cache)
    assert cache["io.k8s.Bar"] == {"type": "string"}
    assert set(cache) == {"io.k8s.Foo", "io.k8s.Bar"}


def test_manifest_without_refs_is_unchanged():
    manifest = {"type": "object", "properties": {"a": {"type": "integer"}}}
    assert OpenApiRefResolver().resolve(manifest, DEFINITIONS) == manifest


def test_missing_definition_raises():
    with pytest.raises(LookupError):
        OpenApiRefResolver().resolve({"$ref": "#/definitions/io.k8s.Missing"}, DEFINITIONS)


def test_non_object_manifest_raises():
    with pytest.raises(ValueError):
        OpenApiRefResolver().resolve("[1, 2]", DEFINITIONS)