"""Readable names for schema fields, CRD clean-up and OpenAPI reference resolution."""

from __future__ import annotations

import copy
import json
import re
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

JSON_SCHEMA_PROPS_REF = "JSONSchemaProps"

_TEMPLATE_EXPRESSION = re.compile(r"{{.+}}")
_DOCUMENT_SEPARATOR = "\n---\n"

# Words that are left as they are, or replaced wholesale, instead of being split.
_DICTIONARY = {
    "MeshSync": "MeshSync",
    "additionalProperties": "additionalProperties",
    "caBundle": "CA Bundle",
    "mtls": "mTLS",
    "mTLS": "mTLS",
}


class _Action(Enum):
    KEEP = 0
    SPACE_AFTER = 1
    SPACE_BEFORE = -1


def _use_dictionary(text: str, invert: bool) -> tuple[str, bool]:
    for word, replacement in _DICTIONARY.items():
        if invert and replacement == text:
            return word, True
        if not invert and word == text:
            return replacement, True
    return text, False


def _is_big(ch: str) -> bool:
    return "A" <= ch <= "Z"


def _is_small(ch: str) -> bool:
    return "a" <= ch <= "z"


def _is_exception(prev: int, curr: int, nxt: int, text: str) -> bool:
    last = len(text) - 1
    if nxt != last and _is_big(text[curr]) and _is_big(text[prev]) and _is_small(text[nxt]) and _is_big(text[nxt + 1]):
        return True
    if nxt == last and _is_small(text[nxt]):
        return True
    return _is_big(text[curr]) and _is_small(text[nxt]) and nxt != last and _is_big(text[nxt + 1])


def _action(prev: int, curr: int, nxt: int, text: str) -> _Action:
    if _is_exception(prev, curr, nxt, text):
        return _Action.KEEP
    if _is_small(text[curr]) and _is_big(text[nxt]):
        return _Action.SPACE_AFTER
    if _is_big(text[curr]) and _is_big(text[prev]) and _is_small(text[nxt]):
        return _Action.SPACE_BEFORE
    return _Action.KEEP


def format_to_readable_string(text: str) -> str:
    """Split a camel-case identifier into space-separated words.

    A space goes after a lower-case letter followed by a capital, and before
    a capital that ends a run of capitals and starts a word; acronym plurals
    such as ``IPs`` stay together.
    """
    if not text:
        return ""
    text, found = _use_dictionary(text, False)
    if found:
        return text
    pieces = [text[0]]
    for i in range(1, len(text) - 1):
        action = _action(i - 1, i, i + 1, text)
        if action is _Action.SPACE_AFTER:
            pieces.append(text[i] + " ")
        elif action is _Action.SPACE_BEFORE:
            pieces.append(" " + text[i])
        else:
            pieces.append(text[i])
    pieces.append(text[-1])
    return " ".join("".join(pieces).split())


def deformat_readable_string(text: str) -> str:
    """Reverse format_to_readable_string by removing the spaces."""
    original, found = _use_dictionary(text, True)
    if found:
        return original
    return original.replace(" ", "")


def remove_helm_templating_from_crd(crd_yaml: str) -> str:
    """Replace helm template expressions with ``meshery`` and drop empty documents."""
    documents = [
        _TEMPLATE_EXPRESSION.sub("meshery", document)
        for document in crd_yaml.split(_DOCUMENT_SEPARATOR)
        if document
    ]
    return _DOCUMENT_SEPARATOR.join(documents)


def remove_non_crd_values(crds: Iterable[str]) -> list[str]:
    """Drop blank and ``null`` entries."""
    return [crd for crd in crds if crd not in ("", " ", "null")]


def _last_segment(ref: str, separator: str) -> str:
    return ref.rsplit(separator, 1)[-1]


def _as_object(value: Any, what: str) -> dict[str, Any]:
    if isinstance(value, (str, bytes, bytearray)):
        value = json.loads(value)
    if not isinstance(value, Mapping):
        raise ValueError(f"{what} is not a JSON object")
    return dict(value)


class OpenApiRefResolver:
    """Inline ``$ref`` references of an OpenAPI schema from its definitions.

    A JSONSchemaProps reference met while already resolving JSONSchemaProps
    is replaced by ``"string"`` so that the self-reference does not recurse.
    """

    def __init__(self) -> None:
        self._inside_json_schema_props = False

    def resolve(
        self,
        manifest: str | bytes | Mapping[str, Any],
        definitions: str | bytes | Mapping[str, Any],
        cache: dict[str, dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Return ``manifest`` with every reference replaced by its definition.

        Resolved definitions are stored in ``cache`` by name. Raises
        LookupError for an unknown definition and ValueError when the
        manifest or a definition is not a JSON object.
        """
        if cache is None:
            cache = {}
        defs = _as_object(definitions, "definitions")
        return self._resolve(_as_object(manifest, "manifest"), defs, cache)

    def _resolve(self, node: dict[str, Any], definitions: Mapping[str, Any], cache: dict) -> dict[str, Any]:
        node = dict(node)
        ref = node.get("$ref")
        if isinstance(ref, str):
            if self._inside_json_schema_props and _last_segment(ref, ".") == JSON_SCHEMA_PROPS_REF:
                node["$ref"] = "string"
                return node
            return self._definition(ref, definitions, cache)

        for key, value in node.items():
            if isinstance(value, list):
                node[key] = [
                    self._resolve(item, definitions, cache) if isinstance(item, Mapping) else item
                    for item in value
                ]
            elif isinstance(value, Mapping):
                node[key] = self._resolve(dict(value), definitions, cache)
        return node

    def _definition(self, ref: str, definitions: Mapping[str, Any], cache: dict) -> dict[str, Any]:
        name = _last_segment(ref, "/")
        if name not in cache:
            if name not in definitions:
                raise LookupError(f"definition {name!r} not found")
            if _last_segment(ref, ".") == JSON_SCHEMA_PROPS_REF:
                self._inside_json_schema_props = True
            try:
                target = _as_object(definitions[name], f"definition {name!r}")
                cache[name] = self._resolve(target, definitions, cache)
            finally:
                self._inside_json_schema_props = False
        return copy.deepcopy(cache[name])