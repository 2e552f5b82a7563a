"""A small HTML-escaping template engine using ``{{.field}}`` actions."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, Sized
from dataclasses import dataclass, field
from numbers import Number
from typing import Any


class TemplateError(ValueError):
    """Raised when a template cannot be parsed or executed."""


_SPACE = " \t\r\n"
_ACTION = re.compile(r"\{\{(-[ \t\r\n])?(.*?)([ \t\r\n]-)?\}\}", re.DOTALL)
_FIELD = re.compile(r"\.(?:[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)?\Z")
_HTML_ESCAPES = {
    "\0": "\ufffd",
    '"': "&#34;",
    "&": "&amp;",
    "'": "&#39;",
    "+": "&#43;",
    "<": "&lt;",
    ">": "&gt;",
}


@dataclass(frozen=True)
class _Field:
    path: tuple[str, ...]


@dataclass
class _Block:
    keyword: str
    path: tuple[str, ...]
    body: list = field(default_factory=list)
    alternative: list = field(default_factory=list)


def _check_text(text: str) -> None:
    if "{{" in text:
        raise TemplateError("unclosed action")


def _tokenize(source: str) -> list[tuple[str, str]]:
    tokens: list[tuple[str, str]] = []
    pos = 0
    trim_left = False
    for match in _ACTION.finditer(source):
        text = source[pos:match.start()]
        if trim_left:
            text = text.lstrip(_SPACE)
        if match.group(1):
            text = text.rstrip(_SPACE)
        _check_text(text)
        tokens.append(("text", text))
        tokens.append(("action", match.group(2).strip()))
        trim_left = bool(match.group(3))
        pos = match.end()
    tail = source[pos:]
    if trim_left:
        tail = tail.lstrip(_SPACE)
    _check_text(tail)
    tokens.append(("text", tail))
    return tokens


def _field_path(argument: str) -> tuple[str, ...]:
    if not _FIELD.match(argument):
        raise TemplateError(f"unsupported template action: {{{{{argument}}}}}")
    if argument == ".":
        return ()
    return tuple(argument[1:].split("."))


def _parse(tokens: Iterator[tuple[str, str]]) -> tuple[list, str | None]:
    nodes: list = []
    for kind, value in tokens:
        if kind == "text":
            if value:
                nodes.append(value)
            continue
        if value.startswith("/*"):
            if not value.endswith("*/"):
                raise TemplateError("unclosed comment")
            continue
        words = value.split(None, 1)
        keyword = words[0] if words else ""
        if keyword in ("end", "else") and len(words) == 1:
            return nodes, keyword
        if keyword in ("if", "range", "with"):
            if len(words) < 2:
                raise TemplateError(f"missing value for {keyword}")
            block = _Block(keyword, _field_path(words[1].strip()))
            block.body, terminator = _parse(tokens)
            if terminator == "else":
                block.alternative, terminator = _parse(tokens)
            if terminator != "end":
                raise TemplateError(f"missing {{{{end}}}} for {keyword}")
            nodes.append(block)
            continue
        nodes.append(_Field(_field_path(value)))
    return nodes, None


def _resolve(dot: Any, path: tuple[str, ...]) -> Any:
    for name in path:
        if dot is None:
            return None
        if isinstance(dot, Mapping):
            dot = dot.get(name)
            continue
        try:
            dot = getattr(dot, name)
        except AttributeError as exc:
            raise TemplateError(f"can't evaluate field {name}") from exc
    return dot


def _truthy(value: Any) -> bool:
    if value is None or isinstance(value, (bool, Number, Sized)):
        return bool(value)
    return True


def _format(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format(item) for item in value) + "]"
    if isinstance(value, Mapping):
        return "map[" + " ".join(f"{_format(k)}:{_format(value[k])}" for k in sorted(value)) + "]"
    return str(value)


def _escape(text: str) -> str:
    return "".join(_HTML_ESCAPES.get(ch, ch) for ch in text)


def _items(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, Mapping):
        return [value[key] for key in sorted(value)]
    if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
        raise TemplateError(f"range can't iterate over {value!r}")
    return list(value)


def _render(nodes: list, dot: Any, out: list[str]) -> None:
    for node in nodes:
        if isinstance(node, str):
            out.append(node)
        elif isinstance(node, _Field):
            out.append(_escape(_format(_resolve(dot, node.path))))
        else:
            value = _resolve(dot, node.path)
            if node.keyword == "if":
                _render(node.body if _truthy(value) else node.alternative, dot, out)
            elif node.keyword == "with":
                if _truthy(value):
                    _render(node.body, value, out)
                else:
                    _render(node.alternative, dot, out)
            else:
                items = _items(value)
                if not items:
                    _render(node.alternative, dot, out)
                for item in items:
                    _render(node.body, item, out)


def merge_to_template(template: bytes | str, data: Any) -> bytes:
    """Render ``template`` with ``data`` and return the result as bytes.

    Supports field actions, if/with/range blocks with else, comments and
    whitespace trim markers. Values are HTML-escaped; missing keys render empty.
    """
    source = template.decode("utf-8") if isinstance(template, (bytes, bytearray)) else template
    nodes, terminator = _parse(iter(_tokenize(source)))
    if terminator is not None:
        raise TemplateError(f"unexpected {{{{{terminator}}}}}")
    out: list[str] = []
    _render(nodes, data, out)
    return "".join(out).encode("utf-8")