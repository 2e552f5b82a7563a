"""Resizing of SVG documents."""

from __future__ import annotations

import xml.parsers.expat

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?><!DOCTYPE svg>'

_TEXT_ESCAPES = {
    '"': "&#34;",
    "'": "&#39;",
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\t": "&#x9;",
    "\r": "&#xD;",
}
_ATTR_ESCAPES = {**_TEXT_ESCAPES, "\n": "&#xA;"}


def _escape(text: str, table: dict[str, str]) -> str:
    return "".join(table.get(ch, ch) for ch in text)


def _local(name: str) -> str:
    return name.rpartition(":")[2]


class _Rewriter:
    def __init__(self, width: int, height: int) -> None:
        self.width = str(width)
        self.height = str(height)
        self.out: list[str] = []
        self.namespaces: list[str | None] = [None]

    def start(self, name: str, flat_attrs: list[str]) -> None:
        pairs = list(zip(flat_attrs[::2], flat_attrs[1::2]))
        inherited = self.namespaces[-1]
        declared = next((value for key, value in pairs if key == "xmlns"), None)
        self.namespaces.append(declared if declared is not None else inherited)
        pairs = [(key, value) for key, value in pairs if key != "xmlns"]

        if _local(name) == "svg":
            seen_width = seen_height = False
            resized = []
            for key, value in pairs:
                if _local(key) == "width":
                    value, seen_width = self.width, True
                elif _local(key) == "height":
                    value, seen_height = self.height, True
                resized.append((key, value))
            if not seen_height:
                resized.append(("height", self.height))
            if not seen_width:
                resized.append(("width", self.width))
            pairs = resized

        if declared is not None and declared != inherited:
            pairs.insert(0, ("xmlns", declared))

        attrs = "".join(f' {key}="{_escape(value, _ATTR_ESCAPES)}"' for key, value in pairs)
        self.out.append(f"<{name}{attrs}>")

    def end(self, name: str) -> None:
        self.namespaces.pop()
        self.out.append(f"</{name}>")

    def text(self, data: str) -> None:
        self.out.append(_escape(data, _TEXT_ESCAPES))

    def comment(self, data: str) -> None:
        self.out.append(f"<!--{data}-->")

    def instruction(self, target: str, data: str) -> None:
        self.out.append(f"<?{target} {data}?>" if data else f"<?{target}?>")

    def declaration(self, version: str | None, encoding: str | None, standalone: int) -> None:
        parts = [f'version="{version or "1.0"}"']
        if encoding:
            parts.append(f'encoding="{encoding}"')
        if standalone != -1:
            parts.append(f'standalone="{"yes" if standalone else "no"}"')
        self.out.append(f"<?xml {' '.join(parts)}?>")

    def doctype(self, name: str, system_id: str | None, public_id: str | None, _internal: int) -> None:
        if public_id:
            self.out.append(f'<!DOCTYPE {name} PUBLIC "{public_id}" "{system_id or ""}">')
        elif system_id:
            self.out.append(f'<!DOCTYPE {name} SYSTEM "{system_id}">')
        else:
            self.out.append(f"<!DOCTYPE {name}>")


def update_svg_string(svg: str, width: int, height: int, skip_header: bool = False) -> str:
    """Set width and height on every svg element and return the document.

    Redundant default-namespace declarations are dropped. Unless
    ``skip_header`` is set, a non-empty result is prefixed with XML_HEADER.
    Raises ValueError if the document is not well-formed XML.
    """
    if not svg:
        return ""
    rewriter = _Rewriter(width, height)
    parser = xml.parsers.expat.ParserCreate()
    parser.buffer_text = True
    parser.ordered_attributes = True
    parser.StartElementHandler = rewriter.start
    parser.EndElementHandler = rewriter.end
    parser.CharacterDataHandler = rewriter.text
    parser.CommentHandler = rewriter.comment
    parser.ProcessingInstructionHandler = rewriter.instruction
    parser.XmlDeclHandler = rewriter.declaration
    parser.StartDoctypeDeclHandler = rewriter.doctype
    try:
        parser.Parse(svg, True)
    except xml.parsers.expat.ExpatError as exc:
        raise ValueError(f"invalid SVG document: {exc}") from exc

    body = "".join(rewriter.out)
    if body and not skip_header:
        return XML_HEADER + body
    return body