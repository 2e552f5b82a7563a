"""Detection and extraction of zip and gzip-compressed tar archives."""

from __future__ import annotations

import os
import shutil
import tarfile
import zipfile
from collections.abc import Callable
from pathlib import Path

_SNIFF_LENGTH = 512
_WHITESPACE = b"\t\n\x0c\r "
_HTML_TAGS = (
    b"<!DOCTYPE HTML", b"<HTML", b"<HEAD", b"<SCRIPT", b"<IFRAME", b"<H1",
    b"<DIV", b"<FONT", b"<TABLE", b"<A", b"<STYLE", b"<TITLE", b"<B",
    b"<BODY", b"<BR", b"<P", b"<!--",
)
_MAGIC = (
    (b"%PDF-", "application/pdf"),
    (b"%!PS-Adobe-", "application/postscript"),
    (b"\xfe\xff", "text/plain; charset=utf-16be"),
    (b"\xff\xfe", "text/plain; charset=utf-16le"),
    (b"\xef\xbb\xbf", "text/plain; charset=utf-8"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"BM", "image/bmp"),
    (b"OggS\x00", "application/ogg"),
    (b"MThd\x00\x00\x00\x06", "audio/midi"),
    (b"ID3", "audio/mpeg"),
    (b"\x1f\x8b\x08", "application/x-gzip"),
    (b"PK\x03\x04", "application/zip"),
    (b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    (b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    (b"\x00asm", "application/wasm"),
)
_BINARY = (
    frozenset(range(0x00, 0x09)) | {0x0B} | frozenset(range(0x0E, 0x1B)) | frozenset(range(0x1C, 0x20))
)


class ArchiveError(Exception):
    """Raised when an archive or directory cannot be read or extracted."""

    def __init__(self, message: str, path: str | os.PathLike | None = None) -> None:
        super().__init__(message)
        self.path = path


def _content_type(data: bytes) -> str:
    stripped = data.lstrip(_WHITESPACE)
    upper = stripped.upper()
    for tag in _HTML_TAGS:
        if upper.startswith(tag) and len(stripped) > len(tag) and stripped[len(tag)] in b" >":
            return "text/html; charset=utf-8"
    if stripped.startswith(b"<?xml"):
        return "text/xml; charset=utf-8"
    for magic, kind in _MAGIC:
        if data.startswith(magic):
            return kind
    if any(byte in _BINARY for byte in data):
        return "application/octet-stream"
    return "text/plain; charset=utf-8"


def _sniff(name: str | os.PathLike) -> str | None:
    try:
        with open(name, "rb") as handle:
            return _content_type(handle.read(_SNIFF_LENGTH))
    except OSError:
        return None


def is_tar_gz(name: str | os.PathLike) -> bool:
    """Return whether the file starts like gzip data."""
    return _sniff(name) == "application/x-gzip"


def is_zip(name: str | os.PathLike) -> bool:
    """Return whether the file starts like a zip archive."""
    return _sniff(name) == "application/zip"


def is_yaml(name: str | os.PathLike) -> bool:
    """Return whether the file looks like plain text."""
    kind = _sniff(name)
    return kind is not None and "text/plain" in kind


def _target(destination: Path, member: str, path: str | os.PathLike) -> Path:
    target = (destination / member).resolve()
    root = destination.resolve()
    if os.path.commonpath([root, target]) != str(root):
        raise ArchiveError(f"archive entry {member!r} escapes {path}", path)
    return target


def extract_zip(path: str | os.PathLike, artifact_path: str | os.PathLike) -> None:
    """Extract the zip archive at ``artifact_path`` into directory ``path``."""
    destination = Path(path)
    try:
        with zipfile.ZipFile(artifact_path) as archive:
            for info in archive.infolist():
                target = _target(destination, info.filename, path)
                mode = (info.external_attr >> 16) & 0o777
                if info.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue
                target.parent.mkdir(parents=True, exist_ok=True)
                with archive.open(info) as source, open(target, "wb") as sink:
                    shutil.copyfileobj(source, sink)
                if mode:
                    os.chmod(target, mode)
    except (OSError, zipfile.BadZipFile) as exc:
        raise ArchiveError(f"failed to extract zip archive into {path}: {exc}", path) from exc


def extract_tar_gz(path: str | os.PathLike, archive_path: str | os.PathLike) -> None:
    """Extract the gzip-compressed tar at ``archive_path`` into ``path``.

    Only directories and regular files are accepted; any other entry raises.
    """
    destination = Path(path)
    try:
        with tarfile.open(archive_path, mode="r:gz") as archive:
            for member in archive:
                target = _target(destination, member.name, path)
                if member.isdir():
                    target.mkdir(mode=0o755, parents=True, exist_ok=True)
                elif member.isreg():
                    target.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
                    source = archive.extractfile(member)
                    if source is None:
                        raise ArchiveError(f"cannot read archive entry {member.name!r}", path)
                    with source, open(target, "wb") as sink:
                        shutil.copyfileobj(source, sink)
                else:
                    raise ArchiveError(f"unsupported archive entry {member.name!r}", path)
    except (OSError, tarfile.TarError, EOFError) as exc:
        raise ArchiveError(f"failed to extract {archive_path} into {path}: {exc}", path) from exc


def process_content(file_path: str | os.PathLike, func: Callable[[str], None]) -> None:
    """Call ``func`` on a file, or on each entry of a directory in name order."""
    try:
        is_dir = Path(file_path).stat() and os.path.isdir(file_path)
        names = sorted(os.listdir(file_path)) if is_dir else None
    except OSError as exc:
        raise ArchiveError(f"cannot read {file_path}: {exc}", file_path) from exc
    if names is None:
        func(os.fspath(file_path))
        return
    for name in names:
        func(os.path.join(file_path, name))