from __future__ import annotations

import os
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from loguru import logger

from formsniff.boundary import generate_boundary, header_boundary
from formsniff.buffer import ByteBuffer
from formsniff.errors import InvalidInputError, IOFailureError
from formsniff.sniffer import Sniffer, sniff

RESERVED_FILE_FIELDS = frozenset({"file", "files"})
TRUE_TOKEN = "true"
FALSE_TOKEN = "false"

# RFC 2046 bchars without the space, 1 to 70 of them.
_BOUNDARY_TOKEN = re.compile(r"[0-9A-Za-z'()+_,\-./:=?]{1,70}")


@dataclass(frozen=True)
class FileField:
    name: str
    paths: tuple[str, ...]


@dataclass(frozen=True)
class ScalarField:
    name: str
    value: object


def is_file_field(name: str) -> bool:
    return name.lower() in RESERVED_FILE_FIELDS


def _coerce_paths(name: str, value: object) -> tuple[str, ...]:
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        raise InvalidInputError(
            f'Field "{name}" must hold a sequence of file paths, got {type(value).__name__}',
            field=name,
            value_type=type(value).__name__,
        )
    paths: list[str] = []
    for item in value:
        if not isinstance(item, (str, os.PathLike)):
            raise InvalidInputError(
                f'Field "{name}" contains a {type(item).__name__} where a file path was expected',
                field=name,
                value_type=type(item).__name__,
            )
        path = os.fspath(item)
        if not isinstance(path, str):
            raise InvalidInputError(
                f'Field "{name}" contains a non-text path',
                field=name,
                value_type=type(path).__name__,
            )
        paths.append(path)
    return tuple(paths)


def classify_fields(fields: Mapping[str, object]) -> list[FileField | ScalarField]:
    """
    Validate `fields` and tag each entry as a file or scalar field.

    Runs before any file is touched so invalid input never causes I/O.
    """
    if not isinstance(fields, Mapping):
        raise InvalidInputError(
            f"Form fields must be a mapping, got {type(fields).__name__}",
            value_type=type(fields).__name__,
        )
    classified: list[FileField | ScalarField] = []
    for name, value in fields.items():
        if not isinstance(name, str):
            raise InvalidInputError(
                f"Field names must be strings, got {type(name).__name__}",
                field=repr(name),
                value_type=type(name).__name__,
            )
        if is_file_field(name):
            classified.append(FileField(name, _coerce_paths(name, value)))
        else:
            classified.append(ScalarField(name, value))
    return classified


def render_value(value: object) -> str | bytes:
    """Textual form of a scalar field value."""
    if value is True:
        return TRUE_TOKEN
    if value is False:
        return FALSE_TOKEN
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return str(value)


def _quote(value: str) -> str:
    """
    Make `value` safe inside a quoted header parameter.

    Percent-encodes `%` and double quotes so they decode back unchanged.
    CR, LF and null bytes are dropped, so names containing them are not
    preserved.
    """
    clean = value.replace("\r", "").replace("\n", "").replace("\x00", "")
    return clean.replace("%", "%25").replace('"', "%22")


def _encode_field(buf: ByteBuffer, name: str, value: str | bytes) -> None:
    buf.writeline(f'Content-Disposition: form-data; name="{_quote(name)}"')
    buf.writeline()
    buf.writeline(value)


def _encode_file(buf: ByteBuffer, name: str, filename: str, content: bytes, content_type: str) -> None:
    buf.writeline(
        f'Content-Disposition: form-data; name="{_quote(name)}"; filename="{_quote(filename)}"'
    )
    buf.writeline(f"Content-Type: {content_type}")
    buf.writeline()
    buf.writeline(content)


def _read_file(field: str, path: str) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise IOFailureError(f'Cannot read "{path}" for field "{field}": {e}', field=field, path=path) from e


class FormData:
    """
    Fully materialized multipart/form-data body.

    Fields named "file" or "files" (any case) hold sequences of paths; each
    path becomes its own part with a sniffed Content-Type. Every other field
    is rendered as text. The body is built on construction and never changes.

    Args:
        fields: Ordered mapping of field name to value
        boundary: Delimiter to use instead of a generated one ("--" plus 1 to 70 boundary characters)
        sniffer: Sniffer used for file parts (default: module-level tables)
    """

    def __init__(
        self,
        fields: Mapping[str, object],
        *,
        boundary: str | None = None,
        sniffer: Sniffer | None = None,
    ) -> None:
        classified = classify_fields(fields)
        if boundary is None:
            boundary = generate_boundary()
        elif not boundary.startswith("--") or not _BOUNDARY_TOKEN.fullmatch(boundary[2:]):
            raise ValueError('boundary must be "--" followed by 1 to 70 boundary characters')
        detect = sniffer.sniff if sniffer is not None else sniff

        buf = ByteBuffer()
        for field in classified:
            if isinstance(field, FileField):
                for path in field.paths:
                    filename = os.path.basename(path)
                    content_type = detect(path)
                    content = _read_file(field.name, path)
                    buf.writeline(boundary)
                    _encode_file(buf, field.name, filename, content, content_type)
                    logger.debug(
                        "Added file part {}={} ({}, {} bytes)",
                        field.name, filename, content_type, len(content),
                    )
            else:
                buf.writeline(boundary)
                _encode_field(buf, field.name, render_value(field.value))
                logger.debug("Added field part {}", field.name)
        buf.writeline(f"{boundary}--")

        self._boundary = boundary
        self._fields = tuple(classified)
        self._body = buf.getvalue()

    @property
    def boundary(self) -> str:
        return self._boundary

    @property
    def fields(self) -> tuple[FileField | ScalarField, ...]:
        return self._fields

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={header_boundary(self._boundary)}"

    @property
    def body(self) -> bytes:
        return self._body

    def headers(self) -> dict[str, str]:
        """Request headers describing this body."""
        return {
            "Content-Type": self.content_type,
            "Content-Length": str(len(self._body)),
        }

    def __len__(self) -> int:
        return len(self._body)

    def __bytes__(self) -> bytes:
        return self._body

    def __repr__(self) -> str:
        return f"<FormData [{len(self._fields)} fields] {len(self._body)} bytes>"


def build_multipart(fields: Mapping[str, object]) -> tuple[str, bytes]:
    """
    Build a multipart/form-data body.

    Returns:
        (content_type, body) ready to send as-is
    """
    form = FormData(fields)
    return form.content_type, form.body
