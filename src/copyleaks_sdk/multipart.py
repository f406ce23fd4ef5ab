"""Single-file ``multipart/form-data`` body encoding."""

from __future__ import annotations

import os
import secrets
from typing import Optional

from .exceptions import CopyleaksValidationError


BOUNDARY_PREFIX = "copyleaks_sdk_"
DEFAULT_MIME_TYPE = "text/plain"
SNIFF_PREFIX_BYTES = 8192

# percent-encoding used by browsers for form-data filenames (RFC 7578 section 4.2)
_FILENAME_ESCAPES = str.maketrans({'"': "%22", "\r": "%0D", "\n": "%0A"})

_ZIP_MAGIC = b"PK\x03\x04"

# Office Open XML and OpenDocument containers are zip archives; the part
# names near the start of the archive tell them apart.
_ZIP_CONTAINERS = (
    (b"mimetypeapplication/vnd.oasis.opendocument.text", "application/vnd.oasis.opendocument.text"),
    (b"word/", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
    (b"xl/", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
    (b"ppt/", "application/vnd.openxmlformats-officedocument.presentationml.presentation"),
)

_SIGNATURES = (
    (b"%PDF-", "application/pdf"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"II*\x00", "image/tiff"),
    (b"MM\x00*", "image/tiff"),
    (b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1", "application/x-ole-storage"),
    (b"{\\rtf", "application/rtf"),
    (b"\x1f\x8b", "application/gzip"),
)


def new_boundary() -> str:
    """Return a fresh boundary token, unique per request."""
    return f"{BOUNDARY_PREFIX}{secrets.token_hex(4)}"


def _magic_mime(prefix: bytes) -> Optional[str]:
    """Detect mime from common magic headers."""
    if prefix.startswith(_ZIP_MAGIC):
        for marker, mime in _ZIP_CONTAINERS:
            if marker in prefix:
                return mime
        return "application/zip"
    for magic, mime in _SIGNATURES:
        if prefix.startswith(magic):
            return mime
    return None


def sniff_mime_type(path: str | os.PathLike[str]) -> str:
    """Detect a file's content type from its leading bytes.

    Falls back to ``text/plain`` when no signature matches.
    """
    with open(path, "rb") as f:
        head = f.read(SNIFF_PREFIX_BYTES)
    return _magic_mime(head) or DEFAULT_MIME_TYPE


def _part_filename(path: str | os.PathLike[str]) -> str:
    filename = os.path.basename(os.fspath(path)).translate(_FILENAME_ESCAPES)
    try:
        filename.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise CopyleaksValidationError(
            f"file name is not valid UTF-8: {filename!r}", cause=exc
        ) from exc
    return filename


def encode_file_body(path: str | os.PathLike[str], boundary: str) -> bytes:
    """Serialize one file into a ``multipart/form-data`` body.

    The whole file is read into memory. Quotes and line breaks in the file
    name are percent-encoded. Raises ``CopyleaksValidationError`` for file
    names that are not valid UTF-8 (checked before the file is opened) and
    ``OSError`` when the file cannot be opened or read.
    """
    filename = _part_filename(path)
    mime_type = sniff_mime_type(path)
    with open(path, "rb") as f:
        content = f.read()
    head = (
        f"\r\n--{boundary}\r\n"
        f'content-disposition: form-data; name="file"; filename="{filename}"\r\n'
        f"Content-Type: {mime_type}\r\n"
        "Content-Transfer-Encoding: binary\r\n"
        "\r\n"
    )
    tail = f"\r\n--{boundary}--\r\n"
    return head.encode("utf-8") + content + tail.encode("utf-8")
