from __future__ import annotations

import os

import pytest

from copyleaks_sdk.exceptions import CopyleaksValidationError
from copyleaks_sdk.multipart import (
    BOUNDARY_PREFIX,
    encode_file_body,
    new_boundary,
    sniff_mime_type,
)


def test_encode_text_file_layout(tmp_path) -> None:
    path = tmp_path / "x.txt"
    path.write_bytes(b"0123456789")

    body = encode_file_body(path, "B1")

    assert body.startswith(b"\r\n--B1\r\n")
    assert body.endswith(b"\r\n--B1--\r\n")
    assert body.count(b"content-disposition") == 1
    assert body == (
        b"\r\n--B1\r\n"
        b'content-disposition: form-data; name="file"; filename="x.txt"\r\n'
        b"Content-Type: text/plain\r\n"
        b"Content-Transfer-Encoding: binary\r\n"
        b"\r\n"
        b"0123456789"
        b"\r\n--B1--\r\n"
    )


def test_encode_keeps_binary_payload_intact(tmp_path) -> None:
    payload = b"%PDF-1.7\n\x00\xff\r\n--B1--\r\nbinary"
    path = tmp_path / "report.pdf"
    path.write_bytes(payload)

    body = encode_file_body(str(path), "B1")

    assert b'filename="report.pdf"' in body
    assert b"Content-Type: application/pdf\r\n" in body
    assert payload in body


@pytest.mark.skipif(os.name == "nt", reason="quotes and line breaks are not valid in Windows file names")
def test_encode_escapes_quotes_and_line_breaks_in_filename(tmp_path) -> None:
    path = tmp_path / 'a"b\r\nX-Injected: 1.txt'
    path.write_bytes(b"hello")

    body = encode_file_body(path, "B1")

    head, _, _ = body.partition(b"\r\n\r\n")
    assert b'filename="a%22b%0D%0AX-Injected: 1.txt"\r\n' in head
    assert b"\r\nX-Injected" not in head
    assert head.count(b"\r\n") == 4


def test_encode_rejects_undecodable_filename_before_reading(tmp_path) -> None:
    path = os.path.join(str(tmp_path), "bad\udcff.txt")

    with pytest.raises(CopyleaksValidationError, match="not valid UTF-8"):
        encode_file_body(path, "B1")


def test_encode_missing_file_raises_oserror(tmp_path) -> None:
    with pytest.raises(OSError):
        encode_file_body(tmp_path / "missing.txt", "B1")


@pytest.mark.parametrize(
    ("head", "expected"),
    [
        (b"%PDF-1.4 rest", "application/pdf"),
        (b"\x89PNG\r\n\x1a\n....", "image/png"),
        (b"\xff\xd8\xff\xe0JFIF", "image/jpeg"),
        (b"GIF89a....", "image/gif"),
        (b"II*\x00....", "image/tiff"),
        (b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1....", "application/x-ole-storage"),
        (b"{\\rtf1\\ansi", "application/rtf"),
        (
            b"PK\x03\x04\x14\x00[Content_Types].xml....word/document.xml",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        ),
        (b"PK\x03\x04\x14\x00some-archive-entry", "application/zip"),
        (b"Just some plain words.", "text/plain"),
        (b"", "text/plain"),
    ],
)
def test_sniff_mime_type(tmp_path, head: bytes, expected: str) -> None:
    path = tmp_path / "sample.bin"
    path.write_bytes(head)

    assert sniff_mime_type(path) == expected


def test_new_boundary_is_random_and_prefixed() -> None:
    first = new_boundary()
    second = new_boundary()

    assert first.startswith(BOUNDARY_PREFIX)
    assert len(first) == len(BOUNDARY_PREFIX) + 8
    assert first != second
