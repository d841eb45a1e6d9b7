import pytest

from context_generator.scanner.content_sniffer import SNIFF_LENGTH, is_text_content, is_text_file


@pytest.mark.parametrize(
    "sample",
    [
        b"plain ascii text\n",
        b"tabs\tand\r\nwindows line endings\r\n",
        b"form\x0cfeed and \x1b[31mansi escapes\x1b[0m",
        "unicode: café 中文 \U0001f600\n".encode("utf-8"),
        b"\xef\xbb\xbfUTF-8 with BOM",
        b"\xff\xfeh\x00i\x00",
        b'<?xml version="1.0"?><root/>',
        b"  <!DOCTYPE html><html></html>",
        b"<html>\x00</html>",
        b"BMP-like text at the start",
        b"MZ is also a fine way to start a sentence",
        b"#!/bin/sh\necho hi\n",
        b"",
    ],
)
def test_text_content(sample):
    assert is_text_content(sample)


@pytest.mark.parametrize(
    "sample",
    [
        b"\x7fELF\x02\x01\x01\x00",
        b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR",
        b"\xff\xd8\xff\xe0\x00\x10JFIF",
        b"GIF89a\x01\x00\x01\x00",
        b"%PDF-1.7\n",
        b"PK\x03\x04\x14\x00",
        b"\x1f\x8b\x08\x00",
        b"SQLite format 3\x00",
        b"RIFF\x24\x08\x00\x00WAVEfmt ",
        b"\x00asm\x01\x00\x00\x00",
        b"text with a NUL\x00byte",
        b"text with a bell\x07",
    ],
)
def test_binary_content(sample):
    assert not is_text_content(sample)


def test_only_prefix_is_inspected():
    sample = b"a" * SNIFF_LENGTH + b"\x00"
    assert is_text_content(sample)


def test_riff_with_unknown_type_falls_through():
    assert is_text_content(b"RIFF1234TEXTsome text")


def test_is_text_file(tmp_path):
    text = tmp_path / "main.py"
    text.write_text("print('hello')\n")
    binary = tmp_path / "program"
    binary.write_bytes(b"\x7fELF\x02\x01\x01\x00" + b"\x00" * 64)
    empty = tmp_path / "empty.txt"
    empty.write_bytes(b"")

    assert is_text_file(text)
    assert not is_text_file(binary)
    assert is_text_file(str(empty))


def test_is_text_file_missing(tmp_path):
    with pytest.raises(OSError):
        is_text_file(tmp_path / "missing")
