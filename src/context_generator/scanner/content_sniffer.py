"""Text versus binary detection from a file's leading bytes.

Detection follows the same idea browsers use to sniff a content type: a table of
magic-byte signatures is consulted first, and anything left over is text only if it
contains no control bytes that never appear in text.
"""

from typing import Tuple

from context_generator.types import PathType

# Number of leading bytes inspected
SNIFF_LENGTH = 512

# Signatures that identify textual content
TEXT_SIGNATURES: Tuple[bytes, ...] = (
    b"\xef\xbb\xbf",  # UTF-8 BOM
    b"\xfe\xff",  # UTF-16 BE BOM
    b"\xff\xfe",  # UTF-16 LE BOM
    b"<?xml",
)

# HTML markers, matched case-insensitively after leading whitespace
HTML_SIGNATURES: Tuple[bytes, ...] = (
    b"<!doctype html",
    b"<html",
    b"<head",
    b"<script",
    b"<iframe",
    b"<h1",
    b"<div",
    b"<font",
    b"<table",
    b"<a",
    b"<style",
    b"<title",
    b"<b",
    b"<body",
    b"<br",
    b"<p",
    b"<!--",
)

# Signatures that identify binary content
BINARY_SIGNATURES: Tuple[bytes, ...] = (
    # Documents
    b"%PDF-",
    b"%!PS-Adobe-",
    # Images
    b"GIF87a",
    b"GIF89a",
    b"\x89PNG\r\n\x1a\n",
    b"\xff\xd8\xff",
    b"\x00\x00\x01\x00",  # ICO
    b"\x00\x00\x02\x00",  # CUR
    b"II*\x00",  # TIFF little endian
    b"MM\x00*",  # TIFF big endian
    # Executables and bytecode
    b"\x7fELF",
    b"\xfe\xed\xfa\xce",  # Mach-O 32
    b"\xfe\xed\xfa\xcf",  # Mach-O 64
    b"\xce\xfa\xed\xfe",
    b"\xcf\xfa\xed\xfe",
    b"\xca\xfe\xba\xbe",  # Mach-O fat binary / Java class
    b"\x00asm",  # WebAssembly
    # Archives and compression
    b"\x1f\x8b\x08",  # gzip
    b"\xfd7zXZ\x00",
    b"PK\x03\x04",
    b"PK\x05\x06",
    b"Rar!\x1a\x07",
    b"7z\xbc\xaf\x27\x1c",
    # Audio and video
    b"OggS\x00",
    b"fLaC",
    b"MThd\x00\x00\x00\x06",
    b"\x1a\x45\xdf\xa3",  # Matroska / WebM
    # Fonts
    b"wOFF",
    b"wOF2",
    b"OTTO",
    b"\x00\x01\x00\x00",  # TrueType
    # Databases
    b"SQLite format 3\x00",
)

# RIFF containers (WAV, AVI, WEBP) carry their type at offset 8
RIFF_TYPES: Tuple[bytes, ...] = (b"WAVE", b"AVI ", b"WEBP")

# Control bytes that do not occur in text; tab, newline, form feed, carriage
# return and escape are allowed
BINARY_DATA_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B)) + list(range(0x1C, 0x20))
)

_WHITESPACE = b"\t\n\x0c\r "


def _is_html(sample: bytes) -> bool:
    stripped = sample.lstrip(_WHITESPACE)
    lowered = stripped[:16].lower()
    for signature in HTML_SIGNATURES:
        if not lowered.startswith(signature):
            continue
        # The tag name must be terminated by a space or '>'
        rest = stripped[len(signature) : len(signature) + 1]  # noqa: E203
        if signature == b"<!--" or rest in (b" ", b">"):
            return True
    return False


def is_text_content(sample: bytes) -> bool:
    """Decide whether a byte prefix looks like text.

    Args:
        sample: The leading bytes of a file, at most ``SNIFF_LENGTH`` are considered.

    Returns:
        True for text, False for binary data. Empty input counts as text.

    Example:
        >>> is_text_content(b"hello world\\n")
        True
        >>> is_text_content(b"\\x89PNG\\r\\n\\x1a\\n\\x00\\x00")
        False
        >>> is_text_content(b"\\x7fELF\\x02\\x01\\x01\\x00")
        False
        >>> is_text_content("caf\\u00e9 \\u4e2d\\u6587".encode("utf-8"))
        True
        >>> is_text_content(b"")
        True
    """
    sample = sample[:SNIFF_LENGTH]
    if not sample:
        return True

    if sample.startswith(TEXT_SIGNATURES) or _is_html(sample):
        return True

    if sample.startswith(BINARY_SIGNATURES):
        return False

    if sample.startswith(b"RIFF") and sample[8:12] in RIFF_TYPES:
        return False

    return not any(byte in BINARY_DATA_BYTES for byte in sample)


def is_text_file(file_path: PathType) -> bool:
    """Read the first ``SNIFF_LENGTH`` bytes of a file and classify them.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    with open(file_path, "rb") as file:
        sample = file.read(SNIFF_LENGTH)
    return is_text_content(sample)
