"""
Content-type sniffing for files attached to a multipart body.

Detection runs in a fixed order and stops at the first answer:

1. signature candidates registered for the file's extension
2. a null-byte scan of the first bytes, classifying text files
3. the extension fallback table
4. DEFAULT_MIME_TYPE

Detection is advisory, so filesystem errors never escape `sniff`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from loguru import logger

from formsniff.extensions import EXTENSION_TYPES
from formsniff.signatures import SIGNATURES, Signature

DEFAULT_MIME_TYPE = "application/octet-stream"
TEXT_MIME_TYPE = "text/plain"

# 8 reads of 16 bytes
TEXT_SNIFF_WINDOW = 128
TEXT_SNIFF_CHUNK = 16


def file_extension(path: str | os.PathLike) -> str:
    """Return the lowercase extension of `path` without its dot."""
    _, ext = os.path.splitext(os.fspath(path))
    return ext[1:].lower()


class Sniffer:
    """
    Signature-first MIME detector.

    Args:
        signatures: Extension -> Signature table consulted first
        extensions: Extension -> MIME table consulted last
        window: Number of leading bytes scanned for a null byte
        chunk_size: Read granularity used while scanning the window
    """

    def __init__(
        self,
        signatures: Mapping[str, Signature] = SIGNATURES,
        extensions: Mapping[str, str] = EXTENSION_TYPES,
        window: int = TEXT_SNIFF_WINDOW,
        chunk_size: int = TEXT_SNIFF_CHUNK,
    ) -> None:
        if window <= 0 or chunk_size <= 0:
            raise ValueError("window and chunk_size must be positive")
        self.signatures = signatures
        self.extensions = extensions
        self.window = window
        self.chunk_size = chunk_size

    def match_signature(self, path: str | os.PathLike) -> str | None:
        """
        Compare the file against the signature candidates of its extension.

        Candidates are tried in table order and the first exact match wins.
        A file that cannot be opened, or is too short for a candidate, is
        simply not a match.
        """
        entry = self.signatures.get(file_extension(path))
        if entry is None:
            return None
        try:
            with open(path, "rb") as f:
                for offset, signature in entry.candidates:
                    f.seek(offset)
                    head = f.read(len(signature) // 2)
                    if head.hex().upper() == signature.upper():
                        return entry.mime
        except OSError as e:
            logger.debug("Signature check skipped for {}: {}", path, e)
        return None

    def looks_like_text(self, path: str | os.PathLike) -> bool:
        """
        Return True when no null byte occurs in the first `window` bytes.

        Raises:
            OSError: If the file cannot be opened or read
        """
        remaining = self.window
        with open(path, "rb") as f:
            while remaining > 0:
                chunk = f.read(min(self.chunk_size, remaining))
                if not chunk:
                    break
                if b"\x00" in chunk:
                    return False
                remaining -= len(chunk)
        return True

    def sniff(self, path: str | os.PathLike) -> str:
        mime = self.match_signature(path)
        if mime is not None:
            logger.debug("{} matched signature: {}", path, mime)
            return mime

        try:
            if self.looks_like_text(path):
                logger.debug("{} has no null byte in its first {} bytes", path, self.window)
                return TEXT_MIME_TYPE
        except OSError as e:
            logger.debug("Text scan failed for {}: {}", path, e)
            return DEFAULT_MIME_TYPE

        mime = self.extensions.get(file_extension(path), DEFAULT_MIME_TYPE)
        logger.debug("{} resolved by extension: {}", path, mime)
        return mime


_default_sniffer = Sniffer()


def sniff(path: str | os.PathLike) -> str:
    """Detect the MIME type of `path` with the built-in tables."""
    return _default_sniffer.sniff(path)
