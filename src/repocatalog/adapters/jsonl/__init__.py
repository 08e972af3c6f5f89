"""JSON Lines connector for grouped source files."""

from __future__ import annotations

from .reader import JsonLinesGroupReader, SourcePayloadError
from .schema import SourceFilePayload
from .translator import SourceFileTranslator

__all__ = [
    "JsonLinesGroupReader",
    "SourceFilePayload",
    "SourcePayloadError",
    "SourceFileTranslator",
]
