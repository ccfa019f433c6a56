"""
Format Decoder for GitFormat.

This package is responsible for:
- Building git ``--format`` strings for the supported record types
- Splitting git output into records and trimming diffstat trailers
- Escaping record text into valid JSON
- Decoding records into typed models
"""

from services.format_decoder.decoder import DecodeResult, GitFormatDecoder
from services.format_decoder.encoder import GitFormatEncoder
from services.format_decoder.errors import (
    FormatDecodeError,
    MalformedRecordError,
    OutputTooLargeError,
    RecordEncodingError,
)

__version__ = "1.0.0"
__author__ = "GitFormat Team"
__description__ = "Typed decoding of git --format output"

__all__ = [
    "DecodeResult",
    "GitFormatDecoder",
    "GitFormatEncoder",
    "FormatDecodeError",
    "MalformedRecordError",
    "OutputTooLargeError",
    "RecordEncodingError",
]
