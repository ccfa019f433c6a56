"""Errors raised while decoding git format output."""

from typing import Optional


class FormatDecodeError(Exception):
    """Base class for failures while decoding git format output."""

    def __init__(self, message: str, record_index: Optional[int] = None, record: Optional[str] = None):
        super().__init__(message)
        self.record_index = record_index
        self.record = record


class MalformedRecordError(FormatDecodeError):
    """A non-empty record is not valid JSON for the requested type."""

    def __init__(self, record_index: int, record: str, detail: str):
        super().__init__(
            f"Record {record_index} could not be decoded: {detail}",
            record_index=record_index,
            record=record,
        )
        self.detail = detail


class RecordEncodingError(FormatDecodeError):
    """The escaped record text cannot be encoded as UTF-8."""

    def __init__(self, record_index: int, record: str, detail: str):
        super().__init__(
            f"Record {record_index} is not representable as UTF-8: {detail}",
            record_index=record_index,
            record=record,
        )
        self.detail = detail


class OutputTooLargeError(FormatDecodeError):
    """The git output exceeds the configured size limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"Output of {size} characters exceeds the limit of {limit}")
        self.size = size
        self.limit = limit
