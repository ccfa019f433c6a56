"""
Decoder for git output produced with a ``GitFormatEncoder`` format string.

The output is split into records on the end-of-line sentinel. Each record may
be followed by git's diffstat trailer (``--shortstat``), whose counters are
handed to records implementing ``ChangeSummaryReceiver``. Record text is
escaped into valid JSON and validated into the requested type with pydantic.
"""

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Iterator, List, Optional, Tuple, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from config.settings import DecoderSettings, settings
from shared.models import ChangeSummary, ChangeSummaryReceiver
from services.format_decoder.encoder import GitFormatEncoder
from services.format_decoder.errors import (
    FormatDecodeError,
    MalformedRecordError,
    OutputTooLargeError,
    RecordEncodingError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRAILER_PATTERN = re.compile(
    r"\n\n (?P<files_changed>[0-9]+) files? changed"
    r"(, (?P<insertions>[0-9]+) insertions?\(\+\))?"
    r"(, (?P<deletions>[0-9]+) deletions?\(-\))?"
)

# Applied in order; quotes must be escaped before the sentinel is restored.
ESCAPE_SEQUENCE = (
    ("\\", "\\\\"),
    ("//", "////"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\t", "\\t"),
    ("\r", "\\r"),
    ("\0", "\\u0000"),
    ("\b", "\\u0008"),
    (GitFormatEncoder.QUOTES, '"'),
)


@lru_cache(maxsize=128)
def _adapter_for(as_type: Any) -> TypeAdapter:
    return TypeAdapter(as_type)


def parse_change_summary(match: Optional["re.Match[str]"]) -> ChangeSummary:
    """Build the change summary from a trailer match, if one followed the record."""
    if match is None:
        return ChangeSummary()
    values = {}
    for name in ("files_changed", "insertions", "deletions"):
        group = match.group(name)
        values[name] = int(group) if group is not None else None
    return ChangeSummary(**values)


def split_records(records: str) -> Iterator[Tuple[str, Optional["re.Match[str]"]]]:
    """
    Split trimmed git output on the end-of-line sentinel.

    Yields each record's text with the diffstat trailer that directly follows
    its sentinel, or ``None``. Text after the last sentinel is not a record.
    """
    end = GitFormatEncoder.END_OF_LINE
    pos = 0
    while True:
        idx = records.find(end, pos)
        if idx < 0:
            return
        trailer = TRAILER_PATTERN.match(records, idx + len(end))
        yield records[pos:idx], trailer
        pos = trailer.end() if trailer is not None else idx + len(end)


@dataclass
class DecodeResult:
    """Outcome of decoding one record."""

    index: int
    record: str
    summary: ChangeSummary = field(default_factory=ChangeSummary)
    value: Any = None
    error: Optional[FormatDecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class GitFormatDecoder:
    """Converts git ``--format`` output into typed objects.

    The decoder keeps no state between calls and may be shared.
    """

    def __init__(self, decoder_settings: Optional[DecoderSettings] = None):
        self.settings = decoder_settings or settings.decoder

    def decode_many(self, output: str, as_type: Type[T]) -> List[T]:
        """
        Decode every record of ``output`` into ``as_type``.

        Args:
            output: Text printed by git
            as_type: Any type pydantic can validate from JSON

        Returns:
            List[T]: Decoded objects in input order; empty for empty output

        Raises:
            MalformedRecordError: A non-empty record is not valid for ``as_type``
            RecordEncodingError: A record cannot be encoded as UTF-8
            OutputTooLargeError: ``output`` exceeds the configured limit
        """
        objects = []
        for result in self.iter_results(output, as_type):
            if result.error is not None:
                raise result.error
            objects.append(result.value)
        return objects

    def decode_one(self, output: str, as_type: Type[T]) -> Optional[T]:
        """Decode ``output`` and return its first object, if any."""
        objects = self.decode_many(output, as_type)
        return objects[0] if objects else None

    def iter_results(self, output: str, as_type: Type[T]) -> Iterator[DecodeResult]:
        """
        Decode records one by one, reporting failures instead of raising.

        Empty records are skipped. Every non-empty record yields exactly one
        ``DecodeResult`` carrying either the value or the error.
        """
        if not output:
            return

        if len(output) > self.settings.max_output_size:
            raise OutputTooLargeError(len(output), self.settings.max_output_size)

        records = output.strip()
        adapter = _adapter_for(as_type)
        decoded = 0
        skipped = 0

        for index, (record, trailer) in enumerate(split_records(records)):
            if not record:
                skipped += 1
                continue

            result = DecodeResult(index=index, record=record, summary=parse_change_summary(trailer))
            try:
                result.value = self._decode_record(index, record, adapter)
            except FormatDecodeError as e:
                logger.error(f"Failed to decode record {index}: {e}")
                result.error = e
                yield result
                continue

            if isinstance(result.value, ChangeSummaryReceiver):
                result.value.apply_change_summary(result.summary)

            decoded += 1
            yield result

        logger.debug(f"Decoded {decoded} records, skipped {skipped} empty records")

    def _decode_record(self, index: int, record: str, adapter: TypeAdapter) -> Any:
        escaped = self.escaped_sequence(record)

        try:
            data = escaped.encode("utf-8")
        except UnicodeEncodeError as e:
            raise RecordEncodingError(index, record, str(e)) from e

        try:
            return adapter.validate_json(data)
        except ValidationError as e:
            errors = e.errors()
            detail = errors[0]["msg"] if errors else str(e)
            raise MalformedRecordError(index, record, detail) from e

    def escaped_sequence(self, sequence: str) -> str:
        """
        Escape text printed by git so it becomes valid JSON.

        Args:
            sequence: One record as printed by git

        Returns:
            str: JSON text with structural quotes restored from the sentinel
        """
        sequence = sequence.strip()
        for old, new in ESCAPE_SEQUENCE:
            sequence = sequence.replace(old, new)
        return sequence
