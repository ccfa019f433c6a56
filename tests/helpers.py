"""Builders for git output used across the test modules."""

from typing import Dict

from services.format_decoder.encoder import GitFormatEncoder

Q = GitFormatEncoder.QUOTES
END = GitFormatEncoder.END_OF_LINE


def render_record(fields: Dict[str, str]) -> str:
    """Render a record the way git prints an encoded format string."""
    pairs = [f"{Q}{key}{Q}:{Q}{value}{Q}" for key, value in fields.items()]
    return "{" + ",".join(pairs) + "}" + END


def render_format(format_string: str, values: Dict[str, str]) -> str:
    """Substitute git placeholders in a format string, longest first."""
    for placeholder in sorted(values, key=len, reverse=True):
        format_string = format_string.replace(placeholder, values[placeholder])
    return format_string
