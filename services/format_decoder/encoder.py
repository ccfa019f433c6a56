"""
Builds git ``--format`` strings whose output the decoder can read back.

Every record is printed as a JSON object in which the structural quotes are
replaced by the ``QUOTES`` sentinel, followed by the ``END_OF_LINE`` sentinel.
Quotes that git prints as part of the data stay literal and are escaped by
the decoder; the sentinel quotes are restored last.
"""

import logging
from typing import Mapping, Type

logger = logging.getLogger(__name__)


class GitFormatEncoder:
    """Encodes field to placeholder mappings into git format strings."""

    END_OF_LINE = "$(END_OF_LINE)$"
    QUOTES = "$(QUOTE)$"

    def encode(self, fields: Mapping[str, str]) -> str:
        """
        Build a format string from JSON keys and git placeholders.

        Args:
            fields: Ordered mapping of JSON key to git placeholder (``%H``,
                ``%(refname)``, ...)

        Returns:
            str: The value to pass as git's ``--format``

        Example:
            >>> GitFormatEncoder().encode({"hash": "%H"})
            '{$(QUOTE)$hash$(QUOTE)$:$(QUOTE)$%H$(QUOTE)$}$(END_OF_LINE)$'
        """
        if not fields:
            raise ValueError("At least one field is required")

        q = self.QUOTES
        pairs = []
        for key, placeholder in fields.items():
            for part in (key, placeholder):
                if self.QUOTES in part or self.END_OF_LINE in part:
                    raise ValueError(f"Field {key!r} contains a reserved sentinel")
            pairs.append(f"{q}{key}{q}:{q}{placeholder}{q}")

        return "{" + ",".join(pairs) + "}" + self.END_OF_LINE

    def encode_record(self, record_type: Type) -> str:
        """Build the format string for a record model using its ``git_format`` mapping."""
        git_format = getattr(record_type, "git_format", None)
        if not git_format:
            raise TypeError(f"{record_type.__name__} does not declare a git_format mapping")

        model_fields = getattr(record_type, "model_fields", {})
        fields = {}
        for name, placeholder in git_format.items():
            field = model_fields.get(name)
            key = field.alias if field is not None and field.alias else name
            fields[key] = placeholder

        logger.debug(f"Encoded {len(fields)} fields for {record_type.__name__}")
        return self.encode(fields)
