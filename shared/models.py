"""
Record models decoded from git ``--format`` output.

This module provides:
- The change summary parsed from git's diffstat trailer
- The capability interface for records that accept a change summary
- Typed records for ``git log``, ``git for-each-ref`` and ``git stash list``
- The placeholder mapping each record type is built from
"""

import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import ClassVar, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel


_STASH_SELECTOR = re.compile(r"@\{([0-9]+)\}$")


class ChangeSummary(BaseModel):
    """Counters from a ``N files changed, N insertions(+), N deletions(-)`` line."""

    files_changed: Optional[int] = Field(None, ge=0, description="Files changed")
    insertions: Optional[int] = Field(None, ge=0, description="Lines inserted")
    deletions: Optional[int] = Field(None, ge=0, description="Lines deleted")

    @property
    def is_empty(self) -> bool:
        return self.files_changed is None and self.insertions is None and self.deletions is None


class ChangeSummaryReceiver(ABC):
    """Capability of a decoded record to take the diffstat counters of its entry."""

    @abstractmethod
    def apply_change_summary(self, summary: ChangeSummary) -> None:
        """Store the counters parsed from the trailer that followed the record."""


class GitRecord(BaseModel):
    """Base for records decoded from a custom ``--format`` string.

    ``git_format`` maps each field name to the git placeholder that fills it.
    JSON keys are the camelCase aliases of the field names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    git_format: ClassVar[Dict[str, str]] = {}
    table_columns: ClassVar[List[str]] = []


class GitLogRecord(GitRecord, ChangeSummaryReceiver):
    """A commit as printed by ``git log`` or ``git show``."""

    git_format: ClassVar[Dict[str, str]] = {
        "hash": "%H",
        "short_hash": "%h",
        "tree_hash": "%T",
        "parent_hashes": "%P",
        "author_name": "%an",
        "author_email": "%ae",
        "author_date": "%aI",
        "committer_name": "%cn",
        "committer_email": "%ce",
        "committer_date": "%cI",
        "subject": "%s",
        "body": "%b",
        "refs": "%D",
    }
    table_columns: ClassVar[List[str]] = [
        "short_hash", "author_name", "author_date", "subject",
        "files_changed", "insertions", "deletions",
    ]

    hash: str = Field(..., min_length=4, max_length=64, description="Commit hash")
    short_hash: str = Field(default="", description="Abbreviated commit hash")
    tree_hash: str = Field(default="", description="Tree hash")
    parent_hashes: List[str] = Field(default_factory=list, description="Parent commit hashes")
    author_name: str = Field(..., description="Author name")
    author_email: str = Field(default="", description="Author email")
    author_date: datetime = Field(..., description="Author date")
    committer_name: str = Field(default="", description="Committer name")
    committer_email: str = Field(default="", description="Committer email")
    committer_date: Optional[datetime] = Field(None, description="Committer date")
    subject: str = Field(default="", description="First line of the commit message")
    body: str = Field(default="", description="Commit message body")
    refs: List[str] = Field(default_factory=list, description="Ref names pointing at the commit")

    files_changed: Optional[int] = Field(None, ge=0, description="Files changed")
    insertions: Optional[int] = Field(None, ge=0, description="Lines inserted")
    deletions: Optional[int] = Field(None, ge=0, description="Lines deleted")

    @field_validator("parent_hashes", mode="before")
    @classmethod
    def split_parent_hashes(cls, v):
        """``%P`` prints parents separated by single spaces."""
        if isinstance(v, str):
            return v.split()
        return v

    @field_validator("refs", mode="before")
    @classmethod
    def split_refs(cls, v):
        if isinstance(v, str):
            return [ref.strip() for ref in v.split(",") if ref.strip()]
        return v

    @field_validator("body")
    @classmethod
    def strip_body(cls, v):
        return v.strip()

    @computed_field
    @property
    def total_changes(self) -> Optional[int]:
        """Insertions plus deletions, when git reported either."""
        if self.insertions is None and self.deletions is None:
            return None
        return (self.insertions or 0) + (self.deletions or 0)

    @computed_field
    @property
    def is_merge(self) -> bool:
        return len(self.parent_hashes) > 1

    def apply_change_summary(self, summary: ChangeSummary) -> None:
        self.files_changed = summary.files_changed
        self.insertions = summary.insertions
        self.deletions = summary.deletions


class GitReferenceRecord(GitRecord):
    """A ref as printed by ``git for-each-ref``."""

    git_format: ClassVar[Dict[str, str]] = {
        "name": "%(refname)",
        "short_name": "%(refname:short)",
        "object_type": "%(objecttype)",
        "object_hash": "%(objectname)",
        "upstream": "%(upstream:short)",
        "is_head": "%(HEAD)",
    }
    table_columns: ClassVar[List[str]] = [
        "short_name", "object_type", "object_hash", "upstream", "is_head",
    ]

    name: str = Field(..., min_length=1, description="Full ref name")
    short_name: str = Field(default="", description="Abbreviated ref name")
    object_type: str = Field(default="commit", description="Type of the referenced object")
    object_hash: str = Field(..., description="Hash of the referenced object")
    upstream: Optional[str] = Field(None, description="Upstream branch, if tracking one")
    is_head: bool = Field(default=False, description="Whether HEAD points at this ref")

    @field_validator("upstream", mode="before")
    @classmethod
    def empty_upstream_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("is_head", mode="before")
    @classmethod
    def parse_head_marker(cls, v):
        # %(HEAD) prints "*" for the checked out branch and a blank otherwise
        if isinstance(v, str):
            return v.strip() == "*"
        return v


class GitStashRecord(GitRecord):
    """A stash entry as printed by ``git stash list``."""

    git_format: ClassVar[Dict[str, str]] = {
        "hash": "%H",
        "selector": "%gd",
        "subject": "%gs",
        "author_date": "%aI",
    }
    table_columns: ClassVar[List[str]] = ["selector", "subject", "author_date"]

    hash: str = Field(..., min_length=4, max_length=64, description="Stash commit hash")
    selector: str = Field(..., description="Reflog selector, e.g. stash@{0}")
    subject: str = Field(default="", description="Stash message")
    author_date: Optional[datetime] = Field(None, description="Stash creation date")

    @computed_field
    @property
    def index(self) -> Optional[int]:
        match = _STASH_SELECTOR.search(self.selector)
        if match is None:
            return None
        return int(match.group(1))


RECORD_TYPES: Dict[str, Type[GitRecord]] = {
    "log": GitLogRecord,
    "ref": GitReferenceRecord,
    "stash": GitStashRecord,
}


__all__ = [
    'ChangeSummary', 'ChangeSummaryReceiver',
    'GitRecord', 'GitLogRecord', 'GitReferenceRecord', 'GitStashRecord',
    'RECORD_TYPES',
]
