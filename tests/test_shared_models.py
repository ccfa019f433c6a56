"""
Unit tests for shared record models.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from shared.models import (
    ChangeSummary,
    ChangeSummaryReceiver,
    GitLogRecord,
    GitRecord,
    GitReferenceRecord,
    GitStashRecord,
    RECORD_TYPES,
)


class TestChangeSummary:
    """Test cases for ChangeSummary."""

    def test_defaults_are_empty(self):
        summary = ChangeSummary()

        assert summary.files_changed is None
        assert summary.insertions is None
        assert summary.deletions is None
        assert summary.is_empty

    def test_partial_summary_is_not_empty(self):
        assert not ChangeSummary(files_changed=1).is_empty

    def test_negative_counts_rejected(self):
        with pytest.raises(ValidationError):
            ChangeSummary(insertions=-1)


class TestGitLogRecord:
    """Test cases for GitLogRecord."""

    @pytest.fixture
    def record(self):
        return GitLogRecord(
            hash="4b825dc642cb6eb9a060e54bf8d69288fbee4904",
            author_name="Jane Doe",
            author_date=datetime(2018, 3, 1, 7, 0, tzinfo=timezone.utc),
            subject="feat: add decoder",
        )

    def test_populate_by_alias(self, sample_log_fields):
        record = GitLogRecord.model_validate(sample_log_fields)

        assert record.short_hash == "4b825dc"
        assert record.author_email == "jane@example.com"
        assert record.parent_hashes == ["1a2b3c4d5e6f7a8b9c0d1e2f3a4b5c6d7e8f9a0b"]
        assert record.refs == ["HEAD -> main", "origin/main"]

    def test_populate_by_name(self, record):
        assert record.hash.startswith("4b825dc")
        assert record.parent_hashes == []
        assert record.committer_date is None

    def test_body_is_stripped(self, record):
        record = GitLogRecord.model_validate(dict(record.model_dump(), body="\n text \n"))

        assert record.body == "text"

    def test_is_receiver(self, record):
        assert isinstance(record, ChangeSummaryReceiver)

    def test_apply_change_summary(self, record):
        record.apply_change_summary(ChangeSummary(files_changed=2, insertions=4))

        assert record.files_changed == 2
        assert record.insertions == 4
        assert record.deletions is None
        assert record.total_changes == 4

    def test_total_changes_without_summary(self, record):
        assert record.total_changes is None

    def test_is_merge(self, record):
        assert record.is_merge is False
        merge = GitLogRecord.model_validate(dict(record.model_dump(), parent_hashes="aaaa bbbb"))
        assert merge.is_merge is True

    def test_missing_required_fields(self):
        with pytest.raises(ValidationError):
            GitLogRecord(hash="abcdef1")

    def test_dump_uses_aliases(self, record):
        data = record.model_dump(mode="json", by_alias=True)

        assert data["authorName"] == "Jane Doe"
        assert data["filesChanged"] is None


class TestGitReferenceRecord:
    """Test cases for GitReferenceRecord."""

    def test_head_marker(self):
        head = GitReferenceRecord.model_validate(
            {"name": "refs/heads/main", "objectHash": "abc1234", "isHead": "*", "upstream": "origin/main"}
        )
        other = GitReferenceRecord.model_validate(
            {"name": "refs/heads/dev", "objectHash": "def5678", "isHead": " ", "upstream": ""}
        )

        assert head.is_head is True
        assert head.upstream == "origin/main"
        assert other.is_head is False
        assert other.upstream is None

    def test_not_a_receiver(self):
        record = GitReferenceRecord(name="refs/tags/v1.0", object_hash="abc1234", object_type="tag")

        assert not isinstance(record, ChangeSummaryReceiver)


class TestGitStashRecord:
    """Test cases for GitStashRecord."""

    def test_index_from_selector(self):
        record = GitStashRecord(hash="abc1234", selector="stash@{3}")

        assert record.index == 3

    def test_index_without_selector_number(self):
        record = GitStashRecord(hash="abc1234", selector="refs/stash")

        assert record.index is None


class TestRecordTypes:
    """Test cases for the record type registry."""

    def test_registry(self):
        assert RECORD_TYPES == {
            "log": GitLogRecord,
            "ref": GitReferenceRecord,
            "stash": GitStashRecord,
        }

    @pytest.mark.parametrize("record_type", list(RECORD_TYPES.values()))
    def test_git_format_names_model_fields(self, record_type):
        """Every placeholder fills a declared field."""
        assert issubclass(record_type, GitRecord)
        assert set(record_type.git_format) <= set(record_type.model_fields)
        assert set(record_type.table_columns) <= set(record_type.model_fields)
