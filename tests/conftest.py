"""Shared fixtures for GitFormat tests."""

import pytest

from config.settings import DecoderSettings
from services.format_decoder.decoder import GitFormatDecoder
from services.format_decoder.encoder import GitFormatEncoder


@pytest.fixture
def decoder():
    """Create a decoder with default limits."""
    return GitFormatDecoder(DecoderSettings())


@pytest.fixture
def encoder():
    """Create an encoder."""
    return GitFormatEncoder()


@pytest.fixture
def sample_log_fields():
    """Sample git log values keyed by JSON name."""
    return {
        "hash": "4b825dc642cb6eb9a060e54bf8d69288fbee4904",
        "shortHash": "4b825dc",
        "treeHash": "d8329fc1cc938780ffdd9f94e0d364e0ea74f579",
        "parentHashes": "1a2b3c4d5e6f7a8b9c0d1e2f3a4b5c6d7e8f9a0b",
        "authorName": "Jane Doe",
        "authorEmail": "jane@example.com",
        "authorDate": "2018-03-01T10:00:00+03:00",
        "committerName": "Jane Doe",
        "committerEmail": "jane@example.com",
        "committerDate": "2018-03-01T10:05:00+03:00",
        "subject": "feat: add decoder",
        "body": "",
        "refs": "HEAD -> main, origin/main",
    }
