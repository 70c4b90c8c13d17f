"""Shared fixtures for provisioning tests."""

import io
import os
import sys

import pytest

# Ensure tests/provision/ is on sys.path so test files can import the
# fakes and archive helpers unambiguously.
sys.path.insert(0, os.path.dirname(__file__))

from fake_answer_provider import FakeAnswerProvider  # noqa: E402
from fake_remote_fetcher import FakeRemoteFetcher  # noqa: E402

from bvdb_installer.provision.reporter import Reporter  # noqa: E402


def pytest_collection_modifyitems(items):
    for item in items:
        if "provision" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def fake_fetcher():
    return FakeRemoteFetcher()


@pytest.fixture
def fake_answers():
    return FakeAnswerProvider()


@pytest.fixture
def reporter():
    return Reporter(output=io.StringIO())
