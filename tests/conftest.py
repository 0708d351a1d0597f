"""
Module: conftest.py
Description: Shared pytest fixtures for queued client tests.

Provides settings, clients with a recording backoff sleep and the
in-memory fake server. HTTP traffic is stubbed with pytest-httpx.
"""

import os

import pytest

from fake_server import FakeQueuedServer
from helpers import API_KEY, ENDPOINT, RecordingSleep
from queued_client import QueuedClient, QueuedSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep QUEUED_* variables from the host out of settings under test."""
    for key in list(os.environ):
        if key.upper().startswith("QUEUED_"):
            monkeypatch.delenv(key)


@pytest.fixture
def settings():
    return QueuedSettings(endpoint=ENDPOINT, api_key=API_KEY)


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def client(settings, sleep):
    return QueuedClient(settings, sleep=sleep)


@pytest.fixture
def retrying_client(sleep):
    """Client allowing three attempts per request."""
    return QueuedClient(
        QueuedSettings(endpoint=ENDPOINT, api_key=API_KEY, max_retries=3),
        sleep=sleep,
    )


@pytest.fixture
def fake_server(httpx_mock):
    """
    Fake queued server wired into httpx.

    Every request made by any httpx client during the test is answered
    by the fake server.
    """
    server = FakeQueuedServer(api_key=API_KEY)
    httpx_mock.add_callback(server.handle, is_reusable=True)
    return server
