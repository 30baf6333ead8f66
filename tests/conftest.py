"""
Pytest fixtures for the dApp node tests.
"""

from collections import deque

import pytest

from dapp.state import DAppState
from rollup.codec import str_to_hex
from rollup.exceptions import TransportError
from rollup.schemas import rollup_request_adapter


class FakeRollupClient:
    """In-memory stand-in for RollupClient that records every call."""

    base_url = "http://rollup.test"

    def __init__(self, responses=None):
        self.responses = deque(responses or [])
        self.finish_calls = []
        self.notices = []
        self.reports = []
        self.fail_notice = False
        self.fail_report = False

    def finish(self, status):
        self.finish_calls.append(status)
        if not self.responses:
            return None
        item = self.responses.popleft()
        if isinstance(item, Exception):
            raise item
        return item

    def send_notice(self, text):
        if self.fail_notice:
            raise TransportError("notice failed")
        self.notices.append(text)

    def send_report(self, text):
        if self.fail_report:
            raise TransportError("report failed")
        self.reports.append(text)


def advance_request(sentence, sender="0xABC", raw_payload=None):
    return rollup_request_adapter.validate_python(
        {
            "request_type": "advance_state",
            "data": {
                "metadata": {"msg_sender": sender, "input_index": 0},
                "payload": raw_payload if raw_payload is not None else str_to_hex(sentence),
            },
        }
    )


def inspect_request(route, raw_payload=None):
    return rollup_request_adapter.validate_python(
        {
            "request_type": "inspect_state",
            "data": {"payload": raw_payload if raw_payload is not None else str_to_hex(route)},
        }
    )


@pytest.fixture
def fake_client():
    return FakeRollupClient()


@pytest.fixture
def state():
    return DAppState()
