"""Tests for the poll/dispatch loop."""

from unittest.mock import patch

import pytest

from dapp.dispatcher import LoopState, RollupDispatcher
from rollup.exceptions import ResponseFormatError, TransportError, UnknownRequestError
from rollup.schemas import Outcome
from tests.conftest import FakeRollupClient, advance_request, inspect_request


def _run_steps(dispatcher, n):
    return [dispatcher.step() for _ in range(n)]


class TestStep:
    def test_initial_finish_is_accept(self):
        client = FakeRollupClient()
        dispatcher = RollupDispatcher(client)
        assert dispatcher.step() is False
        assert client.finish_calls == [Outcome.ACCEPT]
        assert dispatcher.loop_state == LoopState.IDLE

    def test_outcome_is_sent_on_next_finish(self):
        client = FakeRollupClient([advance_request("12345"), advance_request("ok")])
        dispatcher = RollupDispatcher(client)
        assert _run_steps(dispatcher, 3) == [True, True, False]
        assert client.finish_calls == [Outcome.ACCEPT, Outcome.REJECT, Outcome.ACCEPT]
        assert dispatcher.processed == 2

    def test_go_team_scenario(self):
        client = FakeRollupClient([advance_request("go team", "0xABC"), inspect_request("total")])
        dispatcher = RollupDispatcher(client)
        _run_steps(dispatcher, 2)
        assert client.notices == ["GO TEAM"]
        assert client.reports == ["1"]
        assert dispatcher.state.count == 1
        assert dispatcher.state.submitters == ["0xABC"]

    def test_list_after_many_submissions(self):
        senders = [f"0x{i:02x}" for i in range(5)]
        client = FakeRollupClient(
            [advance_request("word", s) for s in senders]
            + [inspect_request("list"), inspect_request("total")]
        )
        dispatcher = RollupDispatcher(client)
        _run_steps(dispatcher, 7)
        assert client.reports == ['["0x00", "0x01", "0x02", "0x03", "0x04"]', "5"]

    def test_malformed_request_keeps_previous_status(self):
        client = FakeRollupClient(
            [advance_request("1"), ResponseFormatError("garbage"), None]
        )
        dispatcher = RollupDispatcher(client)
        assert _run_steps(dispatcher, 3) == [True, False, False]
        assert client.finish_calls == [Outcome.ACCEPT, Outcome.REJECT, Outcome.REJECT]

    def test_unknown_request_is_rejected(self):
        client = FakeRollupClient([UnknownRequestError("teleport_state")])
        dispatcher = RollupDispatcher(client)
        _run_steps(dispatcher, 2)
        assert client.finish_calls == [Outcome.ACCEPT, Outcome.REJECT]
        assert dispatcher.state.count == 0

    def test_handler_transport_failure_becomes_reject(self):
        client = FakeRollupClient([advance_request("hello")])
        client.fail_notice = True
        dispatcher = RollupDispatcher(client)
        _run_steps(dispatcher, 2)
        assert client.finish_calls == [Outcome.ACCEPT, Outcome.REJECT]

    def test_finish_transport_failure_propagates(self):
        client = FakeRollupClient([TransportError("down")])
        dispatcher = RollupDispatcher(client)
        with pytest.raises(TransportError):
            dispatcher.step()

    def test_idle_sleep_only_when_no_request(self):
        client = FakeRollupClient([inspect_request("total")])
        dispatcher = RollupDispatcher(client, idle_sleep=0.5)
        with patch("dapp.dispatcher.time.sleep") as sleep:
            _run_steps(dispatcher, 2)
        sleep.assert_called_once_with(0.5)

    def test_busy_poll_by_default(self):
        dispatcher = RollupDispatcher(FakeRollupClient())
        with patch("dapp.dispatcher.time.sleep") as sleep:
            _run_steps(dispatcher, 3)
        sleep.assert_not_called()


class TestRun:
    def test_run_until_stopped(self):
        client = FakeRollupClient([advance_request("a"), advance_request("b")])
        dispatcher = RollupDispatcher(client)
        original_send = client.send_notice

        def send_and_stop(text):
            original_send(text)
            if len(client.notices) == 2:
                dispatcher.stop()

        client.send_notice = send_and_stop
        dispatcher.run()
        assert client.notices == ["A", "B"]
        assert dispatcher.is_running is False

    def test_run_raises_on_transport_error(self):
        client = FakeRollupClient([None, TransportError("down")])
        dispatcher = RollupDispatcher(client)
        with pytest.raises(TransportError):
            dispatcher.run()
        assert dispatcher.is_running is False
        assert len(client.finish_calls) == 2
