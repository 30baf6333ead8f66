import logging
import time
from enum import Enum
from typing import Optional, Union

from dapp.handlers import handle_advance, handle_inspect
from dapp.state import DAppState
from rollup.client import RollupClient
from rollup.exceptions import ResponseFormatError, TransportError, UnknownRequestError
from rollup.schemas import AdvanceRequest, InspectRequest, Outcome

logger = logging.getLogger(__name__)


class LoopState(str, Enum):
    IDLE = "idle"
    POLLING = "polling"
    DISPATCHING = "dispatching"


class RollupDispatcher:
    """
    Polls the rollup server for requests and routes them to the handlers,
    one request at a time.
    """

    def __init__(
        self,
        client: RollupClient,
        state: Optional[DAppState] = None,
        idle_sleep: float = 0.0,
    ):
        self.client = client
        self.state = state if state is not None else DAppState()
        self.idle_sleep = idle_sleep
        self.status = Outcome.ACCEPT
        self.loop_state = LoopState.IDLE
        self.is_running = False
        self.processed = 0

    def stop(self):
        self.is_running = False

    def run(self):
        """Runs until stop() is called. A TransportError on finish is fatal."""
        self.is_running = True
        logger.info(f"Polling rollup server at {self.client.base_url}")
        try:
            while self.is_running:
                self.step()
        except TransportError as e:
            logger.error(f"Rollup server unreachable, giving up: {e}")
            raise
        finally:
            self.is_running = False
            self.loop_state = LoopState.IDLE

    def step(self) -> bool:
        """
        Performs one poll/dispatch cycle. Returns True when a request was handled.
        """
        self.loop_state = LoopState.POLLING
        try:
            request = self.client.finish(self.status)
        except UnknownRequestError as e:
            logger.warning(f"{e}; rejecting")
            self.status = Outcome.REJECT
            self.loop_state = LoopState.IDLE
            return False
        except ResponseFormatError as e:
            logger.error(f"Discarding malformed rollup request: {e}")
            self.loop_state = LoopState.IDLE
            return False

        if request is None:
            logger.debug("No pending rollup request, trying again")
            self.loop_state = LoopState.IDLE
            if self.idle_sleep > 0:
                time.sleep(self.idle_sleep)
            return False

        self.loop_state = LoopState.DISPATCHING
        self.status = self._dispatch(request)
        self.processed += 1
        self.loop_state = LoopState.IDLE
        return True

    def _dispatch(self, request: Union[AdvanceRequest, InspectRequest]) -> Outcome:
        handler = handle_advance if isinstance(request, AdvanceRequest) else handle_inspect
        try:
            return handler(request.data, self.state, self.client)
        except TransportError as e:
            logger.error(f"Handler error: {e}")
            return Outcome.REJECT
