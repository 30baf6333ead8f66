import logging
from typing import Optional, Union

import pydantic
import requests

from rollup.codec import str_to_hex
from rollup.exceptions import (
    ResponseFormatError,
    TransportError,
    UnknownRequestError,
)
from rollup.schemas import (
    REQUEST_TYPES,
    AdvanceRequest,
    FinishRequest,
    InspectRequest,
    Outcome,
    PayloadBody,
    rollup_request_adapter,
)

logger = logging.getLogger(__name__)

NO_PENDING_REQUEST = 202


class RollupClient:
    """
    Client for the three endpoints exposed by the rollup HTTP server.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        if not base_url:
            raise ValueError("Rollup server URL cannot be empty")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, path: str, body: pydantic.BaseModel) -> requests.Response:
        endpoint = f"{self.base_url}{path}"
        try:
            response = self.session.post(
                endpoint, json=body.model_dump(mode="json"), timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(f"POST {endpoint} failed: {e}") from e
        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"POST {endpoint} returned HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        return response

    def finish(self, status: Outcome) -> Union[AdvanceRequest, InspectRequest, None]:
        """
        Reports the outcome of the previous request and waits for the next one.
        Returns None when the server has no pending request.
        """
        response = self._post("/finish", FinishRequest(status=status))
        logger.debug(f"Received finish status {response.status_code}")
        if response.status_code == NO_PENDING_REQUEST:
            return None
        if response.status_code != 200:
            raise TransportError(
                f"Unexpected finish status {response.status_code}",
                status_code=response.status_code,
            )
        return self._parse_request(response)

    @staticmethod
    def _parse_request(response: requests.Response) -> Union[AdvanceRequest, InspectRequest]:
        try:
            body = response.json()
        except ValueError as e:
            raise ResponseFormatError(f"Finish response is not JSON: {e}") from e
        if not isinstance(body, dict):
            raise ResponseFormatError(
                f"Finish response must be an object, got {type(body).__name__}"
            )
        request_type = body.get("request_type")
        if isinstance(request_type, str) and request_type not in REQUEST_TYPES:
            raise UnknownRequestError(request_type)
        try:
            return rollup_request_adapter.validate_python(body)
        except pydantic.ValidationError as e:
            raise ResponseFormatError(f"Malformed rollup request: {e}") from e

    def send_notice(self, text: str) -> None:
        self._post("/notice", PayloadBody(payload=str_to_hex(text)))
        logger.debug(f"Notice sent: {text!r}")

    def send_report(self, text: str) -> None:
        self._post("/report", PayloadBody(payload=str_to_hex(text)))
        logger.debug(f"Report sent: {text!r}")
