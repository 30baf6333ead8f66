"""
Advance and inspect handlers.

Each handler receives the typed request data, the dispatcher's state and the
rollup client, emits exactly one notice or report, and returns the outcome
to be sent on the next finish call. Transport errors propagate.
"""

import json
import logging
import math
import re
import string

from dapp.state import DAppState
from rollup.client import RollupClient
from rollup.codec import hex_to_str
from rollup.exceptions import DecodeError, ValidationError
from rollup.schemas import AdvanceData, InspectData, Outcome

logger = logging.getLogger(__name__)

INVALID_SENTENCE_MESSAGE = "sentence is not in hex format"
ROUTE_NOT_IMPLEMENTED = "route not implemented"

_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)

_NUMERIC_LITERAL = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?|(?P<special>[+-]?inf(?:inity)?|nan)",
    re.ASCII | re.IGNORECASE,
)


def is_numeric(sentence: str) -> bool:
    """
    True for an ASCII decimal float literal, or inf/infinity/nan. Finite
    literals that overflow a double do not count.
    """
    match = _NUMERIC_LITERAL.fullmatch(sentence)
    if match is None:
        return False
    if match.group("special"):
        return True
    return math.isfinite(float(sentence))


def validate_sentence(sentence: str) -> str:
    if is_numeric(sentence):
        raise ValidationError(f"Numeric sentence is not accepted: {sentence!r}")
    return sentence


def to_upper(sentence: str) -> str:
    """Upper-cases ASCII letters only, independent of locale."""
    return sentence.translate(_ASCII_UPPER)


def handle_advance(data: AdvanceData, state: DAppState, client: RollupClient) -> Outcome:
    logger.info(f"Received advance request data {data.model_dump()}")
    try:
        sentence = validate_sentence(hex_to_str(data.payload))
    except (DecodeError, ValidationError) as e:
        logger.warning(f"Rejecting advance from {data.sender}: {e}")
        client.send_report(INVALID_SENTENCE_MESSAGE)
        return Outcome.REJECT

    state.record_submission(data.sender)
    client.send_notice(to_upper(sentence))
    return Outcome.ACCEPT


def _inspect_routes(state: DAppState):
    return {
        "list": lambda: json.dumps(state.snapshot()),
        "total": lambda: str(state.count),
    }


def handle_inspect(data: InspectData, state: DAppState, client: RollupClient) -> Outcome:
    logger.info(f"Received inspect request data {data.model_dump()}")
    try:
        route = hex_to_str(data.payload)
    except DecodeError as e:
        logger.warning(f"Rejecting inspect: {e}")
        client.send_report(str(e))
        return Outcome.REJECT

    render = _inspect_routes(state).get(route)
    client.send_report(render() if render else ROUTE_NOT_IMPLEMENTED)
    return Outcome.ACCEPT
