class RollupError(Exception):
    """Base class for every error raised while talking to the rollup server."""


class DecodeError(RollupError, ValueError):
    """A payload is not valid hex, or its bytes are not UTF-8 text."""


class ValidationError(RollupError, ValueError):
    """A decoded payload is well formed but not acceptable to the dApp."""


class TransportError(RollupError):
    """A network or HTTP level failure on finish, notice or report."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseFormatError(RollupError):
    """The rollup server answered with a body we cannot interpret."""


class UnknownRequestError(ResponseFormatError):
    def __init__(self, request_type: str):
        super().__init__(f"Unsupported request type: {request_type!r}")
        self.request_type = request_type
