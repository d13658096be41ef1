"""Bootstrap error hierarchy.

Retryable (the coordinator's fetch loop retries these uniformly):
- TransportError: connection/timeout/non-2xx, or a body that is not a response envelope
- MalformedResponseError: envelope parsed but the result has the wrong shape
- RPCError: the node answered with a structured error object

Fatal:
- RetryExhaustedError: a fetch spent its whole retry budget
- VerificationError: writes were issued but the read-back does not match
"""


class BootstrapError(Exception):
    """Base class for all runtime bootstrap failures."""


class TransportError(BootstrapError):
    """HTTP round trip to the node failed."""


class MalformedResponseError(BootstrapError):
    """The RPC result could not be interpreted."""


class RPCError(BootstrapError):
    """The node returned a JSON-RPC error object."""

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"RPC error: {message} (code: {code})")


class RetryExhaustedError(BootstrapError):
    """A fetch operation failed on every attempt."""

    def __init__(self, operation: str, attempts: int, last_error: BaseException | None):
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"{operation} failed after {attempts} attempts: {last_error}")


class VerificationError(BootstrapError):
    """Runtime data was written but could not be read back."""
