"""Failures reported by the order gateway to collection views."""


class OrderGatewayError(Exception):
    """Base class for failed order commits."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class OrderRejected(OrderGatewayError):
    """The server refused the batch; retrying the same payload will not help."""


class Unauthorized(OrderRejected):
    """Not signed in, or the scope belongs to someone else."""


class ValidationFailed(OrderRejected):
    """Malformed payload, unknown ids, or a non-contiguous result."""


class TransientFailure(OrderGatewayError):
    """Network or server error; safe to retry with the identical payload."""
