"""
Domain exceptions raised by the services and translated to HTTP status
codes by the routers.
"""


class NollySpotError(Exception):
    """Base class for all domain errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(NollySpotError, ValueError):
    status_code = 400


class UnknownTokenError(ValidationFailed):
    pass


class NotFound(NollySpotError):
    status_code = 404


class AlreadyRefunded(NollySpotError):
    status_code = 400


class ChainError(NollySpotError):
    """An RPC failure, reverted transfer, or missing chain configuration."""

    status_code = 500
