from .models import ErrorResponse

NOT_FOUND = "Not Found"
INTERNAL_ERROR = "Something went wrong!"


class DemoError(Exception):
    """Base class for failures raised by this service outside request handling."""


class PortUnavailableError(DemoError):
    def __init__(self, host: str, port: int, reason: str) -> None:
        super().__init__(f"cannot listen on {host}:{port}: {reason}")
        self.host = host
        self.port = port
        self.reason = reason


def not_found(method: str, path: str) -> ErrorResponse:
    return ErrorResponse(error=NOT_FOUND, message=f"Route {method} {path} not found")


def internal_error(exc: BaseException) -> ErrorResponse:
    return ErrorResponse(error=INTERNAL_ERROR, message=str(exc))
