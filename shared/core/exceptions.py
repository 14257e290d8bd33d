"""Service exceptions with user-ready messages."""


class ConfigurationError(Exception):
    """Raised when service configuration is invalid."""

    pass


class BindError(Exception):
    """Raised when the HTTP listener cannot acquire its configured address."""

    def __init__(self, host: str, port: int, cause: OSError) -> None:
        self.host = host
        self.port = port
        self.cause = cause
        super().__init__(f"Cannot listen on {host}:{port}: {cause.strerror or cause}")


class ServiceException(Exception):
    """Base exception class for errors translated into HTTP responses."""

    status_code = 500

    def __init__(self, message: str, error_code: str) -> None:
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ValidationException(ServiceException):
    """Exception raised for request validation failures."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="VALIDATION_FAILED")
