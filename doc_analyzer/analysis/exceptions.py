class AnalysisError(Exception):
    """Base exception for request-terminal analysis errors."""

    status_code: int = 500


class InputValidationError(AnalysisError):
    """Raised when a required field is missing, empty, or out of range."""

    status_code = 400


class FileTooLargeError(InputValidationError):
    """Raised when an uploaded file exceeds the configured size limit."""


class EmptyDocumentError(AnalysisError):
    """Raised when the main document yields no text after extraction."""

    status_code = 400


class ConfigurationError(AnalysisError):
    """Raised when the service is missing configuration it needs per request."""

    status_code = 500


class NonJsonResponseError(AnalysisError):
    """Raised when the model's reply cannot be parsed as JSON.

    ``details`` holds a bounded prefix of the raw reply for diagnosis.
    """

    status_code = 502

    def __init__(self, message: str, details: str) -> None:
        super().__init__(message)
        self.details = details
