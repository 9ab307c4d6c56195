"""Domain exceptions raised by services; endpoints map them to HTTP errors."""


class TrainerAideError(Exception):
    """Base class for all application errors."""


class NotFoundError(TrainerAideError):
    """A referenced row does not exist."""


class ValidationError(TrainerAideError):
    """Input violates a business rule."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or [message]


class AIClientError(TrainerAideError):
    """The model API call failed."""

    def __init__(self, message: str, error_type: str = "unknown", code: str | None = None):
        super().__init__(message)
        self.error_type = error_type
        self.code = code


class AIResponseParseError(AIClientError):
    """The model answered but the content was not valid JSON."""

    def __init__(self, message: str, stop_reason: str | None = None):
        super().__init__(message, error_type="json_parse_error")
        self.stop_reason = stop_reason


class ProgramValidationError(ValidationError):
    """Generated program JSON failed structural validation."""


class ProgramGenerationError(TrainerAideError):
    """The pipeline stopped before a program could be saved."""
