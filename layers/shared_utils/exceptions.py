"""Custom exception classes for the Viral Lab service."""


class ViralLabError(Exception):
    """Base class for errors that are surfaced to the caller with a stable code."""
    code = "internal"
    status_code = 500
    error_type = "ServerError"
    default_message = "Oops! Something went wrong."

    def __init__(self, message=None, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class UnauthenticatedError(ViralLabError):
    """Raised when the caller has no identity."""
    code = "unauthenticated"
    status_code = 401
    error_type = "Unauthenticated"
    default_message = "The function must be called while authenticated."


class InvalidArgumentError(ViralLabError):
    """Raised when input validation fails."""
    code = "invalid-argument"
    status_code = 400
    error_type = "BadRequest"
    default_message = "Invalid request"


class InternalError(ViralLabError):
    """Raised for any downstream failure. Never carries the cause to the caller."""
    pass


class SchemaViolationError(ViralLabError):
    """Raised when the model answered with JSON that does not match the analysis schema."""
    code = "schema-violation"
    status_code = 502
    error_type = "SchemaViolation"
    default_message = "The model response did not match the expected schema."


class NotImplementedFeatureError(ViralLabError):
    code = "not-implemented"
    status_code = 501
    error_type = "NotImplemented"
    default_message = "This feature is not implemented yet."


class ConfigurationError(Exception):
    """Raised at cold start when required configuration is missing or malformed."""
    pass


class GatewayError(Exception):
    """Raised when the generative model call fails or returns nothing."""
    pass


class ResponseParseError(Exception):
    """Raised when the model output is not valid JSON."""
    pass
