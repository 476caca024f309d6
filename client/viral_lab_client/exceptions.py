"""Errors raised by the Viral Lab client. Server-side detail never reaches these messages."""


class ViralLabClientError(Exception):
    pass


class RemoteCallError(ViralLabClientError):
    """A remote operation answered with an error envelope."""

    def __init__(self, operation, code, status_code, message=None):
        self.operation = operation
        self.code = code
        self.status_code = status_code
        super().__init__(message or f"{operation} failed with {code} ({status_code})")


class AnalysisFailedError(ViralLabClientError):
    def __init__(self, message="Analysis failed on server."):
        super().__init__(message)


class RemixFailedError(ViralLabClientError):
    def __init__(self, message="Remix generation failed on server."):
        super().__init__(message)


class FeatureUnavailableError(ViralLabClientError):
    def __init__(self, message="URL downloading is not yet implemented. Please upload a file for now."):
        super().__init__(message)


class UnsupportedFileError(ViralLabClientError):
    pass


class NoAnalysisError(ViralLabClientError):
    pass
