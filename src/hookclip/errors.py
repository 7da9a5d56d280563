"""Custom exceptions for hookclip."""


class HookClipError(Exception):
    """Base exception for hookclip."""

    pass


class ValidationError(HookClipError):
    """Malformed moment, analysis result or video reference input.

    Not a ``ValueError`` subclass, so pydantic validators raising it
    propagate it unwrapped.
    """

    pass


class ConfigurationError(HookClipError):
    """Clip option value outside its enumerated set."""

    pass


class NotFoundError(HookClipError):
    """Unknown job or analysis id."""

    pass


class AnalysisError(HookClipError):
    """Analysis collaborator failed or timed out."""

    pass


class RenderBackendError(HookClipError):
    """Render backend refused or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
