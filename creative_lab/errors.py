"""Error taxonomy for creative generation.

Every error carries one human-readable message that the UI shows as-is.
"""


class CreativeLabError(Exception):
    """Base error with a user-facing message."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(CreativeLabError):
    """Request has no product text, occasion or reference image."""

    status_code = 400


class EncodingError(CreativeLabError):
    """Reference image could not be read or decoded."""

    status_code = 400


class MalformedResponseError(CreativeLabError):
    """Copy model returned something that is not the expected JSON."""

    status_code = 502

    def __init__(self, message: str, raw_output: str = ""):
        self.raw_output = raw_output
        super().__init__(message)


class GenerationRefusedError(CreativeLabError):
    """Image model returned no image (safety policy or unclear prompt)."""

    status_code = 422


class ServiceError(CreativeLabError):
    """Network or service failure talking to a model."""

    status_code = 503


class AuthError(CreativeLabError):
    """Invalid credentials or missing session."""

    status_code = 401
