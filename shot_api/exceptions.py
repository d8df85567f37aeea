class ShotApiError(Exception):
    """Base error, carries the message that is safe to show a client."""

    message = "Unexpected error."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(ShotApiError):
    """The request parameters are missing or malformed."""


class RenderError(ShotApiError):
    """The browser failed to launch, navigate or capture."""

    message = "Failed to take screenshot."


class BatchRenderError(RenderError):
    message = "Failed to take batch screenshots."
